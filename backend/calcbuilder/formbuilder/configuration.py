"""
Form configuration and its owning store.

``FormConfiguration`` is the typed, immutable settings object of a calculator
being built. It is serialized with camelCase wire names (``zipAreas``,
``rutSettings`` ...) and accepts either those or the snake_case attribute
names on input. Unknown keys are rejected.

``ConfigurationStore`` is the sole owner of the current configuration. Steps
receive a read-only ``snapshot()`` and write back through ``apply_change``,
a shallow last-write-wins merge. Writes are serialized by a lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

DEFAULT_FIELD_ORDER = [
    "zipCode",
    "serviceSelector",
    "area",
    "frequency",
    "addOns",
    "windowCleaning",
    "rutToggle",
]


class InvalidConfigurationError(Exception):
    """Raised when a configuration change has unknown keys or invalid values"""
    pass


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class RutSettings(_WireModel):
    enabled: bool = False
    discount_percent: int = Field(50, ge=0, le=100)
    annual_cap: int = Field(50000, ge=0)


class PlacedField(_WireModel):
    """A field instance dropped onto the form canvas"""
    id: str
    type: str
    label: str
    options: list[str] = Field(default_factory=list)


class FormConfiguration(_WireModel):
    # Basic info
    name: str = ""
    slug: str = ""
    description: str = ""

    # Services with pricing models
    services: list[dict[str, Any]] = Field(default_factory=list)
    selected_service_ids: list[str] = Field(default_factory=list)

    # Global options
    frequency_multipliers: list[dict[str, Any]] = Field(default_factory=list)
    add_ons: dict[str, Any] = Field(default_factory=dict)
    window_cleaning: dict[str, Any] = Field(default_factory=dict)
    zip_areas: list[str] = Field(default_factory=list)
    rut_settings: RutSettings = Field(default_factory=RutSettings)

    # Field ordering & customization
    field_order: list[str] = Field(default_factory=lambda: list(DEFAULT_FIELD_ORDER))
    field_labels: dict[str, str] = Field(default_factory=dict)
    field_help: dict[str, str] = Field(default_factory=dict)
    fields: list[PlacedField] = Field(default_factory=list)

    status: Literal["draft", "published"] = "draft"

    @field_validator("zip_areas")
    @classmethod
    def strip_zip_areas(cls, v: list[str]) -> list[str]:
        # Persisted postal codes are trimmed and never blank
        return [z.strip() for z in v if z and z.strip()]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_wire(cls, data: Optional[Mapping[str, Any]]) -> "FormConfiguration":
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as e:
            raise InvalidConfigurationError(str(e)) from e


# Accepted keys (wire and attribute names) -> attribute name
_KEYS: dict[str, str] = {}
for _name in FormConfiguration.model_fields:
    _KEYS[_name] = _name
    _KEYS[to_camel(_name)] = _name


def normalize_keys(partial: Mapping[str, Any]) -> dict[str, Any]:
    """Map wire or attribute names onto attribute names, rejecting unknown keys."""
    unknown = [k for k in partial if k not in _KEYS]
    if unknown:
        raise InvalidConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    return {_KEYS[k]: v for k, v in partial.items()}


Listener = Callable[[FormConfiguration], None]


class ConfigurationStore:
    """Owns one FormConfiguration and serializes every write to it."""

    def __init__(self, initial: Union[FormConfiguration, Mapping[str, Any], None] = None):
        if isinstance(initial, FormConfiguration):
            self._config = initial
        else:
            self._config = FormConfiguration.from_wire(initial)
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    def snapshot(self) -> FormConfiguration:
        with self._lock:
            return self._config.model_copy(deep=True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after each write; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def apply_change(self, partial: Mapping[str, Any]) -> FormConfiguration:
        """
        Shallow-merge ``partial`` into the configuration.

        Each given key replaces the stored value wholesale (last write wins).
        Raises InvalidConfigurationError for unknown keys or invalid values,
        leaving the stored configuration untouched.
        """
        updates = normalize_keys(partial)
        with self._lock:
            merged = self._config.model_dump()
            merged.update(updates)
            try:
                new_config = FormConfiguration.model_validate(merged)
            except ValidationError as e:
                raise InvalidConfigurationError(str(e)) from e
            self._config = new_config
            listeners = list(self._listeners)

        logger.debug(f"Configuration updated: {', '.join(sorted(updates))}")
        # Notify outside the lock so listeners may write again
        for listener in listeners:
            listener(new_config)
        return new_config
