"""
ZIP code validation step of the form-builder wizard.

The step mirrors two pieces of local state, ``enabled`` and ``raw_input``,
and after every change pushes ``{"zipAreas": [...]}`` back through the
``apply_change`` callback it was given. The configuration is only read at
construction; later external edits to ``zipAreas`` are not picked up
(see ``is_stale``).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from calcbuilder.formbuilder.configuration import FormConfiguration

logger = logging.getLogger(__name__)

ApplyChange = Callable[[Mapping[str, Any]], Any]
Navigate = Callable[[], Any]


def parse_zip_areas(raw: Optional[str]) -> list[str]:
    """
    Split free text on commas into postal codes.

    Pieces are trimmed and blanks dropped; order and duplicates are kept.
    """
    if not raw:
        return []
    return [piece.strip() for piece in raw.split(",") if piece.strip()]


class ValidationState(str, Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"


class ZipCodeValidationStep:
    """Toggle-driven editor for the allowed postal codes of a calculator."""

    title = "Enable ZIP Code Validation"

    def __init__(
        self,
        config: FormConfiguration,
        apply_change: ApplyChange,
        go_next: Navigate,
        go_previous: Navigate,
    ):
        existing = list(config.zip_areas)
        self.enabled = bool(existing)
        self.raw_input = ", ".join(existing)
        self._apply_change = apply_change
        self._go_next = go_next
        self._go_previous = go_previous
        self._last_written = existing

    @property
    def state(self) -> ValidationState:
        return ValidationState.ENABLED if self.enabled else ValidationState.DISABLED

    @property
    def derived_zip_areas(self) -> list[str]:
        if not self.enabled:
            return []
        return parse_zip_areas(self.raw_input)

    def set_enabled(self, enabled: bool) -> list[str]:
        self.enabled = bool(enabled)
        return self._sync()

    def set_raw_input(self, text: Optional[str]) -> list[str]:
        self.raw_input = text or ""
        return self._sync()

    def _sync(self) -> list[str]:
        zip_areas = self.derived_zip_areas
        self._last_written = zip_areas
        logger.debug(f"ZIP validation {self.state.value}: {len(zip_areas)} code(s)")
        self._apply_change({"zipAreas": list(zip_areas)})
        return zip_areas

    def is_stale(self, config: FormConfiguration) -> bool:
        """True when ``config`` no longer holds what this step last wrote."""
        return list(config.zip_areas) != self._last_written

    def previous(self) -> None:
        self._go_previous()

    def next(self) -> None:
        # An enabled step with no codes means every ZIP is accepted
        self._go_next()

    def render(self) -> dict[str, Any]:
        zip_areas = self.derived_zip_areas
        if not self.enabled:
            hint = "ZIP code validation is off. Customers from any area can book."
        elif zip_areas:
            hint = "Customers must enter one of these ZIP codes to proceed."
        else:
            hint = "No ZIP codes configured. All ZIP codes are accepted."
        return {
            "title": self.title,
            "state": self.state.value,
            "enabled": self.enabled,
            "raw_input": self.raw_input,
            "zip_areas": zip_areas,
            "hint": hint,
        }
