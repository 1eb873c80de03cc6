"""
Drag-and-drop capability layer for the form builder.

Drag sources and drop targets only talk to a ``DragCoordinator``:

    coordinator.begin_drag("text", {"from_palette": True})   <- palette token
    coordinator.on_drop("text", "canvas")                     <- drop target

The concrete interaction layer (Streamlit buttons, an HTTP request, a test)
decides when each call happens. ``InMemoryDragCoordinator`` keeps the single
active drag session and dispatches drops to registered targets.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from calcbuilder.formbuilder.field_catalog import FIELD_TYPES, FieldTypeDescriptor

logger = logging.getLogger(__name__)

DropHandler = Callable[[str, dict], Any]


class DragDropError(Exception):
    """Raised for drops without an active drag or onto an unknown target"""
    pass


@dataclass
class DragSession:
    id: str
    data: dict = field(default_factory=dict)


class DragCoordinator(ABC):
    """Capability interface between drag sources and drop targets."""

    @abstractmethod
    def begin_drag(self, source_id: str, data: Optional[dict] = None) -> None:
        ...

    @abstractmethod
    def end_drag(self) -> None:
        ...

    @abstractmethod
    def on_drop(self, source_id: str, target_id: str) -> Any:
        ...

    @property
    @abstractmethod
    def active(self) -> Optional[DragSession]:
        ...


class InMemoryDragCoordinator(DragCoordinator):
    """Single-session coordinator; one drag may be active at a time."""

    def __init__(self):
        self._active: Optional[DragSession] = None
        self._targets: dict[str, DropHandler] = {}

    @property
    def active(self) -> Optional[DragSession]:
        return self._active

    def register_drop_target(self, target_id: str, handler: DropHandler) -> None:
        self._targets[target_id] = handler

    def begin_drag(self, source_id: str, data: Optional[dict] = None) -> None:
        # A new drag replaces any abandoned session
        self._active = DragSession(id=source_id, data=dict(data or {}))
        logger.debug(f"Drag started: {source_id}")

    def end_drag(self) -> None:
        self._active = None

    def on_drop(self, source_id: str, target_id: str) -> Any:
        """
        Deliver a drop to ``target_id`` and close the session.

        The payload passed to the target is the data announced at drag-start
        when ``source_id`` matches the active session, else an empty mapping.
        """
        handler = self._targets.get(target_id)
        if handler is None:
            self.end_drag()
            raise DragDropError(f"Unknown drop target: {target_id!r}")

        data = {}
        if self._active is not None and self._active.id == source_id:
            data = self._active.data
        try:
            return handler(source_id, data)
        finally:
            self.end_drag()

    def drop(self, target_id: str) -> Any:
        """Drop the active drag session onto ``target_id``."""
        if self._active is None:
            raise DragDropError("No active drag to drop")
        return self.on_drop(self._active.id, target_id)


class DraggableFieldToken:
    """One catalog entry exposed as a drag source identified by its type."""

    def __init__(self, descriptor: FieldTypeDescriptor, coordinator: DragCoordinator):
        self.descriptor = descriptor
        self.coordinator = coordinator

    @property
    def id(self) -> str:
        return self.descriptor.type

    @property
    def is_lifted(self) -> bool:
        active = self.coordinator.active
        return active is not None and active.id == self.id

    def begin_drag(self) -> None:
        self.coordinator.begin_drag(self.id, {"from_palette": True})

    def render(self) -> dict:
        return {
            "id": self.id,
            "label": self.descriptor.label,
            "lifted": self.is_lifted,
        }


class FieldPalette:
    """Renders the field catalog as draggable tokens, in catalog order."""

    title = "Elements"

    def __init__(
        self,
        coordinator: DragCoordinator,
        catalog: Iterable[FieldTypeDescriptor] = FIELD_TYPES,
    ):
        self.coordinator = coordinator
        self.catalog = tuple(catalog)

    def tokens(self) -> list[DraggableFieldToken]:
        return [DraggableFieldToken(d, self.coordinator) for d in self.catalog]

    def render(self) -> dict:
        return {
            "title": self.title,
            "tokens": [t.render() for t in self.tokens()],
        }
