"""
Form canvas: the drop target holding the fields placed on a form.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Iterable, Mapping, Optional

from calcbuilder.formbuilder.configuration import PlacedField
from calcbuilder.formbuilder.drag_drop import InMemoryDragCoordinator
from calcbuilder.formbuilder.field_catalog import get_field_type

logger = logging.getLogger(__name__)

CANVAS_ID = "canvas"


def generate_field(field_type: str) -> PlacedField:
    """New field with a unique id and a label derived from its type."""
    get_field_type(field_type)
    return PlacedField(
        id=f"{field_type}_{uuid.uuid4().hex[:12]}",
        type=field_type,
        label=field_type[:1].upper() + field_type[1:],
    )


def array_move(items: list, old_index: int, new_index: int) -> list:
    """Copy of ``items`` with the element at ``old_index`` moved to ``new_index``."""
    result = list(items)
    result.insert(new_index, result.pop(old_index))
    return result


class FormCanvas:
    """
    Ordered list of placed fields.

    Every mutation writes ``{"fields": [...]}`` through ``apply_change`` so the
    configuration store stays the source of truth.
    """

    def __init__(
        self,
        fields: Iterable[PlacedField],
        apply_change: Callable[[Mapping[str, Any]], Any],
        coordinator: Optional[InMemoryDragCoordinator] = None,
    ):
        self.fields: list[PlacedField] = list(fields)
        self._apply_change = apply_change
        if coordinator is not None:
            coordinator.register_drop_target(CANVAS_ID, self.handle_drop)

    def handle_drop(self, source_id: str, data: dict) -> Optional[PlacedField]:
        """
        Palette tokens dropped here become new fields; anything else is ignored.
        """
        if not data.get("from_palette"):
            return None
        return self.add_field(source_id)

    def add_field(self, field_type: str) -> PlacedField:
        placed = generate_field(field_type)
        self._commit(self.fields + [placed])
        logger.info(f"Placed field {placed.id} on canvas")
        return placed

    def index_of(self, field_id: str) -> int:
        for i, f in enumerate(self.fields):
            if f.id == field_id:
                return i
        raise KeyError(field_id)

    def move(self, old_index: int, new_index: int) -> list[PlacedField]:
        size = len(self.fields)
        if not (0 <= old_index < size and 0 <= new_index < size):
            raise IndexError(f"Field index out of range (0-{size - 1})")
        if old_index != new_index:
            self._commit(array_move(self.fields, old_index, new_index))
        return self.fields

    def move_onto(self, active_id: str, over_id: str) -> list[PlacedField]:
        """Reorder by dropping the field ``active_id`` onto the field ``over_id``."""
        if active_id == over_id:
            return self.fields
        return self.move(self.index_of(active_id), self.index_of(over_id))

    def delete(self, index: int) -> PlacedField:
        if not 0 <= index < len(self.fields):
            raise IndexError(f"Field index out of range: {index}")
        removed = self.fields[index]
        self._commit([f for i, f in enumerate(self.fields) if i != index])
        return removed

    def _commit(self, fields: list[PlacedField]) -> None:
        self.fields = fields
        self._apply_change({"fields": [f.model_dump() for f in fields]})

    def render(self) -> dict[str, Any]:
        return {
            "id": CANVAS_ID,
            "empty_hint": "Drag fields here to build your form" if not self.fields else None,
            "fields": [f.model_dump(by_alias=True) for f in self.fields],
        }
