"""
Field catalog: the element types an operator can place on a booking form.
"""

from __future__ import annotations

from dataclasses import dataclass


class UnknownFieldTypeError(Exception):
    """Raised when a field type identifier is not in the catalog"""
    pass


@dataclass(frozen=True)
class FieldTypeDescriptor:
    type: str
    label: str


FIELD_TYPES: tuple[FieldTypeDescriptor, ...] = (
    FieldTypeDescriptor("text", "Text Input"),
    FieldTypeDescriptor("checkbox", "Checkbox"),
    FieldTypeDescriptor("date", "Date Picker"),
    FieldTypeDescriptor("time", "Time Picker"),
    FieldTypeDescriptor("dropdown", "Dropdown"),
    FieldTypeDescriptor("slider", "Slider"),
    FieldTypeDescriptor("zipCode", "ZIP Code"),
    FieldTypeDescriptor("serviceSelector", "Service Selector"),
    FieldTypeDescriptor("group", "Group"),
    FieldTypeDescriptor("divider", "Divider"),
)

_BY_TYPE = {f.type: f for f in FIELD_TYPES}


def get_field_type(field_type: str) -> FieldTypeDescriptor:
    """Look up a descriptor by identifier."""
    try:
        return _BY_TYPE[field_type]
    except KeyError:
        raise UnknownFieldTypeError(f"Unknown field type: {field_type!r}") from None
