"""
Form builder core: field catalog, palette, canvas, configuration store,
the wizard steps and the wizard that ties them together.
"""

from .field_catalog import FIELD_TYPES, FieldTypeDescriptor, UnknownFieldTypeError, get_field_type
from .configuration import (
    ConfigurationStore, FormConfiguration, InvalidConfigurationError, PlacedField, RutSettings
)
from .drag_drop import (
    DragCoordinator, DragDropError, DraggableFieldToken, FieldPalette, InMemoryDragCoordinator
)
from .canvas import CANVAS_ID, FormCanvas, generate_field
from .zip_validation import ValidationState, ZipCodeValidationStep, parse_zip_areas
from .service_selection import ServiceSelectionStep
from .preview import calculate_test_price, preview_fields, zip_accepted
from .wizard import FormBuilderWizard

__all__ = [
    "FIELD_TYPES", "FieldTypeDescriptor", "UnknownFieldTypeError", "get_field_type",
    "ConfigurationStore", "FormConfiguration", "InvalidConfigurationError", "PlacedField", "RutSettings",
    "DragCoordinator", "DragDropError", "DraggableFieldToken", "FieldPalette", "InMemoryDragCoordinator",
    "CANVAS_ID", "FormCanvas", "generate_field",
    "ValidationState", "ZipCodeValidationStep", "parse_zip_areas",
    "ServiceSelectionStep", "calculate_test_price", "preview_fields", "zip_accepted",
    "FormBuilderWizard",
]
