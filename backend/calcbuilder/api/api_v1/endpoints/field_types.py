"""
Field catalog and palette endpoints
"""

from fastapi import APIRouter
from dataclasses import asdict

from calcbuilder.formbuilder.drag_drop import FieldPalette, InMemoryDragCoordinator
from calcbuilder.formbuilder.field_catalog import FIELD_TYPES

router = APIRouter()

@router.get("/")
async def list_field_types():
    """
    Field types available to the form builder, in catalog order
    """
    return {"field_types": [asdict(f) for f in FIELD_TYPES], "total": len(FIELD_TYPES)}

@router.get("/palette")
async def get_palette():
    """
    Palette panel: one draggable token per field type
    """
    return FieldPalette(InMemoryDragCoordinator()).render()
