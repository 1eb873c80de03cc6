"""
Calculator (form builder) endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from calcbuilder.core.database import get_db
from calcbuilder.formbuilder.field_catalog import UnknownFieldTypeError
from calcbuilder.schemas.calculator import (
    CalculatorCreate, CalculatorResponse, CalculatorList, ConfigChange,
    ZipValidationUpdate, ZipValidationResponse, FieldDrop, FieldMove
)
from calcbuilder.services.calculator_service import (
    CalculatorService, CalculatorServiceError, CalculatorNotFoundError, SlugConflictError
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _raise_http(e: CalculatorServiceError):
    """Translate service errors to HTTP errors"""
    if isinstance(e, CalculatorNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, SlugConflictError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    raise HTTPException(status_code=400, detail=str(e))

@router.post("/", response_model=CalculatorResponse, status_code=status.HTTP_201_CREATED)
async def create_calculator(calculator_data: CalculatorCreate, db: Session = Depends(get_db)):
    """
    Create a calculator draft for a tenant
    """
    try:
        return CalculatorService(db).create(calculator_data)
    except CalculatorServiceError as e:
        _raise_http(e)

@router.get("/", response_model=CalculatorList)
async def list_calculators(tenant_id: UUID, db: Session = Depends(get_db)):
    """
    List a tenant's calculators
    """
    calculators = CalculatorService(db).list_for_tenant(tenant_id)
    return {"calculators": calculators, "total": len(calculators)}

@router.get("/{calculator_id}", response_model=CalculatorResponse)
async def get_calculator(calculator_id: UUID, db: Session = Depends(get_db)):
    try:
        return CalculatorService(db).get(calculator_id)
    except CalculatorServiceError as e:
        _raise_http(e)

@router.patch("/{calculator_id}/config", response_model=CalculatorResponse)
async def update_config(calculator_id: UUID, change: ConfigChange, db: Session = Depends(get_db)):
    """
    Merge a partial configuration into the stored one
    """
    try:
        return CalculatorService(db).apply_change(calculator_id, change.changes)
    except CalculatorServiceError as e:
        _raise_http(e)

@router.post("/{calculator_id}/publish", response_model=CalculatorResponse)
async def publish_calculator(calculator_id: UUID, db: Session = Depends(get_db)):
    try:
        return CalculatorService(db).publish(calculator_id)
    except CalculatorServiceError as e:
        _raise_http(e)

@router.put("/{calculator_id}/zip-validation", response_model=ZipValidationResponse)
async def update_zip_validation(calculator_id: UUID, update: ZipValidationUpdate, db: Session = Depends(get_db)):
    """
    Apply the ZIP validation editor state; returns the derived postal codes
    """
    try:
        return CalculatorService(db).update_zip_validation(calculator_id, update.enabled, update.raw_input)
    except CalculatorServiceError as e:
        _raise_http(e)

@router.post("/{calculator_id}/fields", status_code=status.HTTP_201_CREATED)
async def drop_field(calculator_id: UUID, drop: FieldDrop, db: Session = Depends(get_db)):
    """
    Drop a palette token onto the form canvas
    """
    try:
        placed = CalculatorService(db).drop_field(calculator_id, drop.field_type)
    except UnknownFieldTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CalculatorServiceError as e:
        _raise_http(e)
    return placed.model_dump(by_alias=True)

@router.post("/{calculator_id}/fields/move")
async def move_field(calculator_id: UUID, move: FieldMove, db: Session = Depends(get_db)):
    try:
        fields = CalculatorService(db).move_field(calculator_id, move.old_index, move.new_index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CalculatorServiceError as e:
        _raise_http(e)
    return {"fields": [f.model_dump(by_alias=True) for f in fields]}

@router.delete("/{calculator_id}/fields/{index}")
async def delete_field(calculator_id: UUID, index: int, db: Session = Depends(get_db)):
    try:
        removed = CalculatorService(db).delete_field(calculator_id, index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CalculatorServiceError as e:
        _raise_http(e)
    return {"deleted": removed.model_dump(by_alias=True)}
