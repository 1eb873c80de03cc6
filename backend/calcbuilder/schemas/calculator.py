"""
Pydantic schemas for Calculator and form-builder requests
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List
from datetime import datetime
from uuid import UUID

from calcbuilder.formbuilder.details import SLUG_PATTERN, generate_slug

class CalculatorCreate(BaseModel):
    """Schema for creating a new calculator draft"""

    tenant_id: UUID
    name: str = Field(..., min_length=1, max_length=255, examples=["Hemstädning"])
    slug: Optional[str] = Field(
        None,
        max_length=100,
        description="URL slug; generated from the name when omitted"
    )
    description: Optional[str] = None
    created_by: Optional[str] = None
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Initial form configuration (wire names)"
    )

    @field_validator('slug')
    @classmethod
    def validate_slug(cls, v):
        if v is not None and not SLUG_PATTERN.match(v):
            raise ValueError("Slug can only contain lowercase letters, numbers, and hyphens")
        return v

    def resolved_slug(self) -> str:
        return self.slug or generate_slug(self.name)

class CalculatorResponse(BaseModel):
    """Schema for calculator API responses"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    slug: str
    name: str
    description: Optional[str] = None
    status: str
    is_published: bool
    config: Dict[str, Any]
    published_at: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class CalculatorList(BaseModel):
    calculators: List[CalculatorResponse]
    total: int

class ConfigChange(BaseModel):
    """Partial configuration merged into the stored one (last write wins per key)"""

    changes: Dict[str, Any] = Field(..., examples=[{"zipAreas": ["41107", "41121"]}])

class ZipValidationUpdate(BaseModel):
    """State of the ZIP validation editor"""

    enabled: bool
    raw_input: str = Field("", examples=["41107, 41121, 41254"])

class ZipValidationResponse(BaseModel):
    title: str
    state: str
    enabled: bool
    raw_input: str
    zip_areas: List[str]
    hint: str

class FieldDrop(BaseModel):
    """A palette token dropped onto the canvas"""

    field_type: str = Field(..., examples=["text"])

class FieldMove(BaseModel):
    old_index: int = Field(..., ge=0)
    new_index: int = Field(..., ge=0)
