"""
Pydantic schemas for Tenant and AdminUser validation
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, EmailStr
from typing import Optional, Dict, Any, List
from datetime import datetime
from uuid import UUID
import re

from calcbuilder.formbuilder.zip_validation import parse_zip_areas
from calcbuilder.models.admin_user import AdminRole

class TenantBase(BaseModel):
    """Base tenant schema with common fields"""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Company display name",
        examples=["Städproffs Stockholm AB"]
    )

    slug: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="URL-safe company identifier",
        examples=["stadproffs-stockholm"]
    )

    admin_email: EmailStr = Field(
        ...,
        description="Contact email of the company administrator",
        examples=["admin@stadproffs.se"]
    )

    admin_name: Optional[str] = Field(
        None,
        max_length=255,
        description="Name of the company administrator"
    )

    rut_percentage: int = Field(
        50,
        ge=0,
        le=100,
        description="RUT deduction percentage"
    )

    zip_areas: List[str] = Field(
        default_factory=list,
        description="Postal codes the company serves"
    )

    settings: Dict[str, Any] = Field(
        default_factory=dict,
        description="Company-specific settings"
    )

    @field_validator('slug')
    @classmethod
    def validate_slug(cls, v):
        """Validate slug format"""
        v = v.lower()
        if not re.match(r'^[a-z0-9-]+$', v):
            raise ValueError("Slug can only contain lowercase letters, numbers, and hyphens")
        return v

    @field_validator('zip_areas')
    @classmethod
    def validate_zip_areas(cls, v):
        """Trim postal codes and drop blanks"""
        return parse_zip_areas(",".join(v))

class TenantCreate(TenantBase):
    """Schema for creating a new tenant"""
    pass

class TenantResponse(TenantBase):
    """Schema for tenant API responses"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime

class TenantList(BaseModel):
    """Schema for tenant list responses"""

    tenants: List[TenantResponse]
    total: int

class AdminUserCreate(BaseModel):
    """Schema for creating a console admin user"""

    email: EmailStr = Field(..., examples=["anna@stadproffs.se"])
    display_name: Optional[str] = Field(None, max_length=255)
    role: AdminRole = AdminRole.TENANT_ADMIN

class AdminUserResponse(BaseModel):
    """Schema for admin user API responses"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    display_name: Optional[str] = None
    role: AdminRole
    is_active: bool
    tenant_id: Optional[UUID] = None
    created_at: datetime
