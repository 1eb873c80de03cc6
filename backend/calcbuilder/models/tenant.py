"""
Tenant model for cleaning companies using the calculator builder
"""

from sqlalchemy import Column, String, Boolean, Integer, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship, validates
from typing import List
import re

from calcbuilder.models.base import BaseModel

JSONType = JSON().with_variant(JSONB(), "postgresql")

class Tenant(BaseModel):
    """
    Tenant model representing one isolated customer organization
    """
    __tablename__ = "tenants"

    name = Column(
        String(255),
        nullable=False,
        comment="Company display name"
    )

    slug = Column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="URL-safe company identifier"
    )

    admin_email = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Contact email of the company administrator"
    )

    admin_name = Column(
        String(255),
        nullable=True,
        comment="Name of the company administrator"
    )

    rut_percentage = Column(
        Integer,
        default=50,
        nullable=False,
        comment="RUT tax deduction percentage applied to bookings"
    )

    zip_areas = Column(
        JSONType,
        default=lambda: [],
        nullable=False,
        comment="Postal codes the company serves"
    )

    settings = Column(
        JSONType,
        default=lambda: {},
        nullable=False,
        comment="Company-specific settings (notifications, pricing flags)"
    )

    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
        comment="Whether the tenant is active"
    )

    # Relationships
    users = relationship("AdminUser", back_populates="tenant")
    calculators = relationship("Calculator", back_populates="tenant", cascade="all, delete-orphan")

    @validates('slug')
    def validate_slug(self, key: str, slug: str) -> str:
        """
        Validate slug format
        """
        if not slug:
            raise ValueError("Tenant slug cannot be empty")

        slug = slug.lower()
        if not re.match(r'^[a-z0-9-]+$', slug):
            raise ValueError("Slug can only contain lowercase letters, numbers, and hyphens")

        return slug

    @validates('admin_email')
    def validate_admin_email(self, key: str, email: str) -> str:
        """
        Normalize email
        """
        if not email:
            raise ValueError("Admin email cannot be empty")
        return email.lower()

    @validates('rut_percentage')
    def validate_rut_percentage(self, key: str, value: int) -> int:
        if value is not None and not 0 <= value <= 100:
            raise ValueError("RUT percentage must be between 0 and 100")
        return value

    def get_zip_areas(self) -> List[str]:
        return list(self.zip_areas or [])

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug='{self.slug}')>"
