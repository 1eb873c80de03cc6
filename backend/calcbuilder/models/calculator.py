"""
Calculator model storing form-builder configurations per tenant
"""

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship, validates
from enum import Enum
import re

from calcbuilder.models.base import BaseModel
from calcbuilder.models.tenant import JSONType

class CalculatorStatus(str, Enum):
    """Publication state of a calculator"""
    DRAFT = "draft"
    PUBLISHED = "published"

class Calculator(BaseModel):
    """
    A tenant-configured pricing/booking form definition
    """
    __tablename__ = "calculators"
    __table_args__ = (
        UniqueConstraint("tenant_id", "slug", name="uq_calculators_tenant_slug"),
    )

    tenant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    slug = Column(
        String(100),
        nullable=False,
        index=True,
        comment="URL slug, unique within a tenant"
    )

    name = Column(
        String(255),
        nullable=False,
        comment="Calculator display name"
    )

    description = Column(
        Text,
        nullable=True
    )

    status = Column(
        String(20),
        default=CalculatorStatus.DRAFT.value,
        nullable=False,
        index=True
    )

    config = Column(
        JSONType,
        default=lambda: {},
        nullable=False,
        comment="Serialized form configuration (wire names)"
    )

    published_at = Column(
        DateTime(timezone=True),
        nullable=True
    )

    created_by = Column(
        String(255),
        nullable=True,
        comment="Email of the admin who created the calculator"
    )

    tenant = relationship("Tenant", back_populates="calculators")

    @validates('slug')
    def validate_slug(self, key: str, slug: str) -> str:
        if not slug or not re.match(r'^[a-z0-9-]+$', slug):
            raise ValueError("Slug can only contain lowercase letters, numbers, and hyphens")
        return slug

    @validates('status')
    def validate_status(self, key: str, status: str) -> str:
        valid = [s.value for s in CalculatorStatus]
        if status not in valid:
            raise ValueError(f"Status must be one of: {', '.join(valid)}")
        return status

    @property
    def is_published(self) -> bool:
        return self.status == CalculatorStatus.PUBLISHED.value

    def __repr__(self) -> str:
        return f"<Calculator(id={self.id}, slug='{self.slug}', status='{self.status}')>"
