"""
Admin user model for console operators
"""

from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship, validates
from enum import Enum
import re

from calcbuilder.models.base import BaseModel

class AdminRole(str, Enum):
    """Console roles"""
    SUPER_ADMIN = "super_admin"
    TENANT_ADMIN = "tenant_admin"

class AdminUser(BaseModel):
    """
    A console operator, either bound to one tenant or a platform super admin
    """
    __tablename__ = "admin_users"

    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login email"
    )

    display_name = Column(
        String(255),
        nullable=True,
        comment="Name shown in the console header"
    )

    role = Column(
        String(50),
        default=AdminRole.TENANT_ADMIN.value,
        nullable=False,
        comment="super_admin or tenant_admin"
    )

    is_active = Column(
        Boolean,
        default=True,
        nullable=False
    )

    tenant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("tenants.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Tenant this admin manages, empty for super admins"
    )

    tenant = relationship("Tenant", back_populates="users")

    @validates('email')
    def validate_email(self, key: str, email: str) -> str:
        """
        Validate email format
        """
        if not email:
            raise ValueError("Email cannot be empty")

        email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not re.match(email_pattern, email):
            raise ValueError("Invalid email format")

        return email.lower()

    @validates('role')
    def validate_role(self, key: str, role: str) -> str:
        valid_roles = [r.value for r in AdminRole]
        if role not in valid_roles:
            raise ValueError(f"Role must be one of: {', '.join(valid_roles)}")
        return role

    @property
    def is_super_admin(self) -> bool:
        return self.role == AdminRole.SUPER_ADMIN.value

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id}, email='{self.email}', role='{self.role}')>"
