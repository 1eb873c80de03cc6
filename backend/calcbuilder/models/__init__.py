"""
Database models package
"""

from .base import Base, BaseModel
from .tenant import Tenant
from .admin_user import AdminUser, AdminRole
from .calculator import Calculator, CalculatorStatus

__all__ = [
    "Base", "BaseModel", "Tenant", "AdminUser", "AdminRole",
    "Calculator", "CalculatorStatus"
]
