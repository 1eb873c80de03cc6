"""
Pydantic schemas for API request/response validation
"""

from .tenant import (
    TenantCreate, TenantResponse, TenantList, AdminUserCreate, AdminUserResponse
)
from .calculator import (
    CalculatorCreate, CalculatorResponse, CalculatorList, ConfigChange,
    ZipValidationUpdate, ZipValidationResponse, FieldDrop, FieldMove
)

__all__ = [
    # Tenant schemas
    "TenantCreate", "TenantResponse", "TenantList", "AdminUserCreate", "AdminUserResponse",
    # Calculator schemas
    "CalculatorCreate", "CalculatorResponse", "CalculatorList", "ConfigChange",
    "ZipValidationUpdate", "ZipValidationResponse", "FieldDrop", "FieldMove"
]
