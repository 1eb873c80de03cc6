"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from calcbuilder.api.api_v1.endpoints import field_types, tenants, calculators, database

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(field_types.router, prefix="/field-types", tags=["field-types"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
api_router.include_router(calculators.router, prefix="/calculators", tags=["calculators"])
api_router.include_router(database.router, prefix="/database", tags=["database"])
