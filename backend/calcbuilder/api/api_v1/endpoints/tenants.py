"""
Tenant and console user management endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from calcbuilder.core.database import get_db
from calcbuilder.schemas.tenant import (
    TenantCreate, TenantResponse, TenantList, AdminUserCreate, AdminUserResponse
)
from calcbuilder.services.tenant_admin import (
    TenantAdminService, TenantAdminError, TenantNotFoundError, AdminUserNotFoundError
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(tenant_data: TenantCreate, db: Session = Depends(get_db)):
    """
    Create a new tenant
    """
    try:
        return TenantAdminService(db).create_tenant(tenant_data)
    except TenantAdminError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

@router.get("/", response_model=TenantList)
async def list_tenants(active_only: bool = False, db: Session = Depends(get_db)):
    """
    List tenants ordered by name
    """
    tenants = TenantAdminService(db).list_tenants(active_only=active_only)
    return {"tenants": tenants, "total": len(tenants)}

@router.get("/overview")
async def tenants_overview(db: Session = Depends(get_db)):
    """
    Tenants with a summary of their calculators
    """
    return {"tenants": TenantAdminService(db).debug_overview()}

@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(tenant_id: UUID, db: Session = Depends(get_db)):
    """
    Get tenant details
    """
    try:
        return TenantAdminService(db).get_tenant(tenant_id)
    except TenantNotFoundError:
        raise HTTPException(status_code=404, detail="Tenant not found")

@router.post("/{tenant_id}/users", response_model=AdminUserResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant_user(tenant_id: UUID, user_data: AdminUserCreate, db: Session = Depends(get_db)):
    """
    Create a console user bound to the tenant
    """
    service = TenantAdminService(db)
    try:
        return service.create_user(
            email=str(user_data.email),
            display_name=user_data.display_name,
            role=user_data.role,
            tenant_id=tenant_id,
        )
    except TenantNotFoundError:
        raise HTTPException(status_code=404, detail="Tenant not found")
    except TenantAdminError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

@router.post("/users/{user_id}/super-admin", response_model=AdminUserResponse)
async def promote_super_admin(user_id: UUID, db: Session = Depends(get_db)):
    """
    Grant platform-wide super admin status
    """
    try:
        return TenantAdminService(db).promote_super_admin(user_id)
    except AdminUserNotFoundError:
        raise HTTPException(status_code=404, detail="Admin user not found")
