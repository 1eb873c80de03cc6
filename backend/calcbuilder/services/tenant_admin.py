"""
Tenant and admin-user record management used by the console API and the
one-off admin scripts
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from calcbuilder.models.admin_user import AdminRole, AdminUser
from calcbuilder.models.tenant import Tenant
from calcbuilder.schemas.tenant import TenantCreate

logger = logging.getLogger(__name__)


class TenantAdminError(Exception):
    """Custom exception for tenant/user record errors"""
    pass


class TenantNotFoundError(TenantAdminError):
    pass


class AdminUserNotFoundError(TenantAdminError):
    pass


DEMO_TENANTS = [
    {
        "name": "Städproffs Stockholm AB",
        "slug": "stadproffs-stockholm",
        "admin_email": "admin@stadproffs.se",
        "admin_name": "Anna Andersson",
        "rut_percentage": 50,
        "zip_areas": ["11120", "11121", "11122"],
        "settings": {
            "emailNotifications": True,
            "bookingConfirmation": True,
            "automaticPricing": True,
        },
    },
    {
        "name": "Rengöring Plus Göteborg",
        "slug": "rengoring-plus-gbg",
        "admin_email": "kontakt@rengoring-plus.se",
        "admin_name": "Erik Eriksson",
        "rut_percentage": 50,
        "zip_areas": ["41107", "41121", "41254"],
        "settings": {
            "emailNotifications": True,
            "bookingConfirmation": True,
            "automaticPricing": False,
        },
    },
    {
        "name": "Hemstäd Malmö",
        "slug": "hemstad-malmo",
        "admin_email": "info@hemstad-malmo.se",
        "admin_name": "Maria Svensson",
        "rut_percentage": 50,
        "zip_areas": [],
        "settings": {
            "emailNotifications": False,
            "bookingConfirmation": True,
            "automaticPricing": True,
        },
    },
]


class TenantAdminService:
    """Straight-line CRUD over tenants and console users"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise TenantAdminError(f"Failed to {action}: {e}") from e

    # ------------------------------------------------------------------
    # Tenants
    # ------------------------------------------------------------------
    def create_tenant(self, data: TenantCreate) -> Tenant:
        if self.db.query(Tenant).filter(Tenant.slug == data.slug).first():
            raise TenantAdminError(f"Tenant slug already in use: {data.slug}")

        tenant = Tenant(
            name=data.name,
            slug=data.slug,
            admin_email=str(data.admin_email),
            admin_name=data.admin_name,
            rut_percentage=data.rut_percentage,
            zip_areas=list(data.zip_areas),
            settings=dict(data.settings),
        )
        self.db.add(tenant)
        self._commit("create tenant")
        self.db.refresh(tenant)
        logger.info(f"Created tenant {tenant.slug} ({tenant.id})")
        return tenant

    def get_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = self.db.get(Tenant, tenant_id)
        if tenant is None:
            raise TenantNotFoundError(f"Tenant not found: {tenant_id}")
        return tenant

    def get_tenant_by_slug(self, slug: str) -> Tenant:
        tenant = self.db.query(Tenant).filter(Tenant.slug == slug).first()
        if tenant is None:
            raise TenantNotFoundError(f"Tenant not found: {slug}")
        return tenant

    def list_tenants(self, active_only: bool = False) -> List[Tenant]:
        query = self.db.query(Tenant)
        if active_only:
            query = query.filter(Tenant.is_active.is_(True))
        return query.order_by(Tenant.name).all()

    def set_tenant_active(self, tenant_id: UUID, active: bool) -> Tenant:
        tenant = self.get_tenant(tenant_id)
        tenant.is_active = active
        self._commit("update tenant")
        return tenant

    def seed_demo_tenants(self) -> List[Tenant]:
        """Create the demo tenants that do not exist yet."""
        created = []
        for payload in DEMO_TENANTS:
            if self.db.query(Tenant).filter(Tenant.slug == payload["slug"]).first():
                logger.info(f"Demo tenant {payload['slug']} already exists, skipping")
                continue
            created.append(self.create_tenant(TenantCreate(**payload)))
        return created

    # ------------------------------------------------------------------
    # Admin users
    # ------------------------------------------------------------------
    def create_user(
        self,
        email: str,
        display_name: Optional[str] = None,
        role: AdminRole = AdminRole.TENANT_ADMIN,
        tenant_id: Optional[UUID] = None,
    ) -> AdminUser:
        email = email.lower()
        if self.db.query(AdminUser).filter(AdminUser.email == email).first():
            raise TenantAdminError(f"Admin user already exists: {email}")
        if tenant_id is not None:
            self.get_tenant(tenant_id)

        user = AdminUser(
            email=email,
            display_name=display_name,
            role=AdminRole(role).value,
            tenant_id=tenant_id,
        )
        self.db.add(user)
        self._commit("create admin user")
        self.db.refresh(user)
        logger.info(f"Created admin user {email} with role {user.role}")
        return user

    def get_user(self, user_id: UUID) -> AdminUser:
        user = self.db.get(AdminUser, user_id)
        if user is None:
            raise AdminUserNotFoundError(f"Admin user not found: {user_id}")
        return user

    def promote_super_admin(self, user_id: UUID) -> AdminUser:
        user = self.get_user(user_id)
        user.role = AdminRole.SUPER_ADMIN.value
        user.tenant_id = None
        self._commit("promote super admin")
        logger.info(f"Promoted {user.email} to super admin")
        return user

    def ensure_super_admin(self, email: str, display_name: Optional[str] = None) -> AdminUser:
        """Create the super admin profile, or promote the existing user with that email."""
        user = self.db.query(AdminUser).filter(AdminUser.email == email.lower()).first()
        if user is None:
            return self.create_user(email, display_name, role=AdminRole.SUPER_ADMIN)
        if display_name and not user.display_name:
            user.display_name = display_name
        return self.promote_super_admin(user.id)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def debug_overview(self) -> List[Dict[str, Any]]:
        """Every tenant with a summary of its calculators."""
        overview = []
        for tenant in self.list_tenants():
            overview.append({
                "id": str(tenant.id),
                "slug": tenant.slug,
                "name": tenant.name,
                "is_active": tenant.is_active,
                "calculators": [
                    {
                        "id": str(calc.id),
                        "slug": calc.slug,
                        "name": calc.name,
                        "status": calc.status,
                        "field_count": len((calc.config or {}).get("fields", [])),
                        "zip_areas": list((calc.config or {}).get("zipAreas", [])),
                    }
                    for calc in sorted(tenant.calculators, key=lambda c: c.slug)
                ],
            })
        return overview
