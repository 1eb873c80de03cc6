"""
Create Admin User: adds a console user, optionally bound to a tenant.

Usage:
    python -m calcbuilder.scripts.create_admin_user anna@stadproffs.se \
        --name "Anna Andersson" --tenant stadproffs-stockholm
"""

import argparse
import logging
from typing import Optional, Sequence

from calcbuilder.core.database_utils import create_all_tables, get_db_session
from calcbuilder.models.admin_user import AdminRole
from calcbuilder.services.tenant_admin import TenantAdminError, TenantAdminService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a console admin user")
    parser.add_argument("email")
    parser.add_argument("--name", dest="display_name")
    parser.add_argument("--tenant", dest="tenant_slug", help="slug of the tenant the user manages")
    parser.add_argument(
        "--role",
        choices=[r.value for r in AdminRole],
        default=AdminRole.TENANT_ADMIN.value,
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    create_all_tables()
    try:
        with get_db_session() as db:
            service = TenantAdminService(db)
            tenant_id = None
            if args.tenant_slug:
                tenant_id = service.get_tenant_by_slug(args.tenant_slug).id
            user = service.create_user(
                args.email,
                display_name=args.display_name,
                role=AdminRole(args.role),
                tenant_id=tenant_id,
            )
            print(f"[OK] Created {user.role} {user.email} (ID: {user.id})")
    except (TenantAdminError, ValueError) as e:
        print(f"[FAIL] {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
