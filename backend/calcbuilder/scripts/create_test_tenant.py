"""
Create Test Tenants: seeds demo cleaning companies for the super admin dashboard.

Usage:
    python -m calcbuilder.scripts.create_test_tenant
"""

import logging

from calcbuilder.core.database_utils import create_all_tables, get_db_session
from calcbuilder.services.tenant_admin import TenantAdminService


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    print("=" * 60)
    print("  Create Test Tenants")
    print("=" * 60)

    create_all_tables()

    with get_db_session() as db:
        created = TenantAdminService(db).seed_demo_tenants()
        for tenant in created:
            print(f"  [OK] Created tenant: {tenant.name} (ID: {tenant.id})")
        count = len(created)

    if not count:
        print("  Demo tenants already exist, nothing to do.")
    print("\n" + "=" * 60)
    print(f"  DONE. {count} tenant(s) created.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
