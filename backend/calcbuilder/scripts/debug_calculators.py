"""
Debug Calculators: lists every tenant and the calculators it has built.

Usage:
    python -m calcbuilder.scripts.debug_calculators
"""

import logging

from calcbuilder.core.database_utils import get_db_session
from calcbuilder.services.tenant_admin import TenantAdminService


def main() -> int:
    logging.basicConfig(level=logging.WARNING)
    with get_db_session() as db:
        overview = TenantAdminService(db).debug_overview()

    print(f"Found {len(overview)} tenant(s)\n")
    for tenant in overview:
        state = "active" if tenant["is_active"] else "inactive"
        print(f"- {tenant['name']} [{tenant['slug']}] ({state})")
        if not tenant["calculators"]:
            print("    (no calculators)")
        for calc in tenant["calculators"]:
            zips = ", ".join(calc["zip_areas"]) or "any ZIP"
            print(
                f"    {calc['slug']:24s} {calc['status']:10s} "
                f"{calc['field_count']:>3d} field(s)  zip: {zips}"
            )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
