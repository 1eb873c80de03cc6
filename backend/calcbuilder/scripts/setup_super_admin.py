"""
Super Admin Setup: creates the super admin profile, or promotes the
existing console user with that email.

Usage:
    python -m calcbuilder.scripts.setup_super_admin [--email admin@swedprime.com]
"""

import argparse
import logging
from typing import Optional, Sequence

from calcbuilder.core.config import settings
from calcbuilder.core.database_utils import create_all_tables, get_db_session
from calcbuilder.services.tenant_admin import TenantAdminError, TenantAdminService


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Create or promote the super admin")
    parser.add_argument("--email", default=settings.DEFAULT_SUPER_ADMIN_EMAIL)
    parser.add_argument("--name", default=settings.DEFAULT_SUPER_ADMIN_NAME)
    args = parser.parse_args(argv)

    create_all_tables()
    try:
        with get_db_session() as db:
            user = TenantAdminService(db).ensure_super_admin(args.email, args.name)
            print(f"[OK] Super admin ready: {user.email} (ID: {user.id})")
    except TenantAdminError as e:
        print(f"[FAIL] Error setting up super admin: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
