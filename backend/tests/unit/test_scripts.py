"""
Unit Tests for the admin scripts
"""
from calcbuilder.models.admin_user import AdminUser
from calcbuilder.scripts import create_admin_user, create_test_tenant, debug_calculators, setup_super_admin
from calcbuilder.services.tenant_admin import DEMO_TENANTS, TenantAdminService


class TestCreateTestTenant:

    def test_seeds_once(self, db_session, capsys):
        assert create_test_tenant.main() == 0
        assert f'DONE. {len(DEMO_TENANTS)} tenant(s) created.' in capsys.readouterr().out

        assert create_test_tenant.main() == 0
        out = capsys.readouterr().out
        assert 'already exist' in out
        assert 'DONE. 0 tenant(s) created.' in out


class TestCreateAdminUser:

    def test_creates_tenant_user(self, db_session, tenant, capsys):
        code = create_admin_user.main(['anna@rengoring-plus.se', '--name', 'Anna', '--tenant', 'rengoring-plus-gbg'])
        assert code == 0
        assert '[OK] Created tenant_admin anna@rengoring-plus.se' in capsys.readouterr().out
        user = db_session.query(AdminUser).filter_by(email='anna@rengoring-plus.se').one()
        assert user.tenant_id == tenant.id

    def test_unknown_tenant_fails(self, db_session, capsys):
        assert create_admin_user.main(['anna@rengoring-plus.se', '--tenant', 'nowhere']) == 1
        assert '[FAIL]' in capsys.readouterr().out


class TestSetupSuperAdmin:

    def test_promotes_existing_user(self, db_session, tenant, capsys):
        TenantAdminService(db_session).create_user('ops@rengoring-plus.se', tenant_id=tenant.id)
        assert setup_super_admin.main(['--email', 'ops@rengoring-plus.se']) == 0
        assert '[OK] Super admin ready: ops@rengoring-plus.se' in capsys.readouterr().out
        db_session.expire_all()
        user = db_session.query(AdminUser).filter_by(email='ops@rengoring-plus.se').one()
        assert user.is_super_admin
        assert user.tenant_id is None


class TestDebugCalculators:

    def test_prints_overview(self, db_session, tenant, bare_tenant, capsys):
        assert debug_calculators.main() == 0
        out = capsys.readouterr().out
        assert 'Found 2 tenant(s)' in out
        assert '[rengoring-plus-gbg] (active)' in out
        assert '(no calculators)' in out


class TestCreateAdminUserValidation:

    def test_malformed_email_fails_cleanly(self, db_session, capsys):
        assert create_admin_user.main(['not-an-email']) == 1
        assert '[FAIL] Invalid email format' in capsys.readouterr().out
        assert db_session.query(AdminUser).count() == 0
