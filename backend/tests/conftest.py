"""
Calculator Builder - Test Configuration and Fixtures
"""
import os
from typing import Generator

import pytest

# Set testing environment before the settings module is imported
os.environ['ENVIRONMENT'] = 'test'
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['LOG_LEVEL'] = 'WARNING'

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from calcbuilder.core.database import SessionLocal, get_db
from calcbuilder.core.database_utils import create_all_tables, drop_all_tables
from calcbuilder.main import app
from calcbuilder.schemas.tenant import TenantCreate
from calcbuilder.services.tenant_admin import TenantAdminService


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh in-memory database for each test"""
    create_all_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_all_tables()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client sharing the test database session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def tenant(db_session: Session):
    """A tenant serving three Gothenburg postal codes"""
    return TenantAdminService(db_session).create_tenant(TenantCreate(
        name='Rengöring Plus Göteborg',
        slug='rengoring-plus-gbg',
        admin_email='kontakt@rengoring-plus.se',
        admin_name='Erik Eriksson',
        zip_areas=['41107', '41121', '41254'],
    ))


@pytest.fixture
def bare_tenant(db_session: Session):
    """A tenant without configured postal codes"""
    return TenantAdminService(db_session).create_tenant(TenantCreate(
        name='Hemstäd Malmö',
        slug='hemstad-malmo',
        admin_email='info@hemstad-malmo.se',
    ))
