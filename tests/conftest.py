# tests/conftest.py

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.testclient import TestClient

from app.main import app
from app.api import deps
from app.core.limiter import limiter
from app.db.base_class import Base
from app.db.session import get_db, make_engine
from app.models import Event  # noqa: F401  registers every table
from app.schemas.token import TokenPayload

from tests.utils.common import NOW, TENANT


@pytest.fixture(scope="function")
def engine():
    """A fresh in-memory database per test."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


# --- Mock Dependencies Setup ---
def override_get_current_user():
    return TokenPayload(sub="user_test", tenantId=TENANT, exp=9999999999)


def override_get_now():
    return NOW


def _apply_overrides(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    # Redis is off in tests: no slot cache, no notifications
    app.dependency_overrides[deps.get_redis] = lambda: None
    app.dependency_overrides[deps.get_now] = override_get_now
    limiter.enabled = False


@pytest.fixture(scope="function")
def client(db_session):
    """
    TestClient on the test database, with the admin identity mocked to a
    user of the ``acme`` tenant.
    """
    _apply_overrides(db_session)
    app.dependency_overrides[deps.get_current_user] = override_get_current_user

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture(scope="function")
def unauthenticated_client(db_session):
    """TestClient that goes through real JWT validation."""
    _apply_overrides(db_session)

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    limiter.enabled = True
