"""Pytest configuration and fixtures."""
import os

# Set test API key before importing app modules (required for config validation)
os.environ["ADMIN_API_KEY"] = "SUPER_SECRET_ADMIN_KEY_2404"

from fastapi.testclient import TestClient
import pytest
from authcache import models
from authcache.core.database import Base
from authcache.main import app
from authcache.services.cache import get_permissions_cache
from authcache.services.permissions import PermissionsCache
from authcache.services.store import DatabaseStore
from tests.fakes import FakeStore
from tests.support import TestingSessionLocal, engine


@pytest.fixture
def fake_store():
    """Store holding admin 1, user 2 and a grant of device 100 to user 2."""
    store = FakeStore()
    store.add_user(1, admin=True)
    store.add_user(2)
    store.grant_device(2, 100)
    return store


@pytest.fixture
def cache(fake_store):
    return PermissionsCache(fake_store)


@pytest.fixture
def db():
    """Fresh tables per test; yields a session for arranging rows."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db):
    """Server policy, admin 1, user 2 and a grant of device 100 to user 2."""
    db.add(models.Server(registration_enabled=False, readonly=False))
    db.add_all([
        models.User(id=1, admin=True),
        models.User(id=2, admin=False),
    ])
    db.add(models.DevicePermission(user_id=2, device_id=100))
    db.commit()
    return db


@pytest.fixture
def db_cache(seeded_db):
    return PermissionsCache(DatabaseStore(TestingSessionLocal))


@pytest.fixture
def client(db_cache):
    """Test client whose permissions cache reads the test database."""
    app.dependency_overrides[get_permissions_cache] = lambda: db_cache
    try:
        yield TestClient(app=app)
    finally:
        app.dependency_overrides.clear()
