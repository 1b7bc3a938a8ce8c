import os
from decimal import Decimal

import pytest

# Unit tests run against the in-memory sqlite engine; never pick up a developer's DEV_MODE.
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.pop("DEV_MODE", None)

from fastapi.testclient import TestClient

from storefront.db import models, schemas, storage
from storefront.db.database import SessionLocal, engine, ensure_sqlite_schema
from storefront.utils.feature_flags import refresh_feature_flag_cache

ADMIN_EMAIL = "admin@example.com"


def _h(user="shopper-1", email="shopper1@example.com"):
    """Auth-proxy headers for a signed-in shopper."""
    headers = {}
    if user:
        headers["x-auth-request-user"] = user
    if email:
        headers["x-auth-request-email"] = email
    return headers


def admin_headers():
    return _h(user="admin-1", email=ADMIN_EMAIL)


@pytest.fixture(autouse=True)
def _storefront_env(monkeypatch):
    monkeypatch.delenv("DEV_MODE", raising=False)
    monkeypatch.setenv("ADMIN_EMAILS", ADMIN_EMAIL)
    for name in ("FEATURE_REVIEWS_ENABLED", "FEATURE_WISHLIST_ENABLED", "EMAIL_NOTIFICATIONS_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    for name in ("FREE_SHIPPING_THRESHOLD", "SHIPPING_FEE", "ESTIMATED_DELIVERY_DAYS"):
        monkeypatch.delenv(name, raising=False)
    refresh_feature_flag_cache()
    yield
    refresh_feature_flag_cache()


@pytest.fixture(autouse=True)
def _clean_tables():
    """Create the sqlite schema once and empty every table after each test."""
    ensure_sqlite_schema()
    yield
    with engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from storefront.api.main import app
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    def _make(user_id="shopper-1", email="shopper1@example.com", **fields):
        return storage.upsert_user(db_session, schemas.UserUpsert(id=user_id, email=email, **fields))
    return _make


@pytest.fixture
def make_product(db_session):
    def _make(name="Linen Shirt", category="men", price="1299.00", **fields):
        payload = schemas.ProductCreate(name=name, category=category, price=Decimal(price), **fields)
        return storage.create_product(db_session, payload)
    return _make


@pytest.fixture
def shipping_address():
    return {
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "KA",
        "pincode": "560001",
    }
