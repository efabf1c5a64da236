"""
Pytest fixtures and configuration for the Souq backend tests

Tests run against an in-memory SQLite database with Firebase disabled, so
the document store serves everything from the local fallback backend.
"""
import os

os.environ["LOCAL_DB_URL"] = "sqlite://"
os.environ["APP_ENV"] = "development"
os.environ["FIREBASE_ENABLED"] = "false"
os.environ["FIREBASE_AUTH_ENABLED"] = "false"
os.environ["FALLBACK_AUTH_ENABLED"] = "true"
os.environ["STOREFRONT_WAIT_SECONDS"] = "0"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from souq.auth.utils import create_access_token
from souq.db.session import Base, SessionLocal, engine, get_db, init_db
from souq.infra.sql_backend import SqlDocumentBackend
from souq.main import app
from souq.model.product_schema import ProductCreate
from souq.model.store_schema import StoreCreate
from souq.repository import product_repository, store_repository
from souq.repository.document_store import HybridDocumentStore


@pytest.fixture
def db():
    """
    Provides a session on a freshly created schema

    Scope: function (tables are dropped after each test)
    """
    init_db()
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def docs(db):
    """
    Provides a local-only document store bound to the test session
    """
    return HybridDocumentStore(local=SqlDocumentBackend(db))


@pytest.fixture
def client(db):
    """
    Provides a TestClient whose requests share the test session
    """
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user_id: str, role: str, email: str = "user@example.com") -> dict:
    token = create_access_token({"sub": user_id, "role": role, "email": email, "provider": "local"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_headers():
    return auth_headers


@pytest.fixture
def admin_headers():
    return auth_headers("admin_1", "admin", "admin@example.com")


@pytest.fixture
def merchant_headers():
    return auth_headers("merchant_1", "merchant", "merchant@example.com")


@pytest.fixture
def other_merchant_headers():
    return auth_headers("merchant_2", "merchant", "other@example.com")


@pytest.fixture
def make_store(docs):
    """
    Factory that creates stores owned by merchant_1 unless overridden
    """
    def factory(**overrides):
        data = {"name": "Test Store", "subdomain": "test-store", "owner_id": "merchant_1"}
        data.update(overrides)
        return store_repository.create_store(docs, StoreCreate(**data))

    return factory


@pytest.fixture
def make_product(docs):
    """
    Factory that creates active products
    """
    def factory(store_id: str, **overrides):
        data = {"store_id": store_id, "name": "Widget", "price": 50, "stock": 10}
        data.update(overrides)
        return product_repository.create_product(docs, ProductCreate(**data))

    return factory


@pytest.fixture
def sample_address():
    """
    Provides a shipping address payload in API (camelCase) form
    """
    return {
        "firstName": "Ahmed",
        "lastName": "Mohammed",
        "email": "ahmed@example.com",
        "phone": "+966501234567",
        "street": "King Fahd Road",
        "city": "Riyadh",
        "postalCode": "12345",
    }
