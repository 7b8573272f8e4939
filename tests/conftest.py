# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Gives every test a fresh product store via dependency overrides
# - Provides auth headers and sample payloads
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "test-password")
os.environ.setdefault("SEED_SAMPLE_PRODUCTS", "true")

import pytest
from fastapi.testclient import TestClient

from app.auth import create_access_token
from app.config import settings
from app.dependencies import get_product_store
from app.main import app
from core.services.product_service import ProductService
from lib.product_store import ProductStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Fresh product store with the same unique constraint as the app."""
    return ProductStore(unique_fields=("name",))


@pytest.fixture
def service(store):
    """Catalog service backed by the fresh store."""
    return ProductService(store)


@pytest.fixture
def client(store):
    """
    TestClient whose requests use the fresh store.

    Entering the client runs the lifespan, which seeds the sample products.
    """
    app.dependency_overrides[get_product_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def empty_client(store, monkeypatch):
    """TestClient with seeding disabled (empty catalog)."""
    monkeypatch.setattr(settings, "SEED_SAMPLE_PRODUCTS", False)
    app.dependency_overrides[get_product_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Authorization header with a valid token for the admin user."""
    token, _ = create_access_token(settings.ADMIN_USERNAME)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_product_data():
    """Valid product payload that doesn't collide with the sample catalog."""
    return {
        "name": "USB-C Hub",
        "description": "Seven ports, 100W passthrough",
        "price": 39.99,
        "category": "electronics",
        "in_stock": True,
        "tags": ["usb-c", "hub"],
    }
