# =============================================================================
# tests/test_health.py - Health and Root Endpoint Tests
# =============================================================================

from app.config import settings
from core.services.product_service import SAMPLE_PRODUCTS


class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == settings.ENVIRONMENT
        assert body["version"] == settings.API_VERSION

    def test_liveness(self, client):
        assert client.get("/api/v1/health/live").json()["status"] == "alive"

    def test_readiness_reports_product_count(self, client):
        body = client.get("/api/v1/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"] == {
            "product_store": "healthy",
            "product_count": len(SAMPLE_PRODUCTS),
        }

    def test_readiness_with_empty_catalog(self, empty_client):
        body = empty_client.get("/api/v1/health/ready").json()

        assert body["checks"]["product_count"] == 0


class TestRoot:
    """Tests for the root endpoint and generated docs."""

    def test_root(self, client):
        body = client.get("/").json()

        assert body["name"] == "Product Catalog API"
        assert body["docs"] == "/docs"

    def test_openapi_lists_product_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]

        assert "/api/v1/products" in paths
        assert "/api/v1/products/{product_id}" in paths
        assert set(paths["/api/v1/products/{product_id}"]) == {"get", "put", "patch", "delete"}
