# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Product Catalog API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_product_store.py / test_product_service.py: Storage and catalog logic
# - test_products_api.py, test_auth.py, test_health.py: HTTP endpoints
# - test_article.py / test_docs_article.py: Editorial checks on the article
#
# Run tests with: pytest
# =============================================================================
