# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .product_service import ProductService, SAMPLE_PRODUCTS
from .export_service import ExportService, EXPORT_FORMATS

__all__ = [
    "ProductService",
    "SAMPLE_PRODUCTS",
    "ExportService",
    "EXPORT_FORMATS",
]
