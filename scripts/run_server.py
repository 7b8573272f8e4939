#!/usr/bin/env python3
# =============================================================================
# scripts/run_server.py - API Server Entry Point
# =============================================================================
# Starts the Product Catalog API with uvicorn, using API_HOST / API_PORT
# from the environment (.env file).
#
# Usage:
#   python scripts/run_server.py
#
#   # Or use the uvicorn CLI directly
#   uvicorn app.main:app --reload
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import uvicorn

from app.config import settings


def main():
    """Start the API server."""
    print("=" * 60)
    print("Product Catalog API")
    print("=" * 60)
    print()
    print(f"Listening on http://{settings.API_HOST}:{settings.API_PORT}")
    print(f"Docs at http://{settings.API_HOST}:{settings.API_PORT}/docs")
    print("Press Ctrl+C to stop")
    print()

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
