# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - product_store.py: Async in-memory product storage
# - article.py: Editorial checks for the companion article
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.product_store import ProductStore, UniqueConstraintError
from lib.article import (
    ArticleReport,
    CodeBlock,
    Link,
    LinkResult,
    build_report,
    check_links,
    extract_code_blocks,
    extract_links,
    find_terminology_issues,
    load_article,
)

__all__ = [
    # Store
    "ProductStore",
    "UniqueConstraintError",
    # Article checks
    "ArticleReport",
    "CodeBlock",
    "Link",
    "LinkResult",
    "build_report",
    "check_links",
    "extract_code_blocks",
    "extract_links",
    "find_terminology_issues",
    "load_article",
]
