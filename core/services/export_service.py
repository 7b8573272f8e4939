# =============================================================================
# core/services/export_service.py - Catalog Export
# =============================================================================
# Renders the catalog as CSV or JSON using pandas.
# Tags stay a list in JSON and are joined with "|" in CSV so each product
# stays on one row.
# =============================================================================

import io
import logging
from typing import Any

import pandas as pd

from app.exceptions import UnsupportedExportFormatError

logger = logging.getLogger(__name__)

EXPORT_FORMATS: dict[str, str] = {
    "csv": "text/csv",
    "json": "application/json",
}

EXPORT_COLUMNS = [
    "id",
    "name",
    "description",
    "price",
    "category",
    "in_stock",
    "tags",
    "created_at",
    "updated_at",
]


class ExportService:
    """Convert product records to downloadable files."""

    @staticmethod
    def to_dataframe(products: list[dict[str, Any]]) -> pd.DataFrame:
        """
        Build a DataFrame with one row per product.

        An empty product list yields an empty frame with EXPORT_COLUMNS.
        """
        df = pd.DataFrame(products, columns=EXPORT_COLUMNS)
        if df.empty:
            return df

        for column in ("created_at", "updated_at"):
            df[column] = pd.to_datetime(df[column], utc=True).dt.strftime("%Y-%m-%dT%H:%M:%SZ")
        return df

    @staticmethod
    def render(products: list[dict[str, Any]], export_format: str) -> tuple[str, str]:
        """
        Render products in the requested format.

        Returns:
            Tuple of (content, media type)

        Raises:
            UnsupportedExportFormatError: If the format isn't csv or json
        """
        export_format = export_format.lower()
        if export_format not in EXPORT_FORMATS:
            raise UnsupportedExportFormatError(export_format, list(EXPORT_FORMATS))

        df = ExportService.to_dataframe(products)

        if export_format == "csv":
            if not df.empty:
                df["tags"] = df["tags"].apply(lambda tags: "|".join(tags or []))
            buffer = io.StringIO()
            df.to_csv(buffer, index=False)
            content = buffer.getvalue()
        else:
            content = df.to_json(orient="records")

        logger.info(f"Exported {len(df)} products as {export_format}")
        return content, EXPORT_FORMATS[export_format]
