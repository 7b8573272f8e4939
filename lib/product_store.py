# =============================================================================
# lib/product_store.py - In-Memory Product Store
# =============================================================================
# This module provides the storage layer behind the catalog API.
# It plays the role the plain JavaScript array plays in the Express version
# of the article, with a few differences:
# - Every operation is a coroutine guarded by one asyncio.Lock, so concurrent
#   requests never interleave a read-modify-write.
# - Unique fields are checked under the same lock, like a database unique
#   constraint (compared case-insensitively).
# - Records are copied on the way in and out, so callers cannot mutate
#   stored state by accident.
#
# Ids start at 1 and are never reused, even after a delete.
#
# Usage:
#   from lib.product_store import ProductStore
#   store = ProductStore(unique_fields=("name",))
#   record = await store.insert({"name": "Desk Lamp", "price": 24.5, ...})
# =============================================================================

from __future__ import annotations

import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Any, Iterable

# Set up logging for this module
logger = logging.getLogger(__name__)

PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class UniqueConstraintError(Exception):
    """Raised when a write would duplicate a unique field."""

    def __init__(self, field: str, value: Any, existing_id: int):
        super().__init__(f"{field}={value!r} already used by record {existing_id}")
        self.field = field
        self.value = value
        self.existing_id = existing_id


def _normalize(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


class ProductStore:
    """
    Async, process-local product storage keyed by integer id.

    Example:
        store = ProductStore(unique_fields=("name",))
        created = await store.insert({"name": "Desk Lamp", "price": 24.5})
        fetched = await store.get(created["id"])
    """

    def __init__(self, unique_fields: Iterable[str] = ()) -> None:
        self._records: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()
        self.unique_fields = tuple(unique_fields)

    def _check_unique(self, data: dict[str, Any], product_id: int | None = None) -> None:
        # Caller must hold self._lock
        for field in self.unique_fields:
            if field not in data:
                continue
            wanted = _normalize(data[field])
            for record in self._records.values():
                if record["id"] != product_id and _normalize(record.get(field)) == wanted:
                    raise UniqueConstraintError(field, data[field], record["id"])

    async def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Store a new product and assign it an id.

        Args:
            data: Product fields (without id or timestamps)

        Returns:
            Copy of the stored record including id, created_at, updated_at

        Raises:
            UniqueConstraintError: If a unique field is already used
        """
        async with self._lock:
            self._check_unique(data)
            now = utc_now()
            record = {key: copy.deepcopy(value) for key, value in data.items() if key not in PROTECTED_FIELDS}
            record.update(id=self._next_id, created_at=now, updated_at=now)
            self._records[self._next_id] = record
            self._next_id += 1

        logger.debug(f"Inserted product {record['id']}")
        return copy.deepcopy(record)

    async def get(self, product_id: int) -> dict[str, Any] | None:
        """Return a copy of one record, or None if it doesn't exist."""
        async with self._lock:
            record = self._records.get(product_id)
            return copy.deepcopy(record) if record is not None else None

    async def list_all(self) -> list[dict[str, Any]]:
        """Return copies of all records ordered by id."""
        async with self._lock:
            return [copy.deepcopy(self._records[key]) for key in sorted(self._records)]

    async def update(
        self,
        product_id: int,
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Apply a partial update.

        Returns:
            Updated record, or None if the id doesn't exist

        Raises:
            UniqueConstraintError: If a unique field is already used
        """
        async with self._lock:
            record = self._records.get(product_id)
            if record is None:
                return None
            self._check_unique(changes, product_id)
            record.update(
                {key: copy.deepcopy(value) for key, value in changes.items() if key not in PROTECTED_FIELDS}
            )
            record["updated_at"] = utc_now()
            return copy.deepcopy(record)

    async def replace(
        self,
        product_id: int,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Replace every field of a record, keeping id and created_at.

        Returns:
            Replaced record, or None if the id doesn't exist

        Raises:
            UniqueConstraintError: If a unique field is already used
        """
        async with self._lock:
            existing = self._records.get(product_id)
            if existing is None:
                return None
            self._check_unique(data, product_id)
            record = {key: copy.deepcopy(value) for key, value in data.items() if key not in PROTECTED_FIELDS}
            record.update(
                id=product_id,
                created_at=existing["created_at"],
                updated_at=utc_now(),
            )
            self._records[product_id] = record
            return copy.deepcopy(record)

    async def delete(self, product_id: int) -> bool:
        """Remove a record. Returns False if it didn't exist."""
        async with self._lock:
            removed = self._records.pop(product_id, None)

        if removed is not None:
            logger.debug(f"Deleted product {product_id}")
        return removed is not None

    async def count(self) -> int:
        async with self._lock:
            return len(self._records)

    async def clear(self) -> None:
        """Remove every record. Id assignment continues where it left off."""
        async with self._lock:
            self._records.clear()
