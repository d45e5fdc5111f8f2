"""
Row Store — the generic storage capability the core depends on.

Rows are plain dicts addressed by a key dict (one or more equality
fields). Every backend raises PersistenceError when it cannot complete
an operation; callers decide whether that is fatal.
"""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def new_row_id() -> str:
    return uuid.uuid4().hex


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RowStore(ABC):
    """Abstract row store. Concrete backend is chosen at deployment."""

    def connect(self) -> None:
        """Open backend resources (no-op by default)."""

    def close(self) -> None:
        """Release backend resources (no-op by default)."""

    @abstractmethod
    def select_by_key(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def select_where(self, table: str, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        ...

    @abstractmethod
    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it with its generated ``id``."""
        ...

    @abstractmethod
    def update_by_key(
        self, table: str, key: dict[str, Any], changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Apply changes to the matching row; None if nothing matched."""
        ...

    @abstractmethod
    def upsert_by_unique_key(
        self,
        table: str,
        key: dict[str, Any],
        changes: dict[str, Any],
        on_insert: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Atomically update the row matching ``key`` with ``changes``, or
        insert ``key | on_insert | changes`` when none exists.
        """
        ...


class InMemoryRowStore(RowStore):
    """
    Process-local store for development and tests.
    A single lock guards every table access, so upserts cannot produce
    duplicates and reads never see a row mid-update.
    """

    def __init__(self):
        self._tables: dict[str, list[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def connect(self) -> None:
        logger.info("Using in-memory row store")

    def _rows(self, table: str) -> list[dict[str, Any]]:
        # caller holds self._lock
        return self._tables.setdefault(table, [])

    @staticmethod
    def _matches(row: dict[str, Any], criteria: dict[str, Any]) -> bool:
        return all(row.get(k) == v for k, v in criteria.items())

    def select_by_key(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        with self._lock:
            for row in self._rows(table):
                if self._matches(row, key):
                    return deepcopy(row)
        return None

    def select_where(self, table: str, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        with self._lock:
            return [deepcopy(r) for r in self._rows(table) if self._matches(r, criteria)]

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        stored = deepcopy(row)
        stored.setdefault("id", new_row_id())
        stored.setdefault("created_at", utcnow_iso())
        with self._lock:
            self._rows(table).append(stored)
        return deepcopy(stored)

    def update_by_key(
        self, table: str, key: dict[str, Any], changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        with self._lock:
            for row in self._rows(table):
                if self._matches(row, key):
                    row.update(deepcopy(changes))
                    return deepcopy(row)
        return None

    def upsert_by_unique_key(
        self,
        table: str,
        key: dict[str, Any],
        changes: dict[str, Any],
        on_insert: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        with self._lock:
            for row in self._rows(table):
                if self._matches(row, key):
                    row.update(deepcopy(changes))
                    return deepcopy(row)

            stored = {**deepcopy(on_insert or {}), **deepcopy(key), **deepcopy(changes)}
            stored.setdefault("id", new_row_id())
            stored.setdefault("created_at", utcnow_iso())
            self._rows(table).append(stored)
            return deepcopy(stored)

    def count(self, table: str) -> int:
        with self._lock:
            return len(self._rows(table))
