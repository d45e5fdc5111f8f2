"""
Mongo Client — raw database connection management, plus the MongoDB
implementation of the RowStore capability.
"""

from __future__ import annotations

import logging
from typing import Any

from pymongo import ASCENDING, ReturnDocument
from pymongo import MongoClient as PyMongoClient
from pymongo.errors import PyMongoError

from comcraft.config import Settings
from comcraft.exceptions import PersistenceError
from comcraft.persistence.row_store import RowStore, new_row_id, utcnow_iso

logger = logging.getLogger(__name__)

_NO_OBJECT_ID = {"_id": 0}


class MongoClient:
    """Thin wrapper around pymongo, owned by the application lifecycle."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Any = None
        self._db: Any = None

    def connect(self) -> None:
        """Establish the MongoDB connection."""
        if self._client is not None:
            return
        self._client = PyMongoClient(
            self.settings.mongodb_uri,
            serverSelectionTimeoutMS=self.settings.mongodb_timeout_ms,
        )
        self._db = self._client[self.settings.mongodb_database]
        logger.info(f"Connected to MongoDB: {self.settings.mongodb_database}")

    def get_database(self) -> Any:
        """Return the database handle."""
        if self._db is None:
            self.connect()
        return self._db

    def close(self) -> None:
        """Close the connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")


class MongoRowStore(RowStore):
    """
    RowStore over MongoDB collections.

    ``unique_keys`` maps collection name -> key fields; a unique index is
    created for each on connect(), which makes upsert_by_unique_key safe
    against concurrent duplicate inserts.
    """

    def __init__(self, client: MongoClient, unique_keys: dict[str, list[str]] | None = None):
        self.client = client
        self.unique_keys = unique_keys or {}

    def _collection(self, table: str) -> Any:
        return self.client.get_database()[table]

    def connect(self) -> None:
        try:
            self.client.connect()
            for table, fields in self.unique_keys.items():
                self._collection(table).create_index(
                    [(f, ASCENDING) for f in fields], unique=True
                )
                logger.debug(f"Ensured unique index {fields} on {table}")
        except PyMongoError as exc:
            raise PersistenceError(f"MongoDB connect failed: {exc}") from exc

    def close(self) -> None:
        self.client.close()

    def select_by_key(self, table: str, key: dict[str, Any]) -> dict[str, Any] | None:
        try:
            return self._collection(table).find_one(key, _NO_OBJECT_ID)
        except PyMongoError as exc:
            raise PersistenceError(f"find_one on {table} failed: {exc}") from exc

    def select_where(self, table: str, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        try:
            return list(self._collection(table).find(criteria, _NO_OBJECT_ID))
        except PyMongoError as exc:
            raise PersistenceError(f"find on {table} failed: {exc}") from exc

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        doc = dict(row)
        doc.setdefault("id", new_row_id())
        doc.setdefault("created_at", utcnow_iso())
        try:
            self._collection(table).insert_one(doc)
        except PyMongoError as exc:
            raise PersistenceError(f"insert into {table} failed: {exc}") from exc
        doc.pop("_id", None)
        return doc

    def update_by_key(
        self, table: str, key: dict[str, Any], changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        try:
            return self._collection(table).find_one_and_update(
                key,
                {"$set": changes},
                projection=_NO_OBJECT_ID,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise PersistenceError(f"update on {table} failed: {exc}") from exc

    def upsert_by_unique_key(
        self,
        table: str,
        key: dict[str, Any],
        changes: dict[str, Any],
        on_insert: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        # $set and $setOnInsert may not touch the same field
        insert_only = {
            k: v for k, v in (on_insert or {}).items()
            if k not in changes and k not in key
        }
        insert_only.setdefault("id", new_row_id())
        insert_only.setdefault("created_at", utcnow_iso())
        try:
            return self._collection(table).find_one_and_update(
                key,
                {"$set": changes, "$setOnInsert": insert_only},
                projection=_NO_OBJECT_ID,
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise PersistenceError(f"upsert on {table} failed: {exc}") from exc
