"""Persistence — RowStore backends and typed repositories."""

from __future__ import annotations

from comcraft.config import Settings
from comcraft.models.enums import StoreBackend
from comcraft.persistence.mongo_client import MongoClient, MongoRowStore
from comcraft.persistence.repositories import (
    CommandPermissionRepository,
    CustomerRepository,
    OrderRepository,
)
from comcraft.persistence.row_store import InMemoryRowStore, RowStore


def build_store(settings: Settings) -> RowStore:
    """Create the RowStore selected by ``settings.store_backend``."""
    backend = StoreBackend(settings.store_backend.lower())
    if backend is StoreBackend.MONGO:
        return MongoRowStore(
            MongoClient(settings),
            unique_keys={
                settings.users_collection: ["discord_id"],
                settings.orders_collection: ["order_number"],
                settings.command_permissions_collection: ["guild_id", "command_name"],
            },
        )
    return InMemoryRowStore()


__all__ = [
    "RowStore",
    "InMemoryRowStore",
    "MongoClient",
    "MongoRowStore",
    "CustomerRepository",
    "OrderRepository",
    "CommandPermissionRepository",
    "build_store",
]
