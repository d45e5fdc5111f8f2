"""
Repositories — the typed mapping boundary between domain records and
store rows. Everything above this module works with pydantic models.
"""

from __future__ import annotations

from typing import Any

from comcraft.exceptions import LookupUnavailableError
from comcraft.models.schemas import (
    CommandPermissionRule,
    Customer,
    CustomerIdentity,
    Order,
)
from comcraft.persistence.row_store import RowStore, utcnow_iso


class CustomerRepository:
    """Customers keyed by their Discord id."""

    def __init__(self, store: RowStore, table: str = "users"):
        self.store = store
        self.table = table

    def get_by_discord_id(self, discord_id: str) -> Customer | None:
        row = self.store.select_by_key(self.table, {"discord_id": discord_id})
        return Customer(**row) if row else None

    def upsert(self, identity: CustomerIdentity) -> Customer:
        """
        Update display fields of an existing customer or create a new one.
        Email and avatar are only overwritten when new values are supplied.
        """
        changes: dict[str, Any] = {
            "discord_tag": identity.discord_tag or f"User#{identity.discord_id[-4:]}",
            "updated_at": utcnow_iso(),
        }
        if identity.email:
            changes["email"] = identity.email
        if identity.avatar_url:
            changes["avatar_url"] = identity.avatar_url

        row = self.store.upsert_by_unique_key(
            self.table,
            {"discord_id": identity.discord_id},
            changes,
            on_insert={"email": None, "avatar_url": None, "is_admin": False},
        )
        return Customer(**row)


class OrderRepository:
    """Orders are insert-only from this layer; status changes happen elsewhere."""

    def __init__(self, store: RowStore, table: str = "orders"):
        self.store = store
        self.table = table

    def insert(self, order: Order) -> Order:
        row = order.model_dump(mode="json", exclude_none=False)
        if row.get("id") is None:
            row.pop("id", None)
        return Order(**self.store.insert(self.table, row))

    def get_by_number(self, order_number: str) -> Order | None:
        row = self.store.select_by_key(self.table, {"order_number": order_number})
        return Order(**row) if row else None

    def list_for_customer(self, discord_id: str) -> list[Order]:
        return [Order(**r) for r in self.store.select_where(self.table, {"discord_id": discord_id})]


class CommandPermissionRepository:
    """Per-guild command allow-lists keyed by (guild_id, command_name)."""

    def __init__(self, store: RowStore, table: str = "guild_command_permissions"):
        self.store = store
        self.table = table

    @staticmethod
    def _to_rule(row: dict[str, Any]) -> CommandPermissionRule:
        return CommandPermissionRule(
            guild_id=row["guild_id"],
            command_name=row["command_name"],
            allowed_role_ids=[str(r) for r in (row.get("allowed_role_ids") or [])],
            updated_at=row.get("updated_at"),
        )

    def get_rule(self, guild_id: str, command_name: str) -> CommandPermissionRule | None:
        """Raises LookupUnavailableError if the store cannot be read."""
        try:
            row = self.store.select_by_key(
                self.table, {"guild_id": guild_id, "command_name": command_name}
            )
        except Exception as e:
            raise LookupUnavailableError(
                f"Permission lookup failed for {guild_id}/{command_name}: {e}"
            ) from e
        return self._to_rule(row) if row else None

    def list_for_guild(self, guild_id: str) -> list[CommandPermissionRule]:
        return [self._to_rule(r) for r in self.store.select_where(self.table, {"guild_id": guild_id})]

    def set_rule(
        self, guild_id: str, command_name: str, allowed_role_ids: list[str] | None
    ) -> CommandPermissionRule:
        """Store an allow-list; an empty list is stored as "no restriction"."""
        role_ids = [str(r) for r in allowed_role_ids] if allowed_role_ids else None
        row = self.store.upsert_by_unique_key(
            self.table,
            {"guild_id": guild_id, "command_name": command_name},
            {"allowed_role_ids": role_ids, "updated_at": utcnow_iso()},
        )
        return self._to_rule(row)
