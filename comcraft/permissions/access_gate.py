"""
Command Access Gate — consulted before a restricted command handler runs.

Evaluation order:
  1. command not restrictable           -> allowed
  2. no rule, or empty allow-list       -> allowed
  3. caller is an administrator         -> allowed
  4. caller holds any allowed role      -> allowed, else denied

If the rule lookup fails the gate fails open.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from comcraft.exceptions import LookupUnavailableError
from comcraft.models.schemas import CommandPermissionRule, RestrictableCommand
from comcraft.persistence.repositories import CommandPermissionRepository

logger = logging.getLogger(__name__)


RESTRICTABLE_COMMANDS: list[RestrictableCommand] = [
    RestrictableCommand(name="store", label="/store"),
    RestrictableCommand(name="shop", label="/shop (combat shop)"),
    RestrictableCommand(name="buy", label="/buy"),
    RestrictableCommand(name="sell", label="/sell"),
    RestrictableCommand(name="application", label="/application"),
    RestrictableCommand(name="ticket", label="/ticket"),
    RestrictableCommand(name="redeem", label="/redeem"),
]

RESTRICTABLE_COMMAND_NAMES = frozenset(c.name for c in RESTRICTABLE_COMMANDS)


class CommandAccessGate:
    """Role-based allow-list check for restrictable commands."""

    def __init__(self, rules: CommandPermissionRepository):
        self.rules = rules

    def is_allowed(
        self,
        guild_id: str,
        command_name: str,
        caller_role_ids: Iterable[str],
        caller_is_administrator: bool = False,
    ) -> bool:
        if command_name not in RESTRICTABLE_COMMAND_NAMES:
            return True

        try:
            rule = self.rules.get_rule(guild_id, command_name)
        except LookupUnavailableError as e:
            logger.warning(f"Permission lookup unavailable, allowing /{command_name}: {e}")
            return True

        if rule is None or not rule.is_restricting:
            return True

        if caller_is_administrator:
            return True

        if set(map(str, caller_role_ids)) & set(rule.allowed_role_ids):
            return True

        logger.info(f"Denied /{command_name} in guild {guild_id}: no allowed role")
        return False

    def list_permissions(self, guild_id: str) -> list[dict[str, Any]]:
        """Every restrictable command with its allow-list (None = unrestricted)."""
        by_command: dict[str, CommandPermissionRule] = {
            r.command_name: r for r in self.rules.list_for_guild(guild_id)
        }
        result: list[dict[str, Any]] = []
        for cmd in RESTRICTABLE_COMMANDS:
            rule = by_command.get(cmd.name)
            result.append({
                "command_name": cmd.name,
                "label": cmd.label,
                "allowed_role_ids": rule.allowed_role_ids if rule and rule.is_restricting else None,
            })
        return result

    def update_permissions(self, guild_id: str, entries: list[dict[str, Any]]) -> int:
        """
        Save allow-lists for a guild. Unknown command names are ignored.
        Returns the number of rules written.
        """
        written = 0
        for entry in entries:
            name = entry.get("command_name")
            if name not in RESTRICTABLE_COMMAND_NAMES:
                continue
            self.rules.set_rule(guild_id, name, entry.get("allowed_role_ids"))
            written += 1
        logger.info(f"Updated {written} command permission(s) for guild {guild_id}")
        return written
