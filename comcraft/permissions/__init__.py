"""Permissions — per-guild role restrictions on slash commands."""

from .access_gate import RESTRICTABLE_COMMANDS, CommandAccessGate

__all__ = ["RESTRICTABLE_COMMANDS", "CommandAccessGate"]
