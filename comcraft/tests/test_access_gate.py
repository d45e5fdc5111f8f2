"""
Tests: command access gate and permission administration.

Run with:
    pytest comcraft/tests/test_access_gate.py -v
"""

import pytest

from comcraft.exceptions import PersistenceError
from comcraft.permissions.access_gate import RESTRICTABLE_COMMANDS, CommandAccessGate
from comcraft.persistence import CommandPermissionRepository, InMemoryRowStore

GUILD = "1000"
MOD, VIP, MEMBER = "r-mod", "r-vip", "r-member"


class _BrokenStore(InMemoryRowStore):
    def __init__(self, exc):
        super().__init__()
        self.exc = exc
        self.lookups = 0

    def select_by_key(self, table, key):
        self.lookups += 1
        raise self.exc


class TestIsAllowed:
    def test_unrestrictable_command_always_allowed(self, gate, store):
        store.insert("guild_command_permissions", {
            "guild_id": GUILD, "command_name": "play", "allowed_role_ids": [MOD],
        })
        assert gate.is_allowed(GUILD, "play", [MEMBER]) is True

    def test_no_rule_allows_everyone(self, gate):
        assert gate.is_allowed(GUILD, "store", []) is True

    def test_empty_rule_allows_everyone(self, gate, permission_repo):
        permission_repo.set_rule(GUILD, "store", [])
        assert gate.is_allowed(GUILD, "store", [MEMBER]) is True

    def test_holder_of_allowed_role(self, gate, permission_repo):
        permission_repo.set_rule(GUILD, "buy", [MOD, VIP])
        assert gate.is_allowed(GUILD, "buy", [MEMBER, VIP]) is True

    def test_caller_without_allowed_role_is_denied(self, gate, permission_repo):
        permission_repo.set_rule(GUILD, "buy", [MOD])
        assert gate.is_allowed(GUILD, "buy", [MEMBER]) is False
        assert gate.is_allowed(GUILD, "buy", []) is False

    def test_administrator_bypass(self, gate, permission_repo):
        permission_repo.set_rule(GUILD, "redeem", [MOD])
        assert gate.is_allowed(GUILD, "redeem", [], caller_is_administrator=True) is True

    def test_rules_are_per_guild(self, gate, permission_repo):
        permission_repo.set_rule(GUILD, "ticket", [MOD])
        assert gate.is_allowed("2000", "ticket", [MEMBER]) is True

    @pytest.mark.parametrize("exc", [
        PersistenceError("store down"),
        ConnectionError("network unreachable"),
        RuntimeError("unexpected"),
    ])
    def test_lookup_failure_fails_open(self, exc):
        store = _BrokenStore(exc)
        gate = CommandAccessGate(CommandPermissionRepository(store))
        assert gate.is_allowed(GUILD, "shop", [MEMBER]) is True
        assert store.lookups == 1

    def test_unrestrictable_command_skips_lookup(self):
        store = _BrokenStore(RuntimeError("unexpected"))
        gate = CommandAccessGate(CommandPermissionRepository(store))
        assert gate.is_allowed(GUILD, "help", []) is True
        assert store.lookups == 0


class TestPermissionAdmin:
    def test_list_defaults_to_unrestricted(self, gate):
        entries = gate.list_permissions(GUILD)
        assert [e["command_name"] for e in entries] == [c.name for c in RESTRICTABLE_COMMANDS]
        assert all(e["allowed_role_ids"] is None for e in entries)
        assert entries[1]["label"] == "/shop (combat shop)"

    def test_update_and_list(self, gate):
        written = gate.update_permissions(GUILD, [
            {"command_name": "sell", "allowed_role_ids": [VIP]},
            {"command_name": "not-a-command", "allowed_role_ids": [VIP]},
            {"command_name": "store", "allowed_role_ids": []},
        ])
        assert written == 2
        by_name = {e["command_name"]: e["allowed_role_ids"] for e in gate.list_permissions(GUILD)}
        assert by_name["sell"] == [VIP]
        assert by_name["store"] is None

    def test_clearing_a_rule_lifts_restriction(self, gate):
        gate.update_permissions(GUILD, [{"command_name": "application", "allowed_role_ids": [MOD]}])
        assert gate.is_allowed(GUILD, "application", [MEMBER]) is False
        gate.update_permissions(GUILD, [{"command_name": "application", "allowed_role_ids": None}])
        assert gate.is_allowed(GUILD, "application", [MEMBER]) is True

    def test_update_overwrites_single_row(self, gate, store):
        gate.update_permissions(GUILD, [{"command_name": "sell", "allowed_role_ids": [MOD]}])
        gate.update_permissions(GUILD, [{"command_name": "sell", "allowed_role_ids": [VIP]}])
        assert len(store.select_where("guild_command_permissions", {"guild_id": GUILD})) == 1
