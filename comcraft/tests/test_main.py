"""
Tests: command-line entry point.

Run with:
    pytest comcraft/tests/test_main.py -v
"""

import argparse

import pytest

from comcraft.main import main, parse_selection, quote
from comcraft.models.schemas import Selection


@pytest.fixture(autouse=True)
def _no_root_handler(monkeypatch):
    monkeypatch.setattr("comcraft.main.setup_logging", lambda level="INFO": None)


class TestParseSelection:
    def test_service_only(self):
        s = parse_selection("website")
        assert (s.service_id, s.tier_index, s.quantity) == ("website", None, None)

    def test_tier_and_quantity(self):
        s = parse_selection("discord_bot:2:3")
        assert (s.service_id, s.tier_index, s.quantity) == ("discord_bot", 2, 3)

    @pytest.mark.parametrize("token", ["website:abc", "api:1:many"])
    def test_non_numeric_parts_are_argument_errors(self, token):
        with pytest.raises(argparse.ArgumentTypeError, match="must be integers"):
            parse_selection(token)


class TestQuoteCommand:
    def test_quote_returns_priced_result(self):
        result = quote(
            [Selection(service_id="website", tier_index=1), Selection(service_id="discord_bot")],
            first_time=True,
        )
        assert result.total == pytest.approx(1530)

    def test_main_quote(self):
        assert main(["quote", "webshop:0", "--rush"]) == 0

    def test_bad_tier_is_a_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["quote", "website:abc"])
        assert exc.value.code == 2
        assert "invalid selection 'website:abc'" in capsys.readouterr().err

    def test_main_without_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out
