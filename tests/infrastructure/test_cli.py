"""End-to-end tests for the click CLI against a temporary data directory."""

import logging

import pytest
from click.testing import CliRunner

from armory.infrastructure import bootstrap
from armory.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("ARMORY_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("ARMORY_LOG_PATH", raising=False)
    monkeypatch.delenv("ARMORY_COMMISSION_RATE", raising=False)
    monkeypatch.delenv("ARMORY_LEDGER_TIMESTAMPS", raising=False)
    bootstrap.settings.cache_clear()
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield CliRunner()
    bootstrap.settings.cache_clear()
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)


def _ok(runner, *args):
    result = runner.invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result.output


class TestStockCommands:

    def test_fresh_ledger_is_seeded(self, runner):
        out = _ok(runner, "stock", "show")
        assert "Titanium" in out
        assert "Plastic Casing" in out
        assert "$125.00" in out

    def test_produce_and_withdraw(self, runner):
        out = _ok(runner, "stock", "produce", "--kind", "9mm", "--batches", "2")
        assert "Produced 100 rounds of 9mm" in out

        out = _ok(
            runner, "stock", "withdraw", "--category", "ammo", "--name", "9mm",
            "--quantity", "30", "--to", "Docks", "--user", "sal",
        )
        assert "Withdrew 30 x 9mm to Docks" in out

        out = _ok(runner, "stock", "withdrawals")
        assert "Docks" in out

    def test_overdraw_is_an_error(self, runner):
        result = runner.invoke(
            cli, ["stock", "withdraw", "--category", "ammo", "--name", "9mm", "--quantity", "1"]
        )
        assert result.exit_code == 1
        assert "Insufficient stock for 9mm" in result.output

    def test_add_set_route_dedupe(self, runner):
        assert "is now 15" in _ok(
            runner, "stock", "add", "--category", "ammo", "--name", "5mm", "--quantity", "15"
        )
        assert "set to 3" in _ok(
            runner, "stock", "set", "--category", "ammo", "--name", "5mm", "--quantity", "3"
        )
        assert "Iron: 160" in _ok(runner, "stock", "route", "--count", "1")
        assert "0 duplicate row(s)" in _ok(runner, "stock", "dedupe")


class TestOrderCommands:

    def test_order_lifecycle(self, runner):
        out = _ok(runner, "order", "create", "--customer", "Tony", "--family", "Marino",
                  "--items", "9mm:50")
        assert "Order #1 created  (status=pending)" in out

        out = _ok(runner, "scan")
        assert "Waiting on order #1" in out

        _ok(runner, "stock", "produce", "--kind", "9mm", "--batches", "1")
        assert "status=ready" in _ok(runner, "order", "show", "--id", "1")

        out = _ok(runner, "order", "update", "--id", "1", "--status", "delivered")
        assert "ready -> delivered" in out

        out = _ok(runner, "order", "list", "--status", "delivered")
        assert "Tony" in out

        assert "Order #1 deleted." in _ok(runner, "order", "delete", "--id", "1")
        assert "No orders found." in _ok(runner, "order", "list")

    def test_bad_items_format(self, runner):
        result = runner.invoke(
            cli, ["order", "create", "--customer", "A", "--family", "B", "--items", "9mm"]
        )
        assert result.exit_code != 0
        assert "Expected 'Kind:Quantity'" in result.output

    def test_missing_order(self, runner):
        result = runner.invoke(cli, ["order", "show", "--id", "99"])
        assert result.exit_code == 1
        assert "Order #99 not found" in result.output
