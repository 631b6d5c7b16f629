"""End-to-end CLI tests against JSON files in a temporary directory."""

import json
import logging

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli

CHECKOUT_ARGS = [
    "order", "checkout", "--user", "alice",
    "--name", "Alice Doe", "--street", "1 Main St", "--city", "Springfield",
    "--state", "IL", "--postal-code", "62701", "--country", "US",
    "--payment", "credit_card",
]


@pytest.fixture
def run(monkeypatch, tmp_path):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("STOREFRONT_CACHE_TTL", "0")
    monkeypatch.delenv("STOREFRONT_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, list(args))

    yield invoke

    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestCatalogCommands:

    def test_add_and_list(self, run):
        result = run("product", "add", "--name", "Widget", "--price", "20.00", "--stock", "5")
        assert result.exit_code == 0, result.output
        assert "Product #1 'Widget' added at $20.00 (stock 5)" in result.output

        listing = run("product", "list")
        assert "Widget" in listing.output
        assert "active" in listing.output

    def test_restock_and_low_stock(self, run):
        run("product", "add", "--name", "Widget", "--price", "20.00", "--stock", "2")

        assert "No inventory records found." not in run("inventory", "show", "--low-stock", "5").output
        assert "now 12" in run("inventory", "restock", "--product", "1", "--quantity", "10").output
        assert "No inventory records found." in run("inventory", "show", "--low-stock", "5").output

    def test_domain_error_shows_code(self, run):
        result = run("product", "update", "--id", "9", "--price", "1.00")
        assert result.exit_code == 1
        assert "[NOT_FOUND]" in result.output


class TestShoppingFlow:

    def test_cart_checkout_and_cancel(self, run, tmp_path):
        run("product", "add", "--name", "Widget", "--price", "20.00", "--stock", "5")
        run("user", "register", "--user", "alice", "--email", "alice@example.com")

        assert run("cart", "add", "--user", "alice", "--product", "1", "--quantity", "3").exit_code == 0
        too_many = run("cart", "add", "--user", "alice", "--product", "1", "--quantity", "3")
        assert too_many.exit_code == 1
        assert "[INSUFFICIENT_STOCK]" in too_many.output
        assert "(3 item(s))" in run("cart", "show", "--user", "alice").output

        placed = run(*CHECKOUT_ARGS)
        assert placed.exit_code == 0, placed.output
        assert "Order #1 created" in placed.output
        assert "$72.00" in placed.output
        assert "is empty" in run("cart", "show", "--user", "alice").output

        products = json.loads((tmp_path / "data" / "products.json").read_text())
        assert products[0]["stock"] == 2

        assert "PENDING" in run("order", "list", "--user", "alice").output
        assert "CONFIRMED" in run("order", "payment", "--id", "1", "--status", "completed").output

        cancelled = run("order", "cancel", "--id", "1", "--reason", "changed my mind")
        assert cancelled.exit_code == 0, cancelled.output
        products = json.loads((tmp_path / "data" / "products.json").read_text())
        assert products[0]["stock"] == 5

        shown = run("order", "show", "--id", "1")
        assert "status=CANCELLED" in shown.output
        assert "changed my mind" in shown.output

    def test_checkout_empty_cart(self, run):
        result = run(*CHECKOUT_ARGS)
        assert result.exit_code == 1
        assert "[EMPTY_CART]" in result.output

    def test_invalid_transition(self, run):
        run("product", "add", "--name", "Widget", "--price", "20.00", "--stock", "5")
        run("cart", "add", "--user", "alice", "--product", "1")
        run(*CHECKOUT_ARGS)

        result = run("order", "status", "--id", "1", "--to", "shipped")

        assert result.exit_code == 1
        assert "[INVALID_TRANSITION]" in result.output

    def test_show_requires_exactly_one_selector(self, run):
        assert run("order", "show").exit_code == 2


class TestReportCommands:

    def test_order_list_filters(self, run):
        run("product", "add", "--name", "Widget", "--price", "20.00", "--stock", "5")
        run("cart", "add", "--user", "alice", "--product", "1")
        run(*CHECKOUT_ARGS)

        pending = run("order", "list", "--status", "pending")
        assert pending.exit_code == 0, pending.output
        assert "PENDING" in pending.output
        assert "No orders found." in run("order", "list", "--payment", "failed").output

        run("order", "payment", "--id", "1", "--status", "completed")
        assert "CONFIRMED" in run("order", "list", "--status", "confirmed", "--payment", "completed").output
        assert "No orders found." in run("order", "list", "--status", "pending").output

    def test_order_list_user_excludes_other_filters(self, run):
        result = run("order", "list", "--user", "alice", "--status", "pending")
        assert result.exit_code == 2
        assert "cannot be combined" in result.output

    def test_abandoned_and_cleanup(self, run, tmp_path):
        run("product", "add", "--name", "Widget", "--price", "20.00", "--stock", "5")
        run("cart", "add", "--user", "alice", "--product", "1", "--quantity", "2")

        assert "No abandoned carts." in run("cart", "abandoned", "--days", "30").output
        assert "alice" in run("cart", "abandoned", "--days", "0").output

        cleaned = run("cart", "cleanup", "--days", "0")
        assert cleaned.exit_code == 0, cleaned.output
        assert "Cleared 1 abandoned cart(s)." in cleaned.output
        assert "is empty" in run("cart", "show", "--user", "alice").output
        carts = json.loads((tmp_path / "data" / "carts.json").read_text())
        assert [c["user_id"] for c in carts] == ["alice"]

    def test_negative_days_rejected(self, run):
        assert run("cart", "cleanup", "--days", "-1").exit_code == 2


class TestLogLevelOption:

    def test_unknown_level_rejected(self, run):
        result = run("--log-level", "chatty", "product", "list")
        assert result.exit_code == 2
        assert "Unknown log level" in result.output
