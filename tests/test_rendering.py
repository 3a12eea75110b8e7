"""Tests for menu and receipt rendering."""

from datetime import datetime, timezone
from decimal import Decimal

from cafe_order.catalog import MenuCatalog
from cafe_order.rendering import format_menu, format_price, format_receipt


class TestFormatMenu:
    def test_numbered_lines(self, catalog):
        plain = format_menu(catalog).plain
        lines = plain.splitlines()
        assert len(lines) == 2
        assert " 1) Pizza" in lines[0]
        assert "250.00" in lines[0]
        assert " 2) Salad" in lines[1]

    def test_highlight_marks_item(self, catalog):
        lines = format_menu(catalog, highlight=2).plain.splitlines()
        assert lines[1].startswith("➤")
        assert not lines[0].startswith("➤")

    def test_empty_menu(self):
        assert format_menu(MenuCatalog()).plain == "Menu unavailable"


class TestFormatReceipt:
    def test_open_order(self, order):
        order.add_item(1, 2)
        plain = format_receipt(order.receipt()).plain
        assert "Current order" in plain
        assert "Pizza" in plain
        assert "500.00" in plain

    def test_empty_order(self, order):
        assert "No items in order" in format_receipt(order.receipt()).plain

    def test_finalized_receipt(self, order):
        order.add_item(1, 2)
        order.add_item(2, 1)
        order.mark_finalized(lambda: 4, lambda: datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        plain = format_receipt(order.receipt(), "Test Cafe").plain
        assert plain.startswith("Test Cafe")
        assert "Order No. 4" in plain
        assert "Total Price" in plain
        assert "530.00" in plain


def test_format_price_groups_thousands():
    assert format_price(Decimal("1234.5")) == "1,234.50"
