"""Tests for Order quantities, totals and finalization stamp."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from cafe_order.catalog import MenuCatalog
from cafe_order.order import Order, OrderFinalizationError

NOW = datetime(2026, 10, 19, 12, 30, tzinfo=timezone.utc)


class TestAddItem:
    def test_add_accumulates(self, order: Order):
        assert order.add_item(1, 2)
        result = order.add_item(1, 3)
        assert result.ok
        assert result.quantity == 5
        assert order.get_quantity(1) == 5

    @pytest.mark.parametrize("item_id", [0, 3, -1, 100])
    def test_invalid_id_rejected_without_change(self, order: Order, item_id: int):
        result = order.add_item(item_id, 1)
        assert not result
        assert "invalid item number" in result.error
        assert order.is_empty()

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_non_positive_quantity_rejected(self, order: Order, quantity: int):
        order.add_item(1, 2)
        result = order.add_item(1, quantity)
        assert not result
        assert order.get_quantity(1) == 2

    def test_no_upper_bound(self, order: Order):
        order.add_item(2, 10**9)
        order.add_item(2, 10**9)
        assert order.get_quantity(2) == 2 * 10**9

    def test_empty_catalog_rejects_everything(self):
        order = Order(MenuCatalog())
        assert not order.add_item(1, 1)
        assert order.is_empty()


class TestRemoveItem:
    def test_remove_all(self, order: Order):
        order.add_item(1, 4)
        assert order.remove_item(1)
        assert order.get_quantity(1) == 0
        assert order.is_empty()

    def test_remove_more_than_present_clamps_to_zero(self, order: Order):
        order.add_item(1, 2)
        result = order.remove_item(1, 5)
        assert result.ok
        assert result.quantity == 0
        assert order.get_quantity(1) == 0

    def test_partial_remove(self, order: Order):
        order.add_item(2, 3)
        order.remove_item(2, 1)
        assert order.get_quantity(2) == 2

    def test_invalid_id_reports_error(self, order: Order):
        order.add_item(1, 1)
        result = order.remove_item(7, 1)
        assert not result
        assert order.get_quantity(1) == 1

    def test_negative_quantity_does_not_add(self, order: Order):
        order.add_item(1, 1)
        assert not order.remove_item(1, -3)
        assert order.get_quantity(1) == 1

    @pytest.mark.parametrize("quantity", [0.5, True, "1", Decimal("1")])
    def test_non_integer_quantity_rejected(self, order: Order, quantity):
        order.add_item(1, 2)
        result = order.remove_item(1, quantity)
        assert not result
        assert result.quantity == 2
        assert order.get_quantity(1) == 2
        assert order.total() == Decimal("500")


class TestTotals:
    def test_pizza_and_salad_total(self, order: Order):
        order.add_item(1, 2)
        order.add_item(2, 1)
        assert order.total() == Decimal("530")
        assert order.item_ids() == [1, 2]

    def test_empty_order_total_is_zero(self, order: Order):
        assert order.total() == 0
        assert order.is_empty()
        assert order.item_ids() == []

    def test_total_tracks_later_changes(self, order: Order):
        order.add_item(1, 1)
        assert order.total() == Decimal("250")
        order.add_item(2, 2)
        order.remove_item(1)
        assert order.total() == Decimal("60")

    def test_item_ids_ascending(self, order: Order):
        order.add_item(2, 1)
        order.add_item(1, 1)
        assert order.item_ids() == [1, 2]

    def test_discount_hook_applies(self, catalog: MenuCatalog):
        order = Order(catalog, discount=lambda o, subtotal: subtotal - Decimal("10"))
        order.add_item(2, 1)
        assert order.subtotal() == Decimal("30")
        assert order.total() == Decimal("20")

    def test_invalid_quantity_lookup_returns_zero(self, order: Order):
        assert order.get_quantity(0) == 0
        assert order.get_quantity(42) == 0


class TestFinalization:
    def test_stamp_is_set_once(self, order: Order):
        assert order.order_number is None
        assert order.timestamp is None
        number = order.mark_finalized(lambda: 7, lambda: NOW)
        assert number == 7
        assert order.order_number == 7
        assert order.timestamp == NOW

    def test_second_stamp_rejected_without_issuing(self, order: Order):
        order.mark_finalized(lambda: 1, lambda: NOW)
        issued = []

        def issue() -> int:
            issued.append(2)
            return 2

        with pytest.raises(OrderFinalizationError):
            order.mark_finalized(issue, lambda: NOW)
        assert issued == []
        assert order.order_number == 1

    def test_receipt_lines(self, order: Order):
        order.add_item(2, 1)
        order.add_item(1, 2)
        order.mark_finalized(lambda: 3, lambda: NOW)
        receipt = order.receipt()
        assert receipt.order_number == 3
        assert receipt.timestamp == NOW
        assert [(line.name, line.quantity, line.amount) for line in receipt.lines] == [
            ("Pizza", 2, Decimal("500")),
            ("Salad", 1, Decimal("30")),
        ]
        assert receipt.total == Decimal("530")
