"""A customer's order: per-item quantities, total and finalization stamp."""

from __future__ import annotations

import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable

from loguru import logger

from cafe_order.catalog import MenuCatalog
from cafe_order.models import ItemResult, Receipt, ReceiptLine

Discount = Callable[["Order", Decimal], Decimal]


class OrderFinalizationError(ValueError):
    """Raised when an order cannot be finalized (missing or already numbered)."""


def no_discount(order: Order, subtotal: Decimal) -> Decimal:
    """Default discount hook: the total is the subtotal."""
    return subtotal


class Order:
    """
    Quantities of catalog items for one customer transaction.

    Invalid item ids are reported through the returned ItemResult and a
    warning log line, never by raising, so a bad id from the console does not
    abort the order in progress. Order number and timestamp are set together,
    exactly once, by mark_finalized().
    """

    def __init__(self, catalog: MenuCatalog, discount: Discount = no_discount) -> None:
        self.catalog = catalog
        self._discount = discount
        self._quantities: dict[int, int] = {}
        # (order_number, timestamp) as one value so neither is visible without the other.
        self._stamp: tuple[int, datetime] | None = None
        self._stamp_lock = threading.Lock()

    def _invalid(self, action: str, item_id: int) -> ItemResult:
        message = f"{action}: invalid item number {item_id}"
        logger.warning(message)
        return ItemResult(ok=False, item_id=item_id, error=message)

    def add_item(self, item_id: int, quantity: int = 1) -> ItemResult:
        """Add ``quantity`` units of an item. Non-positive quantities are rejected."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return ItemResult(
                ok=False,
                item_id=item_id,
                quantity=self._quantities.get(item_id, 0),
                error=f"addItem: quantity must be positive, got {quantity}",
            )
        if not self.catalog.is_valid_id(item_id):
            return self._invalid("addItem", item_id)

        self._quantities[item_id] = self._quantities.get(item_id, 0) + quantity
        return ItemResult(ok=True, item_id=item_id, quantity=self._quantities[item_id])

    def remove_item(self, item_id: int, quantity: int | None = None) -> ItemResult:
        """
        Remove units of an item.

        Without ``quantity`` every unit is removed. Removing more than the
        order holds leaves zero; that is not an error.
        """
        if not self.catalog.is_valid_id(item_id):
            return self._invalid("removeItem", item_id)

        current = self._quantities.get(item_id, 0)
        if quantity is not None and (isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0):
            return ItemResult(
                ok=False,
                item_id=item_id,
                quantity=current,
                error=f"removeItem: quantity must be positive, got {quantity}",
            )
        remaining = 0 if quantity is None else max(0, current - quantity)
        if remaining:
            self._quantities[item_id] = remaining
        else:
            self._quantities.pop(item_id, None)
        return ItemResult(ok=True, item_id=item_id, quantity=remaining)

    def get_quantity(self, item_id: int) -> int:
        if not self.catalog.is_valid_id(item_id):
            self._invalid("getQuantityOfItem", item_id)
            return 0
        return self._quantities.get(item_id, 0)

    def subtotal(self) -> Decimal:
        total = Decimal(0)
        for line in self.catalog:
            total += self._quantities.get(line.item_id, 0) * line.unit_price
        return total

    def total(self) -> Decimal:
        """Current total after the discount hook; recomputed on every call."""
        return self._discount(self, self.subtotal())

    def is_empty(self) -> bool:
        return not any(self._quantities.values())

    def item_ids(self) -> list[int]:
        """Ids with a positive quantity, ascending."""
        return sorted(item_id for item_id, qty in self._quantities.items() if qty > 0)

    @property
    def order_number(self) -> int | None:
        stamp = self._stamp
        return stamp[0] if stamp is not None else None

    @property
    def timestamp(self) -> datetime | None:
        stamp = self._stamp
        return stamp[1] if stamp is not None else None

    def mark_finalized(self, issue_number: Callable[[], int], clock: Callable[[], datetime]) -> int:
        """
        Assign the order number and timestamp in one step.

        ``issue_number`` is only called once the order is known to be
        unnumbered, so a rejected call never consumes a number.
        """
        with self._stamp_lock:
            if self._stamp is not None:
                raise OrderFinalizationError(f"Order already finalized as No. {self._stamp[0]}")
            number = issue_number()
            self._stamp = (number, clock())
        return number

    def receipt(self) -> Receipt:
        stamp = self._stamp
        lines = []
        for item_id in self.item_ids():
            menu_line = self.catalog.get(item_id)
            qty = self._quantities[item_id]
            lines.append(
                ReceiptLine(
                    item_id=item_id,
                    name=menu_line.name,
                    quantity=qty,
                    unit_price=menu_line.unit_price,
                    amount=qty * menu_line.unit_price,
                )
            )
        return Receipt(
            order_number=stamp[0] if stamp else None,
            timestamp=stamp[1] if stamp else None,
            lines=tuple(lines),
            total=self.total(),
        )
