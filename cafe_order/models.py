"""Domain models for cafe-order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class MenuLine:
    """One purchasable item. Ids start at 1 in catalog load order."""

    item_id: int
    name: str
    unit_price: Decimal


@dataclass(frozen=True)
class ItemResult:
    """Outcome of an order mutation: whether it applied and the resulting quantity."""

    ok: bool
    item_id: int
    quantity: int = 0
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class ReceiptLine:
    item_id: int
    name: str
    quantity: int
    unit_price: Decimal
    amount: Decimal


@dataclass(frozen=True)
class Receipt:
    """Read-only snapshot of an order for display and the ledger."""

    order_number: int | None
    timestamp: datetime | None
    lines: tuple[ReceiptLine, ...]
    total: Decimal

    @property
    def is_finalized(self) -> bool:
        return self.order_number is not None
