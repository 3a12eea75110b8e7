"""Order number issuing."""

from __future__ import annotations

import threading

from cafe_order.config import FIRST_ORDER_NUMBER


class OrderNumberGenerator:
    """Issues 1, 2, 3, ... with no gaps or duplicates across threads."""

    def __init__(self, start: int = FIRST_ORDER_NUMBER) -> None:
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        # Fetch-and-increment under one lock acquisition.
        with self._lock:
            number = self._next
            self._next += 1
        return number
