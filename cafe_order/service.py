"""Restaurant service: menu access and order finalization."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Protocol

from loguru import logger

from cafe_order.catalog import MenuCatalog, load_menu
from cafe_order.config import ledger_backend, menu_path, orders_log_path, restaurant_name
from cafe_order.ledger import Ledger, LedgerSink, MemoryLedger, OrderLedger
from cafe_order.numbering import OrderNumberGenerator
from cafe_order.order import Order, OrderFinalizationError


class RestaurantManager(Protocol):
    """What the console layer needs from a restaurant backend."""

    def get_menu(self) -> MenuCatalog: ...

    def finalize_order(self, order: Order) -> int: ...

    def shutdown(self) -> None: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RestaurantService:
    """Composes the catalog, order numbering and the ledger."""

    def __init__(
        self,
        catalog: MenuCatalog,
        ledger: Ledger,
        numbers: OrderNumberGenerator | None = None,
        name: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._numbers = numbers or OrderNumberGenerator()
        self._clock = clock
        self.name = name or restaurant_name()
        self._shutdown = False
        # Guards _shutdown and _in_flight; shutdown() waits until no finalization is running.
        self._state = threading.Condition()
        self._in_flight = 0

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def get_menu(self) -> MenuCatalog:
        return self._catalog

    def new_order(self) -> Order:
        return Order(self._catalog)

    def finalize_order(self, order: Order) -> int:
        """
        Number, timestamp and record an order; return its number.

        The number is issued before the ledger write and the numbering lock is
        not held during file I/O. A ledger failure propagates but the order
        keeps its number and timestamp.
        """
        if order is None:
            raise OrderFinalizationError("Cannot finalize a missing order")
        if order.catalog is not self._catalog:
            logger.warning("Finalizing an order built against a different catalog")

        with self._state:
            if self._shutdown:
                raise RuntimeError("Restaurant service is shut down")
            self._in_flight += 1
        try:
            number = order.mark_finalized(self._numbers.next, self._clock)
            logger.info("Order {} finalized: {} item kinds, total {}", number, len(order.item_ids()), order.total())

            entry = self._ledger.record(order)
            if entry.sink not in (LedgerSink.PRIMARY, LedgerSink.MEMORY):
                logger.warning("Order {} recorded in fallback ledger {}", number, entry.location)
        finally:
            with self._state:
                self._in_flight -= 1
                if not self._in_flight:
                    self._state.notify_all()
        return number

    def shutdown(self) -> None:
        """
        Flush and close the ledger. Safe to call more than once.

        New finalizations are refused at once; ones already running finish
        their ledger write before the ledger is closed.
        """
        with self._state:
            if self._shutdown:
                return
            self._shutdown = True
            self._state.wait_for(lambda: self._in_flight == 0)
        self._ledger.close()
        logger.info("Restaurant service shut down")


def build_service(
    backend: str | None = None,
    menu_file: Path | None = None,
    ledger_file: Path | None = None,
) -> RestaurantService:
    """Create a service from configuration. ``backend`` is ``file`` or ``memory``."""
    backend = (backend or ledger_backend()).lower()
    if backend == "file":
        ledger: Ledger = OrderLedger(ledger_file or orders_log_path())
    elif backend == "memory":
        ledger = MemoryLedger()
    else:
        raise ValueError(f"Unknown ledger backend {backend!r}; expected 'file' or 'memory'")

    catalog = load_menu(menu_file or menu_path())
    if not catalog:
        logger.error("Menu is empty; every order item will be rejected")
    logger.info("Restaurant service ready: backend={} menu_items={}", backend, len(catalog))
    return RestaurantService(catalog, ledger)


_instance: RestaurantService | None = None
_instance_lock = threading.Lock()


def init_service(service: RestaurantService | None = None) -> RestaurantService:
    """Install the process-wide service at startup. Only the first call wins."""
    global _instance
    with _instance_lock:
        if _instance is not None:
            if service is not None and service is not _instance:
                raise RuntimeError("Restaurant service already initialized")
            return _instance
        _instance = service if service is not None else build_service()
        return _instance


def get_service() -> RestaurantService:
    """Return the process-wide service, building it from configuration on first use."""
    service = _instance
    if service is None:
        # init_service re-checks under the lock.
        service = init_service()
    return service
