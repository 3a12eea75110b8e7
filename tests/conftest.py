"""Shared pytest fixtures for cafe-order tests."""

from decimal import Decimal

import pytest

from cafe_order import service as service_module
from cafe_order.catalog import MenuCatalog
from cafe_order.ledger import MemoryLedger, OrderLedger
from cafe_order.order import Order
from cafe_order.service import RestaurantService


@pytest.fixture
def catalog() -> MenuCatalog:
    """Two-item menu: Pizza (id 1) and Salad (id 2)."""
    return MenuCatalog.from_pairs([("Pizza", Decimal("250")), ("Salad", Decimal("30"))])


@pytest.fixture
def order(catalog: MenuCatalog) -> Order:
    return Order(catalog)


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "data" / "orders.log"


@pytest.fixture
def file_service(catalog, ledger_path):
    service = RestaurantService(catalog, OrderLedger(ledger_path), name="Test Cafe")
    yield service
    service.shutdown()


@pytest.fixture
def memory_service(catalog):
    service = RestaurantService(catalog, MemoryLedger(), name="Test Cafe")
    yield service
    service.shutdown()


@pytest.fixture
def reset_process_service(monkeypatch):
    """Give a test a fresh process-wide service slot."""
    monkeypatch.setattr(service_module, "_instance", None)


@pytest.fixture
def blocked_ledger_path(tmp_path):
    """A ledger path whose parent is a regular file, so it can never be opened."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    return blocker / "orders.log"
