"""Runtime configuration defaults for menu, ledger and logging."""

from __future__ import annotations

import os
from pathlib import Path

RESTAURANT_NAME = "SKE Object Cafe"
MENU_PATH = "data/menu.txt"
ORDERS_LOG_PATH = "data/ske_orders.log"
# "file" writes the ledger to ORDERS_LOG_PATH, "memory" keeps records in-process.
LEDGER_BACKEND = "file"
DEBUG_LOG_PATH = "/tmp/cafe-order-debug.log"
LOG_LEVEL = "DEBUG"
FIRST_ORDER_NUMBER = 1

_RESTAURANT_NAME_ENV = "CAFE_RESTAURANT_NAME"
_MENU_PATH_ENV = "CAFE_MENU_PATH"
_ORDERS_LOG_ENV = "CAFE_ORDERS_LOG"
_LEDGER_BACKEND_ENV = "CAFE_LEDGER_BACKEND"
_DEBUG_LOG_ENV = "CAFE_DEBUG_LOG"
_LOG_LEVEL_ENV = "CAFE_LOG_LEVEL"


def _env_or_default(name: str, default: str) -> str:
    value = os.environ.get(name, "").strip()
    return value or default


def restaurant_name() -> str:
    return _env_or_default(_RESTAURANT_NAME_ENV, RESTAURANT_NAME)


def menu_path() -> Path:
    """Menu file location; CAFE_MENU_PATH wins over MENU_PATH."""
    return Path(_env_or_default(_MENU_PATH_ENV, MENU_PATH))


def orders_log_path() -> Path:
    """Primary ledger file location; CAFE_ORDERS_LOG wins over ORDERS_LOG_PATH."""
    return Path(_env_or_default(_ORDERS_LOG_ENV, ORDERS_LOG_PATH))


def ledger_backend() -> str:
    return _env_or_default(_LEDGER_BACKEND_ENV, LEDGER_BACKEND).lower()


def debug_log_path() -> Path:
    return Path(_env_or_default(_DEBUG_LOG_ENV, DEBUG_LOG_PATH))


def log_level() -> str:
    return _env_or_default(_LOG_LEVEL_ENV, LOG_LEVEL).upper()
