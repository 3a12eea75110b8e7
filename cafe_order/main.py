"""Entry point for the cafe-order Textual app."""

from __future__ import annotations

from loguru import logger

from cafe_order.logging import setup_logging
from cafe_order.order_app import OrderApp
from cafe_order.service import init_service


def main() -> None:
    """Run the Textual application, then close the ledger."""
    setup_logging()
    service = init_service()
    logger.info("Starting cafe-order for {}", service.name)
    try:
        OrderApp(service).run()
    finally:
        service.shutdown()
        print("Goodbye")


if __name__ == "__main__":
    main()
