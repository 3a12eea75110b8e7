"""Append-only text ledger of finalized orders."""

from __future__ import annotations

import sys
import tempfile
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, TextIO

from loguru import logger

from cafe_order.models import Receipt
from cafe_order.order import Order


class LedgerError(RuntimeError):
    """Raised only when every ledger sink has failed."""


class LedgerSink(str, Enum):
    PRIMARY = "primary"
    TEMPORARY = "temporary"
    CONSOLE = "console"
    MEMORY = "memory"


_CASCADE = (LedgerSink.PRIMARY, LedgerSink.TEMPORARY, LedgerSink.CONSOLE)


@dataclass(frozen=True)
class LedgerEntry:
    """Where a finalized order was recorded."""

    order_number: int
    sink: LedgerSink
    location: str


class Ledger(Protocol):
    def record(self, order: Order) -> LedgerEntry: ...

    def close(self) -> None: ...


def format_record(receipt: Receipt) -> str:
    """Render one ledger record. A trailing blank line separates records."""
    lines = [
        f"Order No. {receipt.order_number}",
        f"Received {receipt.timestamp.isoformat()}",
    ]
    for line in receipt.lines:
        lines.append(
            f"  {line.item_id:>3}  {line.name:<24.24} {line.quantity:>4} x {line.unit_price:>9,.2f} = {line.amount:>10,.2f}"
        )
    lines.append(f"Total {receipt.total:,.2f}")
    return "\n".join(lines) + "\n\n"


def _finalized_receipt(order: Order) -> Receipt:
    if order is None:
        raise ValueError("Cannot record a missing order")
    receipt = order.receipt()
    if receipt.order_number is None or receipt.timestamp is None:
        raise ValueError("Cannot record an order before it is finalized")
    return receipt


class OrderLedger:
    """
    Write-only ledger backed by a text file opened for append.

    If the primary file cannot be opened, records go to a temp file, and
    failing that to the console stream. Once degraded the ledger stays on
    the fallback sink until closed. Every record is flushed as it is written.
    """

    def __init__(self, path: Path, temp_dir: Path | None = None, console: TextIO | None = None) -> None:
        self.path = Path(path)
        self._temp_dir = temp_dir
        # The process stderr, not sys.stderr: Textual swaps sys.stderr for a capture while it runs.
        self._console = console if console is not None else sys.__stderr__
        self._lock = threading.Lock()
        self._handle: TextIO | None = None
        self._sink: LedgerSink | None = None
        self._location = ""
        self._closed = False

    @property
    def sink(self) -> LedgerSink | None:
        return self._sink

    def record(self, order: Order) -> LedgerEntry:
        receipt = _finalized_receipt(order)
        text = format_record(receipt)

        with self._lock:
            if self._closed:
                raise RuntimeError("Ledger is closed")

            start = _CASCADE.index(self._sink) if self._sink is not None else 0
            for level in _CASCADE[start:]:
                if self._sink is not level and not self._open(level):
                    continue
                try:
                    self._handle.write(text)
                    self._handle.flush()
                except (OSError, ValueError) as exc:
                    logger.error("Writing order {} to {} ledger {} failed: {}", receipt.order_number, level.value, self._location, exc)
                    self._release()
                    continue
                logger.debug("Recorded order {} in {} ledger {}", receipt.order_number, level.value, self._location)
                return LedgerEntry(order_number=receipt.order_number, sink=level, location=self._location)

        raise LedgerError(f"Order {receipt.order_number} could not be written to any ledger sink")

    def _open(self, level: LedgerSink) -> bool:
        self._release()
        try:
            if level is LedgerSink.PRIMARY:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                handle = self.path.open("a", encoding="utf-8")
                location = str(self.path)
            elif level is LedgerSink.TEMPORARY:
                handle = tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    prefix=f"{self.path.stem or 'orders'}-",
                    suffix=self.path.suffix or ".log",
                    dir=self._temp_dir,
                    delete=False,
                )
                location = handle.name
            else:
                if self._console is None:
                    raise OSError("no console stream available")
                handle = self._console
                location = "<console>"
        except OSError as exc:
            logger.error("Exception opening {} ledger for {}: {}", level.value, self.path, exc)
            return False

        if level is not LedgerSink.PRIMARY:
            logger.warning("Orders ledger degraded to {} sink {}", level.value, location)
        self._handle = handle
        self._sink = level
        self._location = location
        return True

    def _release(self) -> None:
        handle, sink = self._handle, self._sink
        self._handle = None
        self._sink = None
        self._location = ""
        if handle is None:
            return
        try:
            handle.flush()
        except (OSError, ValueError) as exc:
            logger.warning("Error flushing {} ledger: {}", sink.value, exc)
        if sink is LedgerSink.CONSOLE:
            return
        try:
            handle.close()
        except OSError as exc:
            logger.warning("Error closing {} ledger: {}", sink.value, exc)

    def close(self) -> None:
        """Flush and close the open sink. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._release()
            self._closed = True


class MemoryLedger:
    """Keeps ledger records in-process; used by the ``memory`` backend."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.records: list[str] = []
        self._closed = False

    def record(self, order: Order) -> LedgerEntry:
        receipt = _finalized_receipt(order)
        text = format_record(receipt)
        with self._lock:
            if self._closed:
                raise RuntimeError("Ledger is closed")
            self.records.append(text)
        return LedgerEntry(order_number=receipt.order_number, sink=LedgerSink.MEMORY, location="<memory>")

    def close(self) -> None:
        with self._lock:
            self._closed = True
