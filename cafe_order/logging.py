"""Loguru logging configuration.

Call setup_logging() once at startup. Every other module does
`from loguru import logger` and logs normally.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from cafe_order.config import debug_log_path, log_level


def setup_logging(level: str | None = None, log_file: Path | None = None, stderr: bool = False) -> None:
    """Configure loguru sinks.

    The Textual app owns the terminal while it runs, so the default sink is a
    file. Pass ``stderr=True`` to also echo warnings to the console.
    """
    level = level or log_level()
    log_file = log_file or debug_log_path()

    # Drop loguru's default stderr handler so we control every sink.
    logger.remove()

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            rotation="1 MB",
            retention=3,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        )
    except OSError as exc:
        # Unwritable debug log: echo to stderr instead.
        stderr = True
        print(f"Could not open debug log {log_file}: {exc}", file=sys.stderr)

    if stderr:
        logger.add(
            sys.stderr,
            level="WARNING",
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
        )
