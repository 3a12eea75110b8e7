"""Rendering helpers for menu, order and receipt panes."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text

from cafe_order.catalog import MenuCatalog
from cafe_order.models import Receipt


def format_price(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def badge_style(finalized: bool) -> str:
    """Badge style for the order header: green once submitted."""
    if finalized:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #2f6db5"


def format_menu(catalog: MenuCatalog, highlight: int | None = None) -> Text:
    """Numbered menu, one item per line."""
    text = Text()
    if not catalog:
        text.append("Menu unavailable", style="bold red")
        return text
    for idx, line in enumerate(catalog):
        if idx > 0:
            text.append("\n")
        pointer = "➤ " if line.item_id == highlight else "  "
        text.append(f"{pointer}{line.item_id:>2}) ")
        text.append(f"{line.name:<24.24}")
        text.append(f" {format_price(line.unit_price):>8}", style="cyan")
    return text


def format_receipt(receipt: Receipt, restaurant_name: str | None = None) -> Text:
    """Order lines with quantities and total; header shows number and time once finalized."""
    text = Text()
    if restaurant_name:
        text.append(f"{restaurant_name}\n", style="bold")
    if receipt.is_finalized:
        text.append(f" Order No. {receipt.order_number} ", style=badge_style(True))
        received = receipt.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        text.append(f"  Received {received}\n")
    else:
        text.append(" Current order ", style=badge_style(False))
        text.append("\n")

    if not receipt.lines:
        text.append("No items in order")
        return text

    text.append(f"{'Item#':<5} {'Description':<24} {'Qnty':>4} {'Price':>10}\n", style="dim")
    for line in receipt.lines:
        text.append(f"{line.item_id:>3}   {line.name:<24.24} {line.quantity:>4} {format_price(line.amount):>10}\n")
    text.append(f"      {'Total Price':<24}      {format_price(receipt.total):>10}", style="bold")
    return text


def format_help() -> Text:
    text = Text()
    for key, label in (
        ("1-9", "Type an item number"),
        ("Enter", "Add one of the item"),
        ("-", "Remove one of the item"),
        ("x", "Remove the item"),
        ("m", "Show menu"),
        ("s", "Show order"),
        ("c", "Checkout and submit order"),
        ("0", "Quit"),
    ):
        text.append(f"{key:>5}) ", style="bold")
        text.append(f"{label}\n")
    return text
