"""Main Textual app class."""

from __future__ import annotations

from loguru import logger
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from cafe_order.ledger import LedgerError
from cafe_order.models import Receipt
from cafe_order.order import Order, OrderFinalizationError
from cafe_order.rendering import format_help, format_menu, format_receipt
from cafe_order.service import RestaurantService

_MAX_ENTRY_DIGITS = 4


class OrderApp(App):
    """A Textual app for building one customer order at a time and submitting it."""

    TITLE = "Cafe Order"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #order-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #menu-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #entry-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #menu, #order-view {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    entry = reactive("")
    pane = reactive("order")
    menu_visible = reactive(True)

    BINDINGS = [
        ("enter", "add_entered", "Add item"),
        ("backspace", "backspace_entry", "Delete digit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, service: RestaurantService) -> None:
        super().__init__()
        self.service = service
        self.sub_title = service.name
        self.order = Order(service.get_menu())
        self.last_receipt: Receipt | None = None
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="order-pane"):
                yield Static("Order", classes="pane-title")
                yield Static(id="order-view")
            with Vertical(id="menu-pane"):
                yield Static(id="entry-bar")
                yield Static(id="menu")

    def on_mount(self) -> None:
        if not self.service.get_menu():
            self.system_status = "Menu unavailable; orders cannot be taken"
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        char = event.character
        if char in "0123456789":
            if not self.entry and char == "0":
                logger.debug("quit requested from keypad")
                self.exit()
            elif len(self.entry) < _MAX_ENTRY_DIGITS:
                self.entry += char
                self._refresh_entry_bar()
                self._refresh_menu()
            event.stop()
            return

        key = char.lower()
        if key == "-":
            self._remove_entered(quantity=1)
        elif key == "x":
            self._remove_entered(quantity=None)
        elif key == "m":
            self.menu_visible = not self.menu_visible
            self._refresh_menu()
        elif key == "s":
            self.pane = "order"
            self._refresh_order_view()
        elif key == "c":
            self.action_checkout()
        elif key == "?":
            self.pane = "help"
            self._refresh_order_view()
        else:
            self.system_status = f"Invalid choice {char}"
            self._refresh_entry_bar()
        event.stop()

    def action_backspace_entry(self) -> None:
        if not self.entry:
            return
        self.entry = self.entry[:-1]
        self._refresh_entry_bar()

    def action_add_entered(self) -> None:
        item_id = self._take_entry()
        if item_id is None:
            return
        result = self.order.add_item(item_id, 1)
        if result:
            name = self.service.get_menu().get(item_id).name
            self.system_status = f"Added {name} (now {result.quantity})"
        else:
            self.system_status = f"Invalid choice {item_id}"
        self.pane = "order"
        self._refresh_all()

    def action_checkout(self) -> None:
        if self.order.is_empty():
            self.system_status = "No items in order"
            self._refresh_entry_bar()
            return

        try:
            number = self.service.finalize_order(self.order)
            self.system_status = f"Order No. {number} submitted"
        except OrderFinalizationError as exc:
            self.system_status = f"Checkout failed: {exc}"
            self._refresh_entry_bar()
            return
        except LedgerError as exc:
            # The order keeps its number even though it could not be recorded.
            logger.error("Order {} not recorded: {}", self.order.order_number, exc)
            self.system_status = f"Order No. {self.order.order_number} submitted but not recorded"

        self.last_receipt = self.order.receipt()
        self.order = Order(self.service.get_menu())
        self.entry = ""
        self.pane = "receipt"
        self._refresh_all()

    def _take_entry(self) -> int | None:
        if not self.entry:
            self.system_status = "Type an item number first"
            self._refresh_entry_bar()
            return None
        item_id = int(self.entry)
        self.entry = ""
        return item_id

    def _remove_entered(self, quantity: int | None) -> None:
        item_id = self._take_entry()
        if item_id is None:
            return
        result = self.order.remove_item(item_id, quantity)
        if result:
            self.system_status = f"Item {item_id}: {result.quantity} left"
        else:
            self.system_status = f"Invalid choice {item_id}"
        self.pane = "order"
        self._refresh_all()

    def _refresh_all(self) -> None:
        self._refresh_entry_bar()
        self._refresh_menu()
        self._refresh_order_view()

    def _refresh_entry_bar(self) -> None:
        try:
            bar = self.query_one("#entry-bar", Static)
        except NoMatches:
            return
        text = Text()
        text.append("Item #: ", style="bold")
        text.append(self.entry or "_")
        text.append("\nEnter add, - remove one, x remove, c checkout, ? help")
        text.append(f"\n{self.system_status or 'Ready'}", style="dim")
        bar.update(text)

    def _refresh_menu(self) -> None:
        try:
            menu_widget = self.query_one("#menu", Static)
        except NoMatches:
            return
        menu_widget.display = self.menu_visible
        highlight = int(self.entry) if self.entry else None
        menu_widget.update(format_menu(self.service.get_menu(), highlight=highlight))

    def _refresh_order_view(self) -> None:
        try:
            view = self.query_one("#order-view", Static)
        except NoMatches:
            return
        if self.pane == "help":
            view.update(format_help())
        elif self.pane == "receipt" and self.last_receipt is not None:
            view.update(format_receipt(self.last_receipt, self.service.name))
        else:
            view.update(format_receipt(self.order.receipt()))
