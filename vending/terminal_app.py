"""Main Textual app class."""

from __future__ import annotations

import hmac
import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from vending.amount_modal import AmountModal
from vending.config import resolve_staff_pin
from vending.constant import ACCEPTED_DENOMINATIONS
from vending.errors import InsufficientFunds, VendingError
from vending.models import SessionState
from vending.money import format_amount, format_denomination
from vending.rendering import format_item_row, format_order_lines, format_settlement
from vending.staff_modal import StaffModal
from vending.terminal import VendingTerminal

logger = logging.getLogger(__name__)


class VendingApp(App):
    """A Textual app for inserting money, picking items and settling the order."""

    TITLE = "Vending Terminal"
    SUB_TITLE = "Silog Breakfast"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #catalog-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #order-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #catalog-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #order-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #funds {
        height: 3;
        padding: 0 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }

    ModalScreen {
        align: center middle;
    }

    .dialog {
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    .dialog-help {
        margin-top: 1;
        text-style: dim;
    }
    """

    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_cursor(-1)", "Previous item"),
        ("down", "move_cursor(1)", "Next item"),
        ("enter", "select_item", "Select item"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, terminal: VendingTerminal | None = None) -> None:
        super().__init__()
        self.terminal = terminal if terminal is not None else VendingTerminal()
        self.system_status = ""
        self.pending_item_id: int | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="catalog-pane"):
                yield Static("Menu", classes="pane-title")
                yield Static(id="catalog-list")
            with Vertical(id="order-pane"):
                yield Static("Your Order", classes="pane-title")
                yield Static("(no items yet)", id="order-list")
                yield Static(id="funds")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        logger.debug("app mounted items=%s till_total=%s", len(self.terminal.catalog), self.terminal.till.total())
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        handlers = {
            "j": lambda: self.action_move_cursor(1),
            "k": lambda: self.action_move_cursor(-1),
            "i": self.action_insert_money,
            "f": self.action_finalize,
            "y": lambda: self.action_settle(True),
            "x": lambda: self.action_settle(False),
            "s": self.action_staff,
        }
        handler = handlers.get(key)
        if handler is None and key.isdigit():
            handler = lambda: self._jump_to_item(int(key))
        if handler is None:
            return

        handler()
        event.stop()

    def action_move_cursor(self, delta: int) -> None:
        items = self.terminal.items()
        if not items:
            return
        self.selected_index = (self.selected_index + delta) % len(items)
        self._refresh_catalog()

    def action_select_item(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        items = self.terminal.items()
        if not items:
            return
        self._select(items[self.selected_index].item_id)

    def action_insert_money(self) -> None:
        accepted = ", ".join(format_denomination(d) for d in ACCEPTED_DENOMINATIONS)
        self.push_screen(
            AmountModal("Insert Money", f"Accepted: {accepted}", allow_decimal=True),
            self._on_money_entered,
        )

    def action_finalize(self) -> None:
        try:
            self.terminal.finalize()
        except VendingError as exc:
            self._set_status(str(exc))
            return
        self._set_status("Order complete. Y to pay, X to cancel.")

    def action_settle(self, confirmed: bool) -> None:
        if not confirmed and self.terminal.state == SessionState.EMPTY and self.terminal.inserted == 0:
            self.pending_item_id = None
            return
        try:
            result = self.terminal.settle(confirmed)
        except VendingError as exc:
            self._set_status(str(exc))
            return
        self.pending_item_id = None
        logger.debug("settled result=%r", result)
        self._set_status(format_settlement(result))

    def action_staff(self) -> None:
        self.push_screen(AmountModal("Staff Access", "Input maintenance password", masked=True), self._on_pin_entered)

    def _on_pin_entered(self, pin: str | None) -> None:
        if pin is None:
            return
        if not hmac.compare_digest(pin, resolve_staff_pin()):
            logger.warning("staff access denied")
            self._set_status("Incorrect password, please try again.")
            return
        logger.info("staff access granted")
        self.push_screen(StaffModal(self.terminal, on_change=self._refresh_all))

    def _on_money_entered(self, value: str | None) -> None:
        if value is None:
            return
        try:
            inserted = self.terminal.deposit(value)
        except VendingError as exc:
            self._set_status(f"{exc}. Please try again.")
            return

        self._set_status(f"You inserted: {value}. Total so far: {format_amount(inserted)}")
        if self.pending_item_id is not None:
            self._select(self.pending_item_id)

    def _select(self, item_id: int) -> None:
        try:
            line = self.terminal.select_item(item_id)
        except InsufficientFunds as exc:
            self.pending_item_id = item_id
            self._set_status(f"Insert {format_amount(exc.shortfall)} more (I) to add this item.")
            return
        except VendingError as exc:
            self._set_status(str(exc))
            return

        self.pending_item_id = None
        self._set_status(
            f"You have selected: {line.name}. Current total cost is {format_amount(self.terminal.order_total)}"
        )

    def _jump_to_item(self, item_id: int) -> None:
        for idx, item in enumerate(self.terminal.items()):
            if item.item_id == item_id:
                self.selected_index = idx
                self._refresh_catalog()
                return

    def _set_status(self, status: str | Text) -> None:
        self.system_status = status
        self._refresh_all()

    def _refresh_all(self) -> None:
        self._refresh_catalog()
        self._refresh_order()
        self._refresh_status()

    def _refresh_catalog(self) -> None:
        try:
            catalog_widget = self.query_one("#catalog-list", Static)
        except NoMatches:
            return
        items = self.terminal.items()
        if self.selected_index >= len(items):
            self.selected_index = 0

        lines = Text()
        for idx, item in enumerate(items):
            if idx > 0:
                lines.append("\n")
            lines.append_text(format_item_row(item, pointer=idx == self.selected_index))
        catalog_widget.update(lines)

    def _refresh_order(self) -> None:
        try:
            order_widget = self.query_one("#order-list", Static)
            funds_widget = self.query_one("#funds", Static)
        except NoMatches:
            return
        order_widget.update(format_order_lines(self.terminal.order_lines(), self.terminal.order_total))

        funds = Text()
        funds.append(f"Inserted: {format_amount(self.terminal.inserted)}\n")
        funds.append(f"Balance:  {format_amount(self.terminal.balance)}\n")
        funds.append(f"State:    {self.terminal.state}", style="dim")
        funds_widget.update(funds)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        text = Text("I insert · J/K/↑/↓ move · Enter select · F finish · Y pay · X cancel · S staff · Ctrl+Q quit\n")
        status = self.system_status or "Ready"
        if isinstance(status, Text):
            text.append_text(status)
        else:
            text.append(status)
        bar.update(text)
