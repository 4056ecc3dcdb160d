"""Staff maintenance modal screen."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from vending.amount_modal import AmountModal
from vending.errors import VendingError
from vending.models import Item
from vending.money import format_amount, to_minor_units
from vending.rendering import format_breakdown, format_item_row, format_till
from vending.terminal import VendingTerminal

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StaffModal(ModalScreen[None]):
    """Inventory and cash register maintenance. Works on the catalog and till directly."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("p", "set_price", "Set price"),
        ("r", "restock_item", "Restock item"),
        ("d", "restock_till", "Restock till"),
        ("w", "withdraw_amount", "Cash out amount"),
        ("o", "withdraw_denomination", "Cash out denomination"),
        ("e", "export_catalog", "Export CSV"),
    ]

    CSS = """
    #staff-dialog {
        width: 72;
    }

    #staff-inventory, #staff-till {
        margin-bottom: 1;
    }

    #staff-status {
        color: $warning;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, terminal: VendingTerminal, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.terminal = terminal
        self.on_change = on_change
        self.status = ""

    def compose(self) -> ComposeResult:
        with Container(id="staff-dialog", classes="dialog"):
            yield Static("Staff Maintenance", classes="pane-title")
            yield Static(id="staff-inventory")
            yield Static(id="staff-till")
            yield Static(id="staff-status")
            yield Static(
                "J/K move · P price · R restock item · D restock till · W cash out amount\n"
                "O cash out denomination · E export CSV · Esc/q close",
                classes="dialog-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()
        self.on_change()

    def action_move_cursor(self, delta: int) -> None:
        items = self.terminal.items()
        if not items:
            return
        self.cursor_index = (self.cursor_index + delta) % len(items)
        self._refresh_content()

    def action_set_price(self) -> None:
        item = self._current_item()
        if item is None:
            return

        def apply(value: str | None) -> None:
            if value is None:
                return
            self._run(
                lambda: self.terminal.set_price(item.item_id, value),
                lambda updated: f"{updated.name} now {format_amount(updated.price_minor)}",
            )

        self.app.push_screen(
            AmountModal("Set Price", f"New price for {item.name}", allow_decimal=True), apply
        )

    def action_restock_item(self) -> None:
        item = self._current_item()
        if item is None:
            return

        def apply(value: str | None) -> None:
            if value is None:
                return
            self._run(
                lambda: self.terminal.restock_item(item.item_id, int(value)),
                lambda stock: f"Stock updated successfully. {item.name}: {stock}",
            )

        self.app.push_screen(AmountModal("Restock Item", f"Stock to add for {item.name}"), apply)

    def action_restock_till(self) -> None:
        def ask_quantity(denomination: str | None) -> None:
            if denomination is None:
                return

            def apply(quantity: str | None) -> None:
                if quantity is None:
                    return
                self._run(
                    lambda: self.terminal.restock_till(denomination, int(quantity)),
                    lambda count: f"Added {quantity} to {denomination}. Count now {count}",
                )

            self.app.push_screen(AmountModal("Restock Till", f"Pieces of {denomination} to add"), apply)

        self.app.push_screen(
            AmountModal("Restock Till", "Denomination to restock", allow_decimal=True), ask_quantity
        )

    def action_withdraw_amount(self) -> None:
        def apply(value: str | None) -> None:
            if value is None:
                return
            self._run(
                lambda: self.terminal.withdraw_by_amount(value),
                lambda breakdown: f"Dispensed {format_amount(to_minor_units(value))}: {format_breakdown(breakdown).plain}",
            )

        self.app.push_screen(AmountModal("Cash Out", "Amount to claim", allow_decimal=True), apply)

    def action_withdraw_denomination(self) -> None:
        def ask_quantity(denomination: str | None) -> None:
            if denomination is None:
                return

            def apply(quantity: str | None) -> None:
                if quantity is None:
                    return
                self._run(
                    lambda: self.terminal.withdraw_by_denomination(denomination, int(quantity)),
                    lambda count: f"Removed {quantity} of {denomination}. Count now {count}",
                )

            self.app.push_screen(AmountModal("Cash Out", f"Pieces of {denomination} to remove"), apply)

        self.app.push_screen(
            AmountModal("Cash Out", "Denomination to remove", allow_decimal=True), ask_quantity
        )

    def action_export_catalog(self) -> None:
        try:
            path = self.terminal.export_catalog()
        except OSError as exc:
            logger.warning("catalog export failed: %s", exc)
            self.status = f"Export failed: {exc}"
        else:
            self.status = f"Data saved to {path} successfully."
        self._refresh_content()

    def _run(self, operation: Callable[[], T], describe: Callable[[T], str]) -> None:
        try:
            result = operation()
        except VendingError as exc:
            self.status = str(exc)
        else:
            self.status = describe(result)
        self._refresh_content()

    def _current_item(self) -> Item | None:
        items = self.terminal.items()
        if not items:
            return None
        if self.cursor_index >= len(items):
            self.cursor_index = len(items) - 1
        return items[self.cursor_index]

    def _refresh_content(self) -> None:
        inventory = self.query_one("#staff-inventory", Static)
        till = self.query_one("#staff-till", Static)
        status = self.query_one("#staff-status", Static)

        items = self.terminal.items()
        if self.cursor_index >= len(items):
            self.cursor_index = max(0, len(items) - 1)

        content = Text(style="white")
        for idx, item in enumerate(items):
            if idx > 0:
                content.append("\n")
            content.append_text(format_item_row(item, pointer=idx == self.cursor_index))
        inventory.update(content)
        till.update(format_till(self.terminal.till.slots))
        status.update(self.status)
