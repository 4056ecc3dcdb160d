"""Rendering helpers for catalog, order, till and settlement results."""

from __future__ import annotations

from typing import Iterable, Mapping

from rich.text import Text

from vending.constant import BILL_DENOMINATIONS, OUT_OF_STOCK_LABEL
from vending.models import DenominationSlot, Item, OrderLine
from vending.money import format_amount, format_denomination
from vending.settlement import Cancelled, ChangeShortfall, Committed, SettlementResult


def badge_style(denomination: int) -> str:
    """Return a consistent badge style for bills vs coins."""
    if denomination in BILL_DENOMINATIONS:
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #d9b84a"


def format_item_row(item: Item, pointer: bool = False) -> Text:
    text = Text()
    text.append("➤ " if pointer else "  ")
    text.append(f"{item.item_id:>2}. {item.name:<12} {format_amount(item.price_minor):>12}")
    if item.stock == 0:
        text.append(f"  {OUT_OF_STOCK_LABEL}", style="bold #b23a48")
    else:
        text.append(f"  x{item.stock}", style="dim")
    return text


def format_order_lines(lines: Iterable[OrderLine], total: int) -> Text:
    text = Text()
    rows = list(lines)
    if not rows:
        text.append("(no items yet)", style="dim")
        return text

    for idx, line in enumerate(rows):
        if idx > 0:
            text.append("\n")
        text.append(f"{line.quantity:>2} x {line.name:<12} {format_amount(line.subtotal):>12}")
    text.append("\n")
    text.append(f"{'Total':<17} {format_amount(total):>12}", style="bold")
    return text


def format_breakdown(breakdown: Mapping[int, int]) -> Text:
    """Render denomination -> count as compact colored tags."""
    text = Text()
    if not breakdown:
        text.append("(none)", style="dim")
        return text
    for idx, (denomination, count) in enumerate(sorted(breakdown.items(), reverse=True)):
        if idx > 0:
            text.append(" ")
        text.append(format_denomination(denomination), style=badge_style(denomination))
        text.append(f"×{count}")
    return text


def format_till(slots: Iterable[DenominationSlot]) -> Text:
    text = Text()
    total = 0
    for slot in slots:
        total += slot.value
        text.append(f"{format_denomination(slot.denomination):>6}", style=badge_style(slot.denomination))
        text.append(f"  {slot.count:>4}  {format_amount(slot.value):>14}\n")
    text.append(f"Total cash in register: {format_amount(total)}", style="bold")
    return text


def format_settlement(result: SettlementResult) -> Text:
    text = Text()
    if isinstance(result, Committed):
        text.append("Order complete. ", style="bold #5fbf72")
        text.append(f"Paid {format_amount(result.paid)}, change {format_amount(result.change)}: ")
        text.append_text(format_breakdown(result.change_breakdown))
    elif isinstance(result, ChangeShortfall):
        text.append("No exact change. ", style="bold #b23a48")
        text.append(f"Short {format_amount(result.remainder)}; order reversed, refunded {format_amount(result.refund)}: ")
        text.append_text(format_breakdown(result.refund_breakdown))
    elif isinstance(result, Cancelled):
        text.append("Order cancelled. ", style="bold")
        text.append(f"Refunded {format_amount(result.refund)}: ")
        text.append_text(format_breakdown(result.refund_breakdown))
    if not isinstance(result, Committed) and result.unrefunded:
        text.append(f" Till short, staff owe {format_amount(result.unrefunded)}.", style="bold #b23a48")
    return text
