"""The active customer order and the money inserted against it."""

from __future__ import annotations

import logging

from vending.catalog import Catalog
from vending.errors import (
    InsufficientFunds,
    InvalidSessionState,
    InvariantViolation,
    MustSelectAtLeastOne,
    OrderLimitReached,
    OutOfStock,
)
from vending.models import Breakdown, OrderLine, SessionState

logger = logging.getLogger(__name__)


class InsertedFunds:
    """
    The customer's claim against the till for this session.

    The till already counts every deposited piece; this only remembers the
    running total and which pieces went in, so a cancel can hand the same
    pieces back.
    """

    def __init__(self) -> None:
        self._total = 0
        self._pieces: Breakdown = {}

    @property
    def total(self) -> int:
        return self._total

    @property
    def pieces(self) -> Breakdown:
        return dict(sorted(self._pieces.items(), reverse=True))

    def add(self, denomination: int) -> int:
        self._pieces[denomination] = self._pieces.get(denomination, 0) + 1
        self._total += denomination
        return self._total

    def reset(self) -> int:
        """Zero the claim and return what it was."""
        previous = self._total
        self._total = 0
        self._pieces = {}
        return previous


class OrderSession:
    """
    Lines keyed by item number in selection order, plus the running total.

    Lifecycle: EMPTY -> ACCUMULATING -> AWAITING_SETTLEMENT, then settlement
    resets it to EMPTY.
    """

    def __init__(self, max_lines: int | None = None) -> None:
        self.max_lines = max_lines
        self.state = SessionState.EMPTY
        self._lines: dict[int, OrderLine] = {}
        self._total = 0

    @property
    def lines(self) -> list[OrderLine]:
        return [
            OrderLine(line.item_id, line.name, line.unit_price, line.quantity, line.subtotal)
            for line in self._lines.values()
        ]

    @property
    def total(self) -> int:
        return self._total

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def quantity_of(self, item_id: int) -> int:
        line = self._lines.get(item_id)
        return line.quantity if line is not None else 0

    def select_item(self, catalog: Catalog, item_id: int, funds: int) -> OrderLine:
        """
        Add one unit of item `item_id` to the order, taking it out of stock.

        Every check runs before anything is mutated, so a rejected selection
        leaves stock, lines and total exactly as they were. InsufficientFunds
        carries the shortfall; the caller tops up and retries.
        """
        if self.state not in (SessionState.EMPTY, SessionState.ACCUMULATING):
            raise InvalidSessionState("select items", self.state)
        item = catalog.find_by_id(item_id)
        if item.stock <= 0:
            raise OutOfStock(item.item_id, item.name)

        projected = self._total + item.price_minor
        if projected > funds:
            raise InsufficientFunds(item.item_id, projected - funds)

        line = self._lines.get(item.item_id)
        if line is None and self.max_lines is not None and len(self._lines) >= self.max_lines:
            raise OrderLimitReached(self.max_lines)

        catalog.adjust_stock(item.item_id, -1)
        if line is None:
            line = OrderLine(item.item_id, item.name, item.price_minor)
            self._lines[item.item_id] = line
        else:
            line.quantity += 1
            line.subtotal += item.price_minor
        self._total = projected
        self.state = SessionState.ACCUMULATING

        if self._total != sum(entry.subtotal for entry in self._lines.values()):
            raise InvariantViolation("Order total drifted from the sum of its lines")

        logger.info(
            "select item=%s qty=%s total=%s funds=%s", item.item_id, line.quantity, self._total, funds
        )
        return OrderLine(line.item_id, line.name, line.unit_price, line.quantity, line.subtotal)

    def finalize(self) -> None:
        if self.state == SessionState.AWAITING_SETTLEMENT:
            return
        if self.is_empty:
            raise MustSelectAtLeastOne()
        self.state = SessionState.AWAITING_SETTLEMENT
        logger.info("order finalized lines=%s total=%s", len(self._lines), self._total)

    def reset(self) -> list[OrderLine]:
        """Drop every line and return them."""
        lines = list(self._lines.values())
        self._lines = {}
        self._total = 0
        self.state = SessionState.EMPTY
        return lines
