"""Commit or roll back the active order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from vending.catalog import Catalog
from vending.errors import ExactChangeUnavailable, InsufficientQuantity, InvalidSessionState, InvariantViolation
from vending.models import Breakdown, OrderLine, SessionState
from vending.session import InsertedFunds, OrderSession
from vending.till import Till

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Committed:
    """Order paid; change handed out."""

    total: int
    paid: int
    change: int
    change_breakdown: Breakdown
    lines: list[OrderLine] = field(default_factory=list)

    state = SessionState.COMMITTED


@dataclass(frozen=True)
class Cancelled:
    """
    Order abandoned; stock restored and inserted money returned.

    `refund` is what the till actually handed back. `unrefunded` is the part
    of the customer's money it could not pay out and staff still owe.
    """

    refund: int
    refund_breakdown: Breakdown
    lines: list[OrderLine] = field(default_factory=list)
    unrefunded: int = 0

    state = SessionState.CANCELLED


@dataclass(frozen=True)
class ChangeShortfall:
    """
    Customer confirmed but the till could not make exact change.

    The order is rolled back like a cancel: stock is restored and the inserted
    money refunded. `remainder` is what the greedy pass could not cover.
    """

    change: int
    remainder: int
    refund: int
    refund_breakdown: Breakdown
    lines: list[OrderLine] = field(default_factory=list)
    unrefunded: int = 0

    state = SessionState.CANCELLED


SettlementResult = Committed | Cancelled | ChangeShortfall


@dataclass(frozen=True)
class _Rollback:
    refund: int
    refund_breakdown: Breakdown
    unrefunded: int
    lines: list[OrderLine]


def _pay_refund(funds: InsertedFunds, till: Till) -> tuple[Breakdown, int]:
    """Take the customer's own pieces back out of the till.

    Falls back to greedy change when staff have since removed some of those
    pieces, paying out whatever the bins still cover. Returns the breakdown
    handed back and the amount left unpaid.
    """
    pieces = funds.pieces
    if not pieces:
        return {}, 0
    try:
        till.take_back(pieces)
        return pieces, 0
    except InsufficientQuantity:
        logger.warning("inserted pieces no longer in till, refunding %s by greedy change", funds.total)
        return till.dispense_available(funds.total)


def _roll_back(session: OrderSession, funds: InsertedFunds, till: Till, catalog: Catalog) -> _Rollback:
    refund_breakdown, unrefunded = _pay_refund(funds, till)
    lines = session.reset()
    for line in lines:
        catalog.adjust_stock(line.item_id, line.quantity)
    claim = funds.reset()
    if unrefunded:
        logger.error("refund short claim=%s unrefunded=%s", claim, unrefunded)
    return _Rollback(claim - unrefunded, refund_breakdown, unrefunded, lines)


def settle(
    confirmed: bool,
    session: OrderSession,
    funds: InsertedFunds,
    till: Till,
    catalog: Catalog,
) -> SettlementResult:
    """
    Close the active order.

    Cancel is accepted from any state, reverses every stock decrement and
    always completes; money the till cannot hand back is reported as
    `unrefunded`. Confirm requires a finalized order; if exact change cannot
    be made the whole order is reversed and ChangeShortfall returned. Either
    way the session ends EMPTY with zero inserted funds.
    """
    if not confirmed:
        rollback = _roll_back(session, funds, till, catalog)
        logger.info("order cancelled refund=%s lines=%s", rollback.refund, len(rollback.lines))
        return Cancelled(
            refund=rollback.refund,
            refund_breakdown=rollback.refund_breakdown,
            lines=rollback.lines,
            unrefunded=rollback.unrefunded,
        )

    if session.state != SessionState.AWAITING_SETTLEMENT:
        raise InvalidSessionState("confirm payment", session.state)

    total = session.total
    paid = funds.total
    change = paid - total
    if change < 0:
        raise InvariantViolation(f"Order total {total} exceeds inserted funds {paid}")

    try:
        change_breakdown = till.dispense(change)
    except ExactChangeUnavailable as exc:
        rollback = _roll_back(session, funds, till, catalog)
        logger.warning(
            "order reversed change=%s remainder=%s refund=%s", change, exc.remainder, rollback.refund
        )
        return ChangeShortfall(
            change=change,
            remainder=exc.remainder,
            refund=rollback.refund,
            refund_breakdown=rollback.refund_breakdown,
            lines=rollback.lines,
            unrefunded=rollback.unrefunded,
        )

    lines = session.reset()
    funds.reset()
    logger.info("order committed total=%s paid=%s change=%s", total, paid, change)
    return Committed(total=total, paid=paid, change=change, change_breakdown=change_breakdown, lines=lines)
