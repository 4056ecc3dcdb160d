"""Denominated cash till with greedy, all-or-nothing dispensing."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Mapping

from vending.constant import ACCEPTED_DENOMINATIONS
from vending.errors import (
    ExactChangeUnavailable,
    InsufficientQuantity,
    InvalidAmount,
    InvalidDenomination,
    InvalidQuantity,
    InvariantViolation,
)
from vending.models import Breakdown, DenominationSlot
from vending.money import SMALLEST_UNIT, is_accepted_denomination, to_minor_units

logger = logging.getLogger(__name__)

DenominationInput = Decimal | int | float | str


class Till:
    """
    Per-denomination piece counts, highest denomination first.

    Denomination arguments are major units (the value printed on the bill or
    coin). Amounts passed to `dispense` / `withdraw_by_amount`, the seed
    `counts` keys and every returned breakdown are minor units.

    The greedy policy always finds exact change for the accepted set when each
    bin has enough pieces. It is not guaranteed for arbitrary denomination sets.
    """

    def __init__(self, counts: Mapping[int, int] | None = None) -> None:
        counts = dict(counts or {})
        unknown = set(counts) - set(ACCEPTED_DENOMINATIONS)
        if unknown:
            raise InvalidDenomination(sorted(unknown)[0])
        self._slots: list[DenominationSlot] = [
            DenominationSlot(denomination=d, count=int(counts.get(d, 0)))
            for d in sorted(ACCEPTED_DENOMINATIONS, reverse=True)
        ]
        for slot in self._slots:
            if slot.count < 0:
                raise InvalidQuantity(slot.count)
        self._by_denomination = {slot.denomination: slot for slot in self._slots}

    # --- Accessors --- #
    @property
    def slots(self) -> list[DenominationSlot]:
        """Copies of the slots, highest denomination first."""
        return [DenominationSlot(slot.denomination, slot.count) for slot in self._slots]

    def snapshot(self) -> Breakdown:
        return {slot.denomination: slot.count for slot in self._slots}

    def count(self, denomination: DenominationInput) -> int:
        return self._slot_for(denomination).count

    def total(self) -> int:
        """Value held, in minor units."""
        return sum(slot.value for slot in self._slots)

    # --- Customer side --- #
    def deposit(self, denomination: DenominationInput) -> int:
        """Accept one piece. Returns the deposited value in minor units."""
        slot = self._slot_for(denomination)
        slot.count += 1
        logger.info("till deposit denomination=%s count=%s", slot.denomination, slot.count)
        return slot.denomination

    def dispense(self, amount: int) -> Breakdown:
        """
        Hand out exactly `amount` minor units, largest pieces first.

        Either the whole amount is dispensed and the breakdown returned, or
        ExactChangeUnavailable is raised and every bin is left as it was.
        """
        if amount < 0:
            raise InvariantViolation(f"dispense called with negative amount {amount}")
        if amount == 0:
            return {}

        breakdown, remaining = self._take_greedy(amount)
        if remaining > 0:
            self._restore(breakdown)
            logger.warning("till dispense failed amount=%s remainder=%s", amount, remaining)
            raise ExactChangeUnavailable(amount, remaining)

        logger.info("till dispense amount=%s breakdown=%s", amount, breakdown)
        return breakdown

    def dispense_available(self, amount: int) -> tuple[Breakdown, int]:
        """
        Hand out as much of `amount` as the bins allow, largest pieces first.

        Never raises for a short till. Returns the breakdown handed out and
        the part of `amount` left unpaid.
        """
        if amount < 0:
            raise InvariantViolation(f"dispense called with negative amount {amount}")
        breakdown, remaining = self._take_greedy(amount)
        if remaining > 0:
            logger.warning("till partial dispense amount=%s breakdown=%s unpaid=%s", amount, breakdown, remaining)
        else:
            logger.info("till dispense amount=%s breakdown=%s", amount, breakdown)
        return breakdown, remaining

    # --- Staff maintenance --- #
    def restock(self, denomination: DenominationInput, quantity: int) -> int:
        """Add `quantity` pieces. Returns the new count."""
        slot = self._slot_for(denomination)
        if quantity <= 0:
            raise InvalidQuantity(quantity)
        slot.count += quantity
        logger.info("till restock denomination=%s added=%s count=%s", slot.denomination, quantity, slot.count)
        return slot.count

    def withdraw_by_amount(self, amount: int) -> Breakdown:
        """Staff cash-out of an exact amount (minor units)."""
        if amount <= 0:
            raise InvalidAmount(amount)
        return self.dispense(amount)

    def withdraw_by_denomination(self, denomination: DenominationInput, quantity: int) -> int:
        """Remove `quantity` pieces of one denomination. Returns the new count."""
        slot = self._slot_for(denomination)
        if quantity <= 0:
            raise InvalidQuantity(quantity)
        if quantity > slot.count:
            raise InsufficientQuantity(slot.denomination, quantity, slot.count)
        slot.count -= quantity
        logger.info("till withdraw denomination=%s removed=%s count=%s", slot.denomination, quantity, slot.count)
        return slot.count

    def take_back(self, pieces: Mapping[int, int]) -> None:
        """Remove an exact set of pieces (e.g. a refund of what was inserted), all or nothing."""
        for denomination, quantity in pieces.items():
            available = self._by_denomination[denomination].count
            if quantity > available:
                raise InsufficientQuantity(denomination, quantity, available)
        for denomination, quantity in pieces.items():
            self._by_denomination[denomination].count -= quantity
        logger.info("till take back pieces=%s", dict(pieces))

    # --- Internals --- #
    def _take_greedy(self, amount: int) -> tuple[Breakdown, int]:
        breakdown: Breakdown = {}
        remaining = amount
        for slot in self._slots:
            if remaining < SMALLEST_UNIT:
                break
            while remaining >= slot.denomination and slot.count > 0:
                remaining -= slot.denomination
                slot.count -= 1
                breakdown[slot.denomination] = breakdown.get(slot.denomination, 0) + 1
        return breakdown, remaining

    def _restore(self, breakdown: Mapping[int, int]) -> None:
        for denomination, quantity in breakdown.items():
            self._by_denomination[denomination].count += quantity

    def _slot_for(self, denomination: DenominationInput) -> DenominationSlot:
        if not is_accepted_denomination(denomination):
            raise InvalidDenomination(denomination)
        return self._by_denomination[to_minor_units(denomination)]
