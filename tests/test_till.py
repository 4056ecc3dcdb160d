"""Tests for the denominated till."""

from __future__ import annotations

from decimal import Decimal

import pytest

from vending.errors import (
    ExactChangeUnavailable,
    InsufficientQuantity,
    InvalidAmount,
    InvalidDenomination,
    InvalidQuantity,
    InvariantViolation,
)
from vending.till import Till


@pytest.fixture
def one_of_each() -> Till:
    """One piece of every denomination except the 200 bill."""
    return Till({50000: 1, 10000: 1, 5000: 1, 2000: 1, 1000: 1, 500: 1, 100: 1, 25: 1, 10: 1, 5: 1})


# ---------------------------------------------------------------------------
# Construction and accessors
# ---------------------------------------------------------------------------


def test_slots_are_ordered_highest_first(till):
    denominations = [slot.denomination for slot in till.slots]
    assert denominations == sorted(denominations, reverse=True)
    assert len(denominations) == 11


def test_seeded_total(till):
    assert till.total() == 10 * (50000 + 20000 + 10000 + 5000 + 2000 + 1000 + 500 + 100 + 25 + 10 + 5)


def test_unknown_seed_denomination_is_rejected():
    with pytest.raises(InvalidDenomination):
        Till({300: 1})


def test_slots_returns_copies(till):
    till.slots[0].count = 999
    assert till.count(500) == 10


# ---------------------------------------------------------------------------
# Deposit
# ---------------------------------------------------------------------------


def test_deposit_increments_matching_slot(till):
    assert till.deposit(Decimal("0.25")) == 25
    assert till.count("0.25") == 11


def test_deposit_invalid_denomination_leaves_till_unchanged(till):
    before = till.snapshot()
    with pytest.raises(InvalidDenomination):
        till.deposit(0.15)
    assert till.snapshot() == before


# ---------------------------------------------------------------------------
# Dispense
# ---------------------------------------------------------------------------


def test_dispense_exact_amount_greedily(one_of_each):
    breakdown = one_of_each.dispense(18640)

    assert breakdown == {10000: 1, 5000: 1, 2000: 1, 1000: 1, 500: 1, 100: 1, 25: 1, 10: 1, 5: 1}
    assert one_of_each.count(500) == 1
    assert one_of_each.total() == 50000


def test_dispense_zero_is_a_no_op(till):
    before = till.snapshot()
    assert till.dispense(0) == {}
    assert till.snapshot() == before


def test_failed_dispense_restores_every_slot():
    till = Till({2000: 1, 500: 1})
    before = till.snapshot()

    with pytest.raises(ExactChangeUnavailable) as excinfo:
        till.dispense(1500)

    assert excinfo.value.remainder == 1000
    assert str(excinfo.value) == "Unable to dispense exact amount PHP 15.00 (short PHP 10.00)"
    assert till.snapshot() == before


def test_sub_coin_remainder_cannot_be_dispensed(till):
    before = till.snapshot()
    with pytest.raises(ExactChangeUnavailable) as excinfo:
        till.dispense(103)
    assert excinfo.value.remainder == 3
    assert till.snapshot() == before


def test_greedy_gives_up_where_another_combination_exists():
    """Greedy takes the 50 first and strands 10; three 20s would have worked."""
    till = Till({5000: 1, 2000: 3})
    with pytest.raises(ExactChangeUnavailable):
        till.dispense(6000)
    assert till.snapshot()[2000] == 3


def test_dispense_available_pays_what_it_can():
    till = Till({2000: 1, 500: 1})
    breakdown, unpaid = till.dispense_available(3500)
    assert breakdown == {2000: 1, 500: 1}
    assert unpaid == 1000
    assert till.total() == 0


def test_dispense_available_matches_dispense_when_covered(till):
    breakdown, unpaid = till.dispense_available(4050)
    assert breakdown == {2000: 2, 25: 2}
    assert unpaid == 0


def test_negative_dispense_is_an_invariant_violation(till):
    with pytest.raises(InvariantViolation):
        till.dispense(-5)


# ---------------------------------------------------------------------------
# Staff maintenance
# ---------------------------------------------------------------------------


def test_restock_adds_quantity(till):
    assert till.restock(20, 5) == 15


@pytest.mark.parametrize("quantity", [0, -1])
def test_restock_rejects_non_positive_quantity(till, quantity):
    with pytest.raises(InvalidQuantity):
        till.restock(20, quantity)
    assert till.count(20) == 10


def test_restock_rejects_unknown_denomination(till):
    with pytest.raises(InvalidDenomination):
        till.restock(3, 1)


def test_withdraw_by_amount_uses_greedy_dispense(till):
    assert till.withdraw_by_amount(70050) == {50000: 1, 20000: 1, 25: 2}
    assert till.count(500) == 9


def test_withdraw_by_amount_rejects_non_positive(till):
    with pytest.raises(InvalidAmount):
        till.withdraw_by_amount(0)


def test_withdraw_by_amount_is_atomic():
    till = Till({10000: 1, 100: 2})
    before = till.snapshot()
    with pytest.raises(ExactChangeUnavailable):
        till.withdraw_by_amount(10500)
    assert till.snapshot() == before


def test_withdraw_by_denomination(till):
    assert till.withdraw_by_denomination("0.05", 4) == 6


def test_withdraw_by_denomination_more_than_available(till):
    with pytest.raises(InsufficientQuantity) as excinfo:
        till.withdraw_by_denomination(100, 11)
    assert excinfo.value.available == 10
    assert str(excinfo.value) == "Only 10 of 100 available, 11 requested"
    assert till.count(100) == 10


def test_take_back_is_all_or_nothing():
    till = Till({2000: 1, 100: 1})
    with pytest.raises(InsufficientQuantity):
        till.take_back({2000: 1, 100: 2})
    assert till.snapshot()[2000] == 1

    till.take_back({2000: 1, 100: 1})
    assert till.total() == 0
