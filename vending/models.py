"""Domain models for the vending terminal."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from vending.money import to_major_units

# Ordered denomination -> count, highest denomination first.
Breakdown = dict[int, int]


@dataclass
class Item:
    """A catalog item. Prices are held in minor units."""

    item_id: int
    name: str
    price_minor: int
    stock: int

    @property
    def price(self) -> Decimal:
        return to_major_units(self.price_minor)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


@dataclass
class DenominationSlot:
    """One till bin: a fixed denomination and how many pieces it holds."""

    denomination: int
    count: int = 0

    @property
    def value(self) -> int:
        return self.denomination * self.count


@dataclass
class OrderLine:
    """One distinct item in the active order."""

    item_id: int
    name: str
    unit_price: int
    quantity: int = 1
    subtotal: int = 0

    def __post_init__(self) -> None:
        if not self.subtotal:
            self.subtotal = self.unit_price * self.quantity


class SessionState(str, Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    AWAITING_SETTLEMENT = "awaiting settlement"
    COMMITTED = "committed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value
