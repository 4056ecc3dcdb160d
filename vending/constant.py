"""Editable static catalog, till seed and denomination configuration."""

from __future__ import annotations

# Accepted bills and coins in minor units (centavos), highest first.
ACCEPTED_DENOMINATIONS: tuple[int, ...] = (
    50000,
    20000,
    10000,
    5000,
    2000,
    1000,
    500,
    100,
    25,
    10,
    5,
)

BILL_DENOMINATIONS: tuple[int, ...] = (50000, 20000, 10000, 5000, 2000)

# Canonical item values consumed by vending.data (which wraps these into Item instances).
ITEM_SEED_BY_ID: dict[int, dict[str, str | int]] = {
    1: {"name": "Hotdog", "price": "9.50", "stock": 5},
    2: {"name": "Longganisa", "price": "20.75", "stock": 3},
    3: {"name": "Bacon", "price": "12.00", "stock": 2},
    4: {"name": "Sausage", "price": "35.00", "stock": 1},
    5: {"name": "Tapa", "price": "22.50", "stock": 0},
    6: {"name": "Tocino", "price": "18.00", "stock": 6},
    7: {"name": "Rice", "price": "15.00", "stock": 8},
    8: {"name": "Egg", "price": "8.00", "stock": 10},
}

TILL_SEED_COUNTS: dict[int, int] = {denomination: 10 for denomination in ACCEPTED_DENOMINATIONS}

OUT_OF_STOCK_LABEL = "Out of Stock"
