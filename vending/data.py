"""Seed catalog and till built from the static configuration."""

from __future__ import annotations

from vending.catalog import Catalog
from vending.constant import ITEM_SEED_BY_ID, TILL_SEED_COUNTS
from vending.models import Item
from vending.money import to_minor_units
from vending.till import Till


def build_items() -> list[Item]:
    return [
        Item(
            item_id=item_id,
            name=str(seed["name"]),
            price_minor=to_minor_units(str(seed["price"])),
            stock=int(seed["stock"]),
        )
        for item_id, seed in ITEM_SEED_BY_ID.items()
    ]


def build_catalog() -> Catalog:
    """Fresh catalog with the default items and stock levels."""
    return Catalog(build_items())


def build_till() -> Till:
    return Till(TILL_SEED_COUNTS)
