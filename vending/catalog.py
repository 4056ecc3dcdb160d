"""Item catalog: lookup, stock and price maintenance."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from vending.errors import InvalidPrice, InvalidQuantity, InvariantViolation, ItemNotFound
from vending.models import Item
from vending.money import to_minor_units

logger = logging.getLogger(__name__)


class Catalog:
    """Owns the item records. Stock and price only change through these methods."""

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: dict[int, Item] = {}
        for item in items:
            if item.item_id in self._items:
                raise ValueError(f"Duplicate item number {item.item_id}")
            if item.stock < 0 or item.price_minor < 0:
                raise InvariantViolation(f"Item {item.item_id} seeded with negative stock or price")
            self._items[item.item_id] = item

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def find_by_id(self, item_id: int) -> Item:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFound(item_id) from None

    def list_all(self) -> list[Item]:
        """Snapshot copies in item-number order."""
        return [
            Item(item.item_id, item.name, item.price_minor, item.stock)
            for item in sorted(self._items.values(), key=lambda item: item.item_id)
        ]

    def adjust_stock(self, item_id: int, delta: int) -> int:
        """Apply a stock delta and return the new stock.

        Driving stock below zero is a caller bug: decrementers check first.
        """
        item = self.find_by_id(item_id)
        new_stock = item.stock + delta
        if new_stock < 0:
            raise InvariantViolation(f"Stock for item {item_id} would become {new_stock}")
        item.stock = new_stock
        logger.debug("stock item=%s delta=%s stock=%s", item_id, delta, new_stock)
        return new_stock

    def restock_item(self, item_id: int, quantity: int) -> int:
        item = self.find_by_id(item_id)
        if quantity <= 0:
            raise InvalidQuantity(quantity)
        new_stock = self.adjust_stock(item.item_id, quantity)
        logger.info("restock item=%s added=%s stock=%s", item_id, quantity, new_stock)
        return new_stock

    def set_price(self, item_id: int, new_price: Decimal | int | float | str) -> Item:
        item = self.find_by_id(item_id)
        try:
            price_minor = to_minor_units(new_price)
        except (ValueError, ArithmeticError):
            raise InvalidPrice(new_price) from None
        if price_minor <= 0:
            raise InvalidPrice(new_price)
        item.price_minor = price_minor
        logger.info("price item=%s price=%s", item_id, price_minor)
        return item
