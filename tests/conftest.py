"""Shared fixtures for the vending core tests."""

from __future__ import annotations

import pytest

from vending.catalog import Catalog
from vending.data import build_catalog, build_till
from vending.models import Item
from vending.session import InsertedFunds, OrderSession
from vending.terminal import VendingTerminal
from vending.till import Till


@pytest.fixture
def catalog() -> Catalog:
    return build_catalog()


@pytest.fixture
def till() -> Till:
    return build_till()


@pytest.fixture
def session() -> OrderSession:
    return OrderSession()


@pytest.fixture
def funds() -> InsertedFunds:
    return InsertedFunds()


@pytest.fixture
def terminal(catalog, till) -> VendingTerminal:
    return VendingTerminal(catalog=catalog, till=till)


@pytest.fixture
def small_catalog() -> Catalog:
    return Catalog(
        [
            Item(item_id=1, name="Hotdog", price_minor=950, stock=2),
            Item(item_id=2, name="Longganisa", price_minor=2075, stock=1),
            Item(item_id=3, name="Tapa", price_minor=2250, stock=0),
        ]
    )
