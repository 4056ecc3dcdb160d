"""The vending terminal: one catalog, one till and one customer order at a time."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path

from vending.catalog import Catalog
from vending.config import MAX_ORDER_LINES
from vending.data import build_catalog, build_till
from vending.export import export_catalog_csv
from vending.models import Breakdown, Item, OrderLine, SessionState
from vending.money import to_minor_units
from vending.session import InsertedFunds, OrderSession
from vending.settlement import SettlementResult, settle
from vending.till import DenominationInput, Till

logger = logging.getLogger(__name__)


class VendingTerminal:
    """
    Operations offered to the screen layer.

    Customer flow: deposit -> select_item (repeat) -> finalize -> settle.
    Staff operations act on the catalog and till directly and ignore the
    order state. Single-threaded: a multi-threaded host must hold one lock
    around each customer interaction.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        till: Till | None = None,
        max_lines: int | None = MAX_ORDER_LINES,
    ) -> None:
        self.catalog = catalog if catalog is not None else build_catalog()
        self.till = till if till is not None else build_till()
        self.session = OrderSession(max_lines=max_lines)
        self.funds = InsertedFunds()

    # --- Read side --- #
    @property
    def inserted(self) -> int:
        return self.funds.total

    @property
    def order_total(self) -> int:
        return self.session.total

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def balance(self) -> int:
        """Inserted money not yet spent on the order."""
        return self.funds.total - self.session.total

    def items(self) -> list[Item]:
        return self.catalog.list_all()

    def order_lines(self) -> list[OrderLine]:
        return self.session.lines

    # --- Customer flow --- #
    def deposit(self, denomination: DenominationInput) -> int:
        """Insert one bill or coin. Returns the new inserted total."""
        value = self.till.deposit(denomination)
        total = self.funds.add(value)
        logger.info("deposit value=%s inserted=%s", value, total)
        return total

    def select_item(self, item_id: int) -> OrderLine:
        return self.session.select_item(self.catalog, item_id, self.funds.total)

    def finalize(self) -> None:
        self.session.finalize()

    def settle(self, confirmed: bool) -> SettlementResult:
        return settle(confirmed, self.session, self.funds, self.till, self.catalog)

    def abandon(self) -> SettlementResult:
        """Walk-away path: cancel so no stock or money is stranded."""
        return self.settle(False)

    # --- Staff maintenance --- #
    def adjust_stock(self, item_id: int, delta: int) -> int:
        return self.catalog.adjust_stock(item_id, delta)

    def restock_item(self, item_id: int, quantity: int) -> int:
        return self.catalog.restock_item(item_id, quantity)

    def set_price(self, item_id: int, new_price: Decimal | int | float | str) -> Item:
        return self.catalog.set_price(item_id, new_price)

    def restock_till(self, denomination: DenominationInput, quantity: int) -> int:
        return self.till.restock(denomination, quantity)

    def withdraw_by_amount(self, amount: Decimal | int | float | str) -> Breakdown:
        """Staff cash-out of an exact major-unit amount."""
        return self.till.withdraw_by_amount(to_minor_units(amount))

    def withdraw_by_denomination(self, denomination: DenominationInput, quantity: int) -> int:
        return self.till.withdraw_by_denomination(denomination, quantity)

    def export_catalog(self, path: Path | str | None = None) -> Path:
        return export_catalog_csv(self.catalog.list_all(), path)
