"""Exception taxonomy for the vending core."""

from __future__ import annotations

from vending.money import format_amount, format_denomination


class VendingError(Exception):
    """Base class for recoverable errors reported back to the caller."""


class ValidationError(VendingError):
    """Input rejected before any state was touched."""


class PolicyRejection(VendingError):
    """Valid input refused by a business rule; the caller may retry."""


class InvalidDenomination(ValidationError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid denomination: {value}")
        self.value = value


class InvalidPrice(ValidationError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Price must be a positive amount, got {value}")
        self.value = value


class InvalidQuantity(ValidationError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Quantity must be a positive number, got {value}")
        self.value = value


class InvalidAmount(ValidationError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Amount must be positive, got {value}")
        self.value = value


class ItemNotFound(ValidationError):
    def __init__(self, item_id: int) -> None:
        super().__init__(f"No item found with number {item_id}")
        self.item_id = item_id


class OutOfStock(PolicyRejection):
    def __init__(self, item_id: int, name: str) -> None:
        super().__init__(f"Sorry, {name} is currently out of stock")
        self.item_id = item_id
        self.name = name


class InsufficientFunds(PolicyRejection):
    """Selection would exceed the money inserted so far.

    `shortfall` is in minor units. Nothing was mutated: top up and retry the
    same selection, or pick something else.
    """

    def __init__(self, item_id: int, shortfall: int) -> None:
        super().__init__(f"Insert {format_amount(shortfall)} more to select item {item_id}")
        self.item_id = item_id
        self.shortfall = shortfall


class MustSelectAtLeastOne(PolicyRejection):
    def __init__(self) -> None:
        super().__init__("Select at least one item before finishing the order")


class InsufficientQuantity(PolicyRejection):
    def __init__(self, denomination: int, requested: int, available: int) -> None:
        super().__init__(
            f"Only {available} of {format_denomination(denomination)} available, {requested} requested"
        )
        self.denomination = denomination
        self.requested = requested
        self.available = available


class InvalidSessionState(PolicyRejection):
    def __init__(self, action: str, state: object) -> None:
        super().__init__(f"Cannot {action} while order is {state}")
        self.action = action
        self.state = state


class OrderLimitReached(PolicyRejection):
    def __init__(self, max_lines: int) -> None:
        super().__init__(f"An order holds at most {max_lines} different items")
        self.max_lines = max_lines


class ExactChangeUnavailable(VendingError):
    """The till cannot make the exact amount; its counts are unchanged."""

    def __init__(self, amount: int, remainder: int) -> None:
        super().__init__(f"Unable to dispense exact amount {format_amount(amount)} (short {format_amount(remainder)})")
        self.amount = amount
        self.remainder = remainder


class InvariantViolation(AssertionError):
    """Internal contract broken. Indicates a logic bug, never user error."""
