"""Tests for the Textual app, driven headlessly through run_test()."""

from __future__ import annotations

import asyncio

import pytest
from textual.screen import ModalScreen

from vending.amount_modal import AmountModal
from vending.models import SessionState
from vending.staff_modal import StaffModal
from vending.terminal import VendingTerminal
from vending.terminal_app import VendingApp


def _drive(app, scenario):
    async def runner():
        async with app.run_test() as pilot:
            await pilot.pause()
            await scenario(pilot)

    asyncio.run(runner())


async def _enter(pilot, *keys):
    await pilot.press(*keys, "enter")
    await pilot.pause()


@pytest.fixture
def app(small_catalog, till) -> VendingApp:
    return VendingApp(VendingTerminal(catalog=small_catalog, till=till))


@pytest.fixture(autouse=True)
def default_pin(monkeypatch):
    monkeypatch.delenv("VENDING_STAFF_PIN", raising=False)


# ---------------------------------------------------------------------------
# Top up and retry
# ---------------------------------------------------------------------------


def test_unaffordable_item_is_added_after_deposit(app):
    terminal = app.terminal

    async def scenario(pilot):
        await pilot.press("2")
        await _enter(pilot)

        assert app.pending_item_id == 2
        assert terminal.order_lines() == []
        assert terminal.catalog.find_by_id(2).stock == 1
        assert "Insert PHP 20.75 more" in str(app.system_status)

        await pilot.press("i")
        await pilot.pause()
        assert isinstance(app.screen, AmountModal)
        await _enter(pilot, "5", "0")

        assert not isinstance(app.screen, ModalScreen)
        assert terminal.inserted == 5000
        assert [(line.item_id, line.quantity) for line in terminal.order_lines()] == [(2, 1)]
        assert terminal.catalog.find_by_id(2).stock == 0
        assert app.pending_item_id is None

        await pilot.press("f", "y")
        await pilot.pause()

        assert terminal.state == SessionState.EMPTY
        assert terminal.inserted == 0
        assert app.system_status.plain.startswith("Order complete.")

    _drive(app, scenario)


def test_small_deposit_keeps_item_pending(app):
    async def scenario(pilot):
        await pilot.press("2")
        await _enter(pilot)
        await pilot.press("i")
        await _enter(pilot, "2", "0")

        assert app.pending_item_id == 2
        assert app.terminal.inserted == 2000
        assert app.terminal.order_lines() == []
        assert "Insert PHP 0.75 more" in str(app.system_status)

    _drive(app, scenario)


def test_cancel_clears_pending_item(app):
    async def scenario(pilot):
        await pilot.press("i")
        await _enter(pilot, "5")
        await pilot.press("2")
        await _enter(pilot)
        assert app.pending_item_id == 2

        await pilot.press("x")
        await pilot.pause()

        assert app.pending_item_id is None
        assert app.terminal.inserted == 0
        assert app.system_status.plain.startswith("Order cancelled.")

    _drive(app, scenario)


def test_invalid_denomination_is_reported(app):
    async def scenario(pilot):
        await pilot.press("i")
        await _enter(pilot, "3")

        assert app.terminal.inserted == 0
        assert app.system_status == "Invalid denomination: 3. Please try again."

    _drive(app, scenario)


# ---------------------------------------------------------------------------
# Staff access
# ---------------------------------------------------------------------------


def test_wrong_pin_is_rejected(app):
    async def scenario(pilot):
        await pilot.press("s")
        await pilot.pause()
        assert isinstance(app.screen, AmountModal)

        await _enter(pilot, "9", "9", "9", "9")

        assert not isinstance(app.screen, ModalScreen)
        assert app.system_status == "Incorrect password, please try again."

    _drive(app, scenario)


def test_pin_from_environment_opens_staff_screen(app, monkeypatch):
    monkeypatch.setenv("VENDING_STAFF_PIN", "4321")

    async def scenario(pilot):
        await pilot.press("s")
        await _enter(pilot, "4", "3", "2", "1")
        assert isinstance(app.screen, StaffModal)

        await pilot.press("escape")
        await pilot.pause()
        assert not isinstance(app.screen, ModalScreen)

    _drive(app, scenario)
