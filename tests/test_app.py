"""Headless Textual runs of the cash desk app."""

import asyncio
from datetime import datetime

from caisse.caisse_app import CaisseApp, format_menu
from caisse.deposit_screen import DepositScreen
from caisse.history_screen import HistoryScreen, RecordDetailModal
from caisse.sales_screen import SalesScreen
from caisse.wristband_screen import WristbandScreen

from tests.conftest import make_sales_state


def test_finalize_pool_from_keyboard(context):
    async def scenario():
        app = CaisseApp(context)
        async with app.run_test() as pilot:
            await pilot.press("1")
            await pilot.pause()
            assert isinstance(app.screen, SalesScreen)

            await pilot.press("2", "ctrl+s")
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, SalesScreen)

    asyncio.run(scenario())

    record = context.ledger.get("2024-02-23")
    assert record is not None
    assert record.module_reports["pool"].line_items[0].quantity == 2
    assert record.day_total == 1000
    assert context.cache.read("pool").items[0].quantity == 2


def test_menu_opens_every_screen(context):
    expected = {"3": SalesScreen, "4": WristbandScreen, "5": DepositScreen, "6": HistoryScreen}

    async def scenario():
        app = CaisseApp(context)
        async with app.run_test() as pilot:
            for key, screen_type in expected.items():
                await pilot.press(key)
                await pilot.pause()
                assert isinstance(app.screen, screen_type)
                await pilot.press("escape")
                await pilot.pause()
                assert len(app.screen_stack) == 1

    asyncio.run(scenario())


def test_history_detail_modal(context):
    context.coordinator.finalize("snackbar", make_sales_state("snackbar", [("Sachet", 3, 200)]))

    async def scenario():
        app = CaisseApp(context)
        async with app.run_test() as pilot:
            await pilot.press("6")
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()
            assert isinstance(app.screen, RecordDetailModal)
            assert app.screen.record.day_total == 600
            await pilot.press("q")
            await pilot.pause()
            assert isinstance(app.screen, HistoryScreen)

    asyncio.run(scenario())


def test_rollover_runs_on_start_after_cutoff(context, clock):
    context.cache.write("pool", make_sales_state("pool", [("Piscine", 9, 500)]))
    clock.now = datetime(2024, 2, 23, 18, 0)

    async def scenario():
        app = CaisseApp(context)
        async with app.run_test() as pilot:
            await pilot.pause()

    asyncio.run(scenario())

    assert context.cache.read("pool").items[0].quantity == 0
    assert context.scheduler.state() == "FIRED"


def test_deposit_screen_shows_printer_status(context, monkeypatch):
    monkeypatch.setattr(
        "caisse.deposit_screen.check_printer_dependencies",
        lambda: (False, "Imprimante indisponible: pas de port USB"),
    )

    async def scenario():
        app = CaisseApp(context)
        async with app.run_test() as pilot:
            await pilot.press("5")
            await pilot.pause()
            assert isinstance(app.screen, DepositScreen)
            assert app.screen.status == "Imprimante indisponible: pas de port USB"

    asyncio.run(scenario())


def test_menu_marks_modules_with_entries(cache):
    assert "saisie" not in format_menu(cache).plain

    cache.write("pool", make_sales_state("pool", [("Piscine", 1, 500)]))
    lines = format_menu(cache).plain.splitlines()
    assert "saisie" in lines[0]
    assert not any("saisie" in line for line in lines[1:])


def test_pool_screen_opens_wristbands(context):
    async def scenario():
        app = CaisseApp(context)
        async with app.run_test() as pilot:
            await pilot.press("1")
            await pilot.pause()
            await pilot.press("ctrl+b")
            await pilot.pause()
            assert isinstance(app.screen, WristbandScreen)
            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, SalesScreen)
            await pilot.press("escape")
            await pilot.pause()

            await pilot.press("2")
            await pilot.pause()
            await pilot.press("ctrl+b")
            await pilot.pause()
            assert isinstance(app.screen, SalesScreen)

    asyncio.run(scenario())
