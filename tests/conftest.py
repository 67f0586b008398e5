"""
Shared pytest fixtures.

Provides a controllable clock, a temporary SQLite path and a wired core
context so tests never touch the real ``data/`` directory.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from caisse.context import build_context
from caisse.ledger import LedgerStore
from caisse.models import LineItem, SalesState, WristbandRow, WristbandState
from caisse.working_state import WorkingStateCache


class FixedClock:
    """Callable clock whose current time the test moves by hand."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 2, 23, 10, 30))


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "caisse.db"


@pytest.fixture
def cache():
    return WorkingStateCache()


@pytest.fixture
def ledger():
    return LedgerStore()


@pytest.fixture
def context(db_path, clock):
    return build_context(db_path, clock=clock)


def make_sales_state(kind="pool", lines=(), orange=0, wave=0, misc=0, note=""):
    """Build a SalesState from (label, quantity, unit_price) tuples."""
    return SalesState(
        kind=kind,
        items=[LineItem(label=label, quantity=qty, unit_price=price) for label, qty, price in lines],
        mobile_money={"orange": orange, "wave": wave},
        misc_deductions=misc,
        misc_note=note,
    )


def make_wristband_state(*rows):
    """Build a WristbandState from (color, stock_in, stock_out) tuples."""
    return WristbandState(rows=[WristbandRow(color=color, stock_in=si, stock_out=so) for color, si, so in rows])
