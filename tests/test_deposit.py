"""Tests for the cross-module deposit aggregation."""

import pytest

from caisse.deposit import aggregate, aggregate_cache, deposit_figures
from caisse.models import DepositFigures, WristbandState
from caisse.working_state import WorkingStateCache

from tests.conftest import make_sales_state


def test_aggregates_three_revenue_modules():
    pool = make_sales_state("pool", [("Piscine", 200, 500)])
    snackbar = make_sales_state("snackbar", [("Grand pot", 60, 1000)], orange=10000)
    apparel = make_sales_state("apparel", [("Homme", 5, 1000)], wave=5000)

    figures = aggregate(pool, snackbar, apparel)

    assert figures == DepositFigures(cash=150000, orange_money=10000, wave_pay=5000)
    assert figures.total == 165000


def test_missing_modules_count_as_zero():
    pool = make_sales_state("pool", [("Piscine", 2, 500)], orange=300)
    assert aggregate(pool, None, None) == DepositFigures(cash=700, orange_money=300, wave_pay=0)
    assert aggregate(None, None, None) == DepositFigures()


def test_cash_is_net_of_expenses():
    state = make_sales_state("snackbar", [("Sachet", 10, 200)], wave=500, misc=300, note="gobelets")
    assert deposit_figures(state) == DepositFigures(cash=1200, orange_money=0, wave_pay=500)


def test_blank_mobile_money_reads_as_zero():
    state = make_sales_state("apparel", [("Femme", 1, 1000)], orange="", wave=None)
    assert deposit_figures(state) == DepositFigures(cash=1000)


def test_fresh_cache_aggregates_to_zero():
    assert aggregate_cache(WorkingStateCache()) == DepositFigures()


def test_cache_edits_show_up_immediately():
    cache = WorkingStateCache()
    cache.write("pool", make_sales_state("pool", [("Piscine", 4, 500)]))
    assert aggregate_cache(cache).cash == 2000

    cache.write("apparel", make_sales_state("apparel", [("Enfant", 1, 1000)], orange=1000))
    assert aggregate_cache(cache) == DepositFigures(cash=2000, orange_money=1000, wave_pay=0)


def test_figures_add_up():
    total = DepositFigures(1, 2, 3) + DepositFigures(10, 20, 30)
    assert total == DepositFigures(11, 22, 33)
    assert total.total == 66


def test_cache_with_wrong_shape_is_rejected():
    cache = WorkingStateCache()
    cache.write("pool", WristbandState(rows=[], kind="pool"))
    with pytest.raises(TypeError):
        aggregate_cache(cache)
