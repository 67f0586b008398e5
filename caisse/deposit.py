"""Live cross-module deposit ("versement") figures."""

from __future__ import annotations

from caisse.models import REVENUE_KINDS, DepositFigures, SalesState, number_or_zero
from caisse.working_state import WorkingStateCache


def deposit_figures(state: SalesState | None) -> DepositFigures:
    """Cash to bank plus mobile-money amounts for one revenue module."""
    if state is None:
        return DepositFigures()
    return DepositFigures(
        cash=state.deposit_amount,
        orange_money=number_or_zero(state.mobile_money.get("orange")),
        wave_pay=number_or_zero(state.mobile_money.get("wave")),
    )


def aggregate(
    pool: SalesState | None,
    snackbar: SalesState | None,
    apparel: SalesState | None,
) -> DepositFigures:
    """Sum the revenue modules. Wristbands carry no money and never take part."""
    return deposit_figures(pool) + deposit_figures(snackbar) + deposit_figures(apparel)


def aggregate_cache(cache: WorkingStateCache) -> DepositFigures:
    states = []
    for kind in REVENUE_KINDS:
        state = cache.read(kind)
        if not isinstance(state, SalesState):
            raise TypeError(f"Expected sales entries for {kind!r}, got {type(state).__name__}")
        states.append(state)
    return aggregate(*states)
