"""In-memory cache of each module's unsaved working entries."""

from __future__ import annotations

import copy
import logging

from caisse.constant import DEFAULT_PRICE_LISTS, DEFAULT_WRISTBAND_ROWS
from caisse.models import (
    MODULE_KINDS,
    WRISTBANDS,
    LineItem,
    ModuleKind,
    SalesState,
    WorkingState,
    WristbandRow,
    WristbandState,
    empty_mobile_money,
)

logger = logging.getLogger(__name__)


def default_state(kind: ModuleKind) -> WorkingState:
    """Build the module's starting template from the editable catalog."""
    if kind == WRISTBANDS:
        return WristbandState(
            rows=[
                WristbandRow(
                    color=color,
                    stock_in=stock_in,
                    tracking_in=tracking_in,
                    tracking_out=tracking_out,
                    tracking_remaining=tracking_remaining,
                )
                for color, stock_in, tracking_in, tracking_out, tracking_remaining in DEFAULT_WRISTBAND_ROWS
            ]
        )
    if kind not in DEFAULT_PRICE_LISTS:
        raise ValueError(f"Unknown module kind: {kind!r}")
    return SalesState(
        kind=kind,
        items=[LineItem(label=label, unit_price=price) for label, price in DEFAULT_PRICE_LISTS[kind]],
    )


def zeroed_state(state: WorkingState) -> WorkingState:
    """
    Clear the day's transactional fields and keep operator configuration.

    Sales modules keep labels and unit prices; wristbands keep colors,
    stock-in and the incoming numbering.
    """
    if isinstance(state, WristbandState):
        return WristbandState(
            rows=[
                WristbandRow(
                    color=row.color,
                    stock_in=row.stock_in,
                    stock_out=0,
                    tracking_in=row.tracking_in,
                    tracking_out="",
                    tracking_remaining="",
                )
                for row in state.rows
            ]
        )
    return SalesState(
        kind=state.kind,
        items=[LineItem(label=item.label, quantity=0, unit_price=item.unit_price) for item in state.items],
        mobile_money=empty_mobile_money(),
        misc_deductions=0,
        misc_note="",
    )


class WorkingStateCache:
    """Holds one working snapshot per module. Callers only ever see copies."""

    def __init__(self) -> None:
        self._states: dict[str, WorkingState] = {}

    def read(self, kind: ModuleKind) -> WorkingState:
        state = self._states.get(kind)
        if state is None:
            return default_state(kind)
        return copy.deepcopy(state)

    def write(self, kind: ModuleKind, state: WorkingState) -> None:
        if kind not in MODULE_KINDS:
            raise ValueError(f"Unknown module kind: {kind!r}")
        if state.kind != kind:
            raise ValueError(f"Working state for {state.kind!r} cannot be stored as {kind!r}")
        self._states[kind] = copy.deepcopy(state)

    def reset_all(self) -> None:
        for kind, state in list(self._states.items()):
            self._states[kind] = zeroed_state(state)
        logger.info("working_state_reset modules=%s", sorted(self._states))

    def has_entries(self, kind: ModuleKind) -> bool:
        return kind in self._states
