"""Turn a module's working entries into a ModuleReport and file it in the ledger."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from caisse.constant import MOBILE_MONEY_PROVIDERS
from caisse.ledger import LedgerStore
from caisse.models import (
    MODULE_KINDS,
    WRISTBANDS,
    ModuleKind,
    ModuleReport,
    ReportLine,
    SalesReport,
    SalesState,
    WorkingState,
    WristbandReport,
    WristbandReportRow,
    WristbandState,
)

logger = logging.getLogger(__name__)


class FinalizeError(ValueError):
    """Working entries that cannot be committed to the ledger."""


def coerce_count(value: object, field_name: str) -> int:
    """Resolve an entered figure to a non-negative int. Absent or blank means 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise FinalizeError(f"{field_name}: expected a number, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise FinalizeError(f"{field_name}: expected a whole number, got {value!r}")
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = int(text)
        except ValueError:
            raise FinalizeError(f"{field_name}: expected a number, got {value!r}") from None
    else:
        raise FinalizeError(f"{field_name}: expected a number, got {value!r}")

    if number < 0:
        raise FinalizeError(f"{field_name}: must not be negative (got {number})")
    return number


def build_sales_report(state: SalesState) -> SalesReport:
    lines = []
    for idx, item in enumerate(state.items):
        quantity = coerce_count(item.quantity, f"{item.label or idx} quantity")
        unit_price = coerce_count(item.unit_price, f"{item.label or idx} price")
        lines.append(ReportLine(label=item.label, quantity=quantity, unit_price=unit_price, subtotal=quantity * unit_price))

    unknown = set(state.mobile_money) - set(MOBILE_MONEY_PROVIDERS)
    if unknown:
        raise FinalizeError(f"Unknown mobile money provider(s): {', '.join(sorted(unknown))}")
    mobile_money = {
        provider: coerce_count(state.mobile_money.get(provider), provider) for provider in MOBILE_MONEY_PROVIDERS
    }
    misc = coerce_count(state.misc_deductions, "expenses")

    gross = sum(line.subtotal for line in lines)
    cash = gross - sum(mobile_money.values())
    return SalesReport(
        kind=state.kind,
        line_items=tuple(lines),
        mobile_money_totals=mobile_money,
        misc_deductions=misc,
        misc_note=(state.misc_note or "").strip(),
        gross_total=gross,
        cash_total=cash,
        deposit_amount=cash - misc,
    )


def build_wristband_report(state: WristbandState) -> WristbandReport:
    rows = []
    for idx, row in enumerate(state.rows):
        name = row.color or f"row {idx + 1}"
        stock_in = coerce_count(row.stock_in, f"{name} stock in")
        stock_out = coerce_count(row.stock_out, f"{name} stock out")
        rows.append(
            WristbandReportRow(
                color=row.color,
                stock_in=stock_in,
                stock_out=stock_out,
                # Not clamped: a negative value is an entry error the operator must see.
                remaining=stock_in - stock_out,
                tracking_in=row.tracking_in or "",
                tracking_out=row.tracking_out or "",
                tracking_remaining=row.tracking_remaining or "",
            )
        )
    return WristbandReport(rows=tuple(rows))


def build_report(kind: ModuleKind, state: WorkingState) -> ModuleReport:
    """Validate ``state`` for ``kind`` and derive its report."""
    if kind not in MODULE_KINDS:
        raise FinalizeError(f"Unknown module kind: {kind!r}")
    if kind == WRISTBANDS:
        if not isinstance(state, WristbandState):
            raise FinalizeError("Wristband finalize expects wristband rows")
        return build_wristband_report(state)
    if not isinstance(state, SalesState) or state.kind != kind:
        raise FinalizeError(f"Finalize for {kind!r} expects {kind!r} sales entries")
    return build_sales_report(state)


class FinalizeCoordinator:
    """
    Commits a module's working entries under today's date.

    Finalizing the same module twice on one day keeps only the last report.
    Working entries are left untouched; clearing them is the rollover's job.
    """

    def __init__(
        self,
        ledger: LedgerStore,
        clock: Callable[[], datetime] = datetime.now,
        on_finalized: Callable[[ModuleReport], None] | None = None,
    ) -> None:
        self.ledger = ledger
        self.clock = clock
        self.on_finalized = on_finalized

    def finalize(self, kind: ModuleKind, state: WorkingState) -> ModuleReport:
        report = build_report(kind, state)
        date_key = self.clock().date().isoformat()
        self.ledger.upsert(date_key, kind, report)
        logger.info("finalized kind=%s date_key=%s gross=%d", kind, date_key, report.gross_total)
        if self.on_finalized is not None:
            self.on_finalized(report)
        return report
