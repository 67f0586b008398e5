"""Domain models for the cash desk: working states, reports and daily records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from caisse.constant import MOBILE_MONEY_PROVIDERS

ModuleKind = Literal["pool", "snackbar", "apparel", "wristbands"]

MODULE_KINDS: tuple[ModuleKind, ...] = ("pool", "snackbar", "apparel", "wristbands")
REVENUE_KINDS: tuple[ModuleKind, ...] = ("pool", "snackbar", "apparel")
WRISTBANDS: ModuleKind = "wristbands"


def number_or_zero(value: object) -> int:
    # Live totals tolerate half-typed entries; finalize does the strict check.
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def empty_mobile_money() -> dict[str, int]:
    return {provider: 0 for provider in MOBILE_MONEY_PROVIDERS}


@dataclass
class LineItem:
    """An editable priced row: quantity sold at a unit price."""

    label: str
    quantity: int = 0
    unit_price: int = 0

    @property
    def subtotal(self) -> int:
        return number_or_zero(self.quantity) * number_or_zero(self.unit_price)


@dataclass
class SalesState:
    """Unsaved entries of a revenue module (pool, snackbar or apparel)."""

    kind: ModuleKind
    items: list[LineItem] = field(default_factory=list)
    mobile_money: dict[str, int] = field(default_factory=empty_mobile_money)
    misc_deductions: int = 0
    misc_note: str = ""

    @property
    def gross_total(self) -> int:
        return sum(item.subtotal for item in self.items)

    @property
    def mobile_money_total(self) -> int:
        return sum(number_or_zero(amount) for amount in self.mobile_money.values())

    @property
    def cash_total(self) -> int:
        return self.gross_total - self.mobile_money_total

    @property
    def deposit_amount(self) -> int:
        return self.cash_total - number_or_zero(self.misc_deductions)


@dataclass
class WristbandRow:
    """One wristband color: configured stock-in, the day's stock-out and numbering."""

    color: str
    stock_in: int = 0
    stock_out: int = 0
    tracking_in: str = ""
    tracking_out: str = ""
    tracking_remaining: str = ""

    @property
    def remaining(self) -> int:
        return number_or_zero(self.stock_in) - number_or_zero(self.stock_out)


@dataclass
class WristbandState:
    """Unsaved wristband inventory rows."""

    rows: list[WristbandRow] = field(default_factory=list)
    kind: ModuleKind = WRISTBANDS


WorkingState = SalesState | WristbandState


@dataclass(frozen=True)
class ReportLine:
    label: str
    quantity: int
    unit_price: int
    subtotal: int


@dataclass(frozen=True)
class SalesReport:
    """Finalized figures of a revenue module."""

    kind: ModuleKind
    line_items: tuple[ReportLine, ...]
    mobile_money_totals: dict[str, int]
    misc_deductions: int
    misc_note: str
    gross_total: int
    cash_total: int
    deposit_amount: int


@dataclass(frozen=True)
class WristbandReportRow:
    color: str
    stock_in: int
    stock_out: int
    remaining: int
    tracking_in: str = ""
    tracking_out: str = ""
    tracking_remaining: str = ""


@dataclass(frozen=True)
class WristbandReport:
    """Finalized wristband stock movement. Carries no revenue."""

    rows: tuple[WristbandReportRow, ...]
    kind: ModuleKind = WRISTBANDS

    @property
    def gross_total(self) -> int:
        return 0


ModuleReport = SalesReport | WristbandReport


@dataclass
class DailyRecord:
    """All finalized module reports for one local calendar date."""

    date_key: str
    display_date: str
    module_reports: dict[str, ModuleReport] = field(default_factory=dict)
    day_total: int = 0


@dataclass(frozen=True)
class DepositFigures:
    """Cash and mobile-money amounts expected for the bank deposit."""

    cash: int = 0
    orange_money: int = 0
    wave_pay: int = 0

    @property
    def total(self) -> int:
        return self.cash + self.orange_money + self.wave_pay

    def __add__(self, other: DepositFigures) -> DepositFigures:
        return DepositFigures(
            cash=self.cash + other.cash,
            orange_money=self.orange_money + other.orange_money,
            wave_pay=self.wave_pay + other.wave_pay,
        )
