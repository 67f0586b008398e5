"""Text formatting helpers shared by the screens and the deposit slip."""

from __future__ import annotations

from rich.text import Text

from caisse.constant import MODULE_LABELS, WRISTBAND_COLOR_STYLES
from caisse.models import DailyRecord, SalesReport, WristbandReport

_MODULE_BADGE_STYLES: dict[str, str] = {
    "pool": "bold #ffffff on #0e7490",
    "snackbar": "bold #451a03 on #fbbf24",
    "apparel": "bold #ffffff on #c026d3",
    "wristbands": "bold #ffffff on #7c3aed",
}

# Display order of modules in history and detail views.
DETAIL_ORDER = ("pool", "apparel", "snackbar", "wristbands")


def group_thousands(value: int) -> str:
    """French digit grouping: ``230500`` -> ``230 500``."""
    sign = "-" if value < 0 else ""
    return sign + f"{abs(int(value)):,}".replace(",", " ")


def format_amount(value: int) -> str:
    return f"{group_thousands(value)} F"


def badge_style(kind: str) -> str:
    """Return a consistent badge style for a module kind."""
    return _MODULE_BADGE_STYLES.get(kind, "bold #0b1f0f on #5fbf72")


def format_module_badge(kind: str) -> Text:
    text = Text()
    text.append(f" {MODULE_LABELS.get(kind, kind)} ", style=badge_style(kind))
    return text


def format_color_badge(color: str) -> Text:
    return Text(f" {color} ", style=WRISTBAND_COLOR_STYLES.get(color, "bold"))


def format_record_summary(record: DailyRecord) -> Text:
    """One history row: date, finalized module badges and the day total."""
    text = Text()
    text.append(record.display_date, style="bold")
    text.append("  ")
    for kind in DETAIL_ORDER:
        if kind in record.module_reports:
            text.append_text(format_module_badge(kind))
            text.append(" ")
    text.append(f" {format_amount(record.day_total)}", style="bold #34d399")
    return text


def format_sales_report(report: SalesReport) -> Text:
    text = Text()
    for line in report.line_items:
        if not line.quantity:
            continue
        text.append(f"  {line.label:<20} {line.quantity:>4} x {group_thousands(line.unit_price):>8}")
        text.append(f"  {format_amount(line.subtotal):>12}\n")
    text.append(f"  Total CA      {format_amount(report.gross_total)}\n", style="bold")
    for provider, amount in report.mobile_money_totals.items():
        if amount:
            text.append(f"  {provider.capitalize():<13} {format_amount(amount)}\n")
    if report.misc_deductions:
        note = f" ({report.misc_note})" if report.misc_note else ""
        text.append(f"  Dépenses      {format_amount(report.misc_deductions)}{note}\n")
    text.append(f"  Versement     {format_amount(report.deposit_amount)}", style="bold #34d399")
    return text


def format_wristband_report(report: WristbandReport) -> Text:
    text = Text()
    for idx, row in enumerate(report.rows):
        if idx > 0:
            text.append("\n")
        text.append("  ")
        text.append_text(format_color_badge(row.color))
        text.append(f"  sortie {row.stock_out:>4}  reste ")
        text.append(str(row.remaining), style="bold red" if row.remaining < 0 else "bold")
        numbering = " / ".join(part for part in (row.tracking_in, row.tracking_out, row.tracking_remaining) if part)
        if numbering:
            text.append(f"  [{numbering}]", style="dim")
    if not report.rows:
        text.append("  (aucune ligne)", style="dim")
    return text


def format_record_detail(record: DailyRecord) -> Text:
    """Full archive of one day, module by module."""
    text = Text()
    text.append(f"Archives du {record.display_date}\n", style="bold")
    text.append(f"Total CA global: {format_amount(record.day_total)}\n", style="bold #34d399")
    for kind in DETAIL_ORDER:
        report = record.module_reports.get(kind)
        if report is None:
            continue
        text.append("\n")
        text.append_text(format_module_badge(kind))
        text.append("\n")
        if isinstance(report, WristbandReport):
            text.append_text(format_wristband_report(report))
        else:
            text.append_text(format_sales_report(report))
        text.append("\n")
    return text
