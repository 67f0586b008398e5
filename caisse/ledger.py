"""Daily ledger: finalized module reports grouped by local calendar date."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import asdict, replace
from datetime import date
from pathlib import Path
from typing import Any, Callable

from caisse.constant import MONTHS_FR
from caisse.models import (
    MODULE_KINDS,
    WRISTBANDS,
    DailyRecord,
    ModuleKind,
    ModuleReport,
    ReportLine,
    SalesReport,
    WristbandReport,
    WristbandReportRow,
)
from caisse.persistence import load_daily_records, save_daily_records

logger = logging.getLogger(__name__)


def display_date_for(date_key: str) -> str:
    """French long date label, e.g. ``2024-02-23`` -> ``23 février 2024``."""
    day = date.fromisoformat(date_key)
    return f"{day.day} {MONTHS_FR[day.month - 1]} {day.year}"


def compute_day_total(module_reports: dict[str, ModuleReport]) -> int:
    return sum(report.gross_total for kind, report in module_reports.items() if kind != WRISTBANDS)


def report_to_dict(report: ModuleReport) -> dict[str, Any]:
    return asdict(report)


def report_from_dict(data: dict[str, Any]) -> ModuleReport:
    kind = data["kind"]
    if kind == WRISTBANDS:
        return WristbandReport(
            rows=tuple(
                WristbandReportRow(
                    color=str(row["color"]),
                    stock_in=int(row["stock_in"]),
                    stock_out=int(row["stock_out"]),
                    remaining=int(row["remaining"]),
                    tracking_in=str(row.get("tracking_in", "")),
                    tracking_out=str(row.get("tracking_out", "")),
                    tracking_remaining=str(row.get("tracking_remaining", "")),
                )
                for row in data["rows"]
            )
        )
    if kind not in MODULE_KINDS:
        raise ValueError(f"Unknown module kind: {kind!r}")
    return SalesReport(
        kind=kind,
        line_items=tuple(
            ReportLine(
                label=str(line["label"]),
                quantity=int(line["quantity"]),
                unit_price=int(line["unit_price"]),
                subtotal=int(line["subtotal"]),
            )
            for line in data["line_items"]
        ),
        mobile_money_totals={str(provider): int(amount) for provider, amount in data["mobile_money_totals"].items()},
        misc_deductions=int(data["misc_deductions"]),
        misc_note=str(data.get("misc_note", "")),
        gross_total=int(data["gross_total"]),
        cash_total=int(data["cash_total"]),
        deposit_amount=int(data["deposit_amount"]),
    )


def record_to_dict(record: DailyRecord) -> dict[str, Any]:
    return {
        "date_key": record.date_key,
        "display_date": record.display_date,
        "day_total": record.day_total,
        "module_reports": {kind: report_to_dict(report) for kind, report in record.module_reports.items()},
    }


def record_from_dict(data: dict[str, Any]) -> DailyRecord:
    reports = {str(kind): report_from_dict(payload) for kind, payload in data["module_reports"].items()}
    return DailyRecord(
        date_key=str(data["date_key"]),
        display_date=str(data["display_date"]),
        module_reports=reports,
        day_total=compute_day_total(reports),
    )


def _copy_record(record: DailyRecord) -> DailyRecord:
    return replace(record, module_reports=dict(record.module_reports))


class LedgerStore:
    """
    Owns every DailyRecord and writes the full set through to SQLite.

    A failed write is logged and passed to ``on_write_error``; the in-memory
    records stay authoritative and the next successful write stores them all.
    With ``db_path=None`` the store is memory only.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        on_write_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self.db_path = db_path
        self.on_write_error = on_write_error
        self._records: dict[str, DailyRecord] = {}

    def load(self) -> None:
        """Replace in-memory records with the persisted snapshot. Bad data reads as no history."""
        self._records = {}
        if self.db_path is None:
            return
        try:
            rows = load_daily_records(self.db_path)
        except sqlite3.Error as exc:
            logger.warning("ledger_load_failed db=%s error=%r", self.db_path, exc)
            return

        for date_key, _display_date, payload in rows:
            try:
                record = record_from_dict(json.loads(payload))
            except (ValueError, KeyError, TypeError, AttributeError) as exc:
                logger.warning("ledger_row_skipped date_key=%s error=%r", date_key, exc)
                continue
            self._records[record.date_key] = record
        logger.info("ledger_loaded days=%d", len(self._records))

    def upsert(self, date_key: str, kind: ModuleKind, report: ModuleReport) -> DailyRecord:
        if kind not in MODULE_KINDS:
            raise ValueError(f"Unknown module kind: {kind!r}")
        if report.kind != kind:
            raise ValueError(f"Report for {report.kind!r} cannot be filed under {kind!r}")

        record = self._records.get(date_key)
        if record is None:
            record = DailyRecord(date_key=date_key, display_date=display_date_for(date_key))
            self._records[date_key] = record

        record.module_reports[kind] = report
        record.day_total = compute_day_total(record.module_reports)
        logger.info("ledger_upsert date_key=%s kind=%s day_total=%d", date_key, kind, record.day_total)
        self.persist()
        return _copy_record(record)

    def get(self, date_key: str) -> DailyRecord | None:
        record = self._records.get(date_key)
        if record is None:
            return None
        return _copy_record(record)

    def list_all(self) -> list[DailyRecord]:
        """All records, most recent date first."""
        return [_copy_record(self._records[key]) for key in sorted(self._records, reverse=True)]

    def persist(self) -> bool:
        """Write the full snapshot. Returns False when the write failed."""
        if self.db_path is None:
            return True
        rows = [
            (record.date_key, record.display_date, json.dumps(record_to_dict(record), ensure_ascii=False))
            for record in self._records.values()
        ]
        try:
            save_daily_records(rows, self.db_path)
        except (sqlite3.Error, OSError) as exc:
            logger.error("ledger_write_failed db=%s error=%r", self.db_path, exc)
            if self.on_write_error is not None:
                self.on_write_error(exc)
            return False
        return True
