"""Tests for amount formatting and record rendering."""

import pytest

from caisse.finalize import build_report
from caisse.ledger import LedgerStore
from caisse.rendering import format_amount, format_record_detail, format_record_summary, group_thousands

from tests.conftest import make_sales_state, make_wristband_state


@pytest.mark.parametrize(
    "value,expected",
    [(0, "0"), (500, "500"), (1000, "1 000"), (230500, "230 500"), (1234567, "1 234 567"), (-2500, "-2 500")],
)
def test_group_thousands(value, expected):
    assert group_thousands(value) == expected


def test_format_amount():
    assert format_amount(200500) == "200 500 F"


@pytest.fixture
def record():
    store = LedgerStore()
    store.upsert("2024-02-23", "pool", build_report("pool", make_sales_state("pool", [("Piscine", 61, 500)], orange=500)))
    return store.upsert(
        "2024-02-23",
        "wristbands",
        build_report("wristbands", make_wristband_state(("Rouge", 10, 12))),
    )


def test_summary_lists_date_modules_and_total(record):
    plain = format_record_summary(record).plain
    assert plain.startswith("23 février 2024")
    assert "Piscine" in plain
    assert "Bracelets" in plain
    assert "30 500 F" in plain


def test_detail_shows_every_module(record):
    plain = format_record_detail(record).plain
    assert "Archives du 23 février 2024" in plain
    assert "Total CA global: 30 500 F" in plain
    assert "Versement     30 000 F" in plain
    assert "reste -2" in plain
