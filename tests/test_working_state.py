"""Tests for the working-state cache and its end-of-day reset shapes."""

import pytest

from caisse.constant import DEFAULT_PRICE_LISTS
from caisse.models import SalesState, WristbandRow, WristbandState
from caisse.working_state import default_state, zeroed_state

from tests.conftest import make_sales_state


class TestDefaultTemplates:
    @pytest.mark.parametrize("kind", ["pool", "snackbar", "apparel"])
    def test_sales_template_uses_catalog_prices(self, kind):
        state = default_state(kind)
        assert isinstance(state, SalesState)
        assert [(item.label, item.unit_price) for item in state.items] == DEFAULT_PRICE_LISTS[kind]
        assert all(item.quantity == 0 for item in state.items)
        assert state.mobile_money == {"orange": 0, "wave": 0}
        assert state.gross_total == 0

    def test_wristband_template(self):
        state = default_state("wristbands")
        assert isinstance(state, WristbandState)
        assert [(row.color, row.stock_in, row.stock_out) for row in state.rows] == [("Bleu", 100, 0), ("Rouge", 50, 0)]

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            default_state("restaurant")


class TestCache:
    def test_read_without_entries_returns_template(self, cache):
        state = cache.read("snackbar")
        assert [item.label for item in state.items][:2] == ["Sachet", "Petit pot"]
        assert not cache.has_entries("snackbar")

    def test_write_then_read(self, cache):
        state = make_sales_state("apparel", [("Homme", 3, 1000)], wave=1000)
        cache.write("apparel", state)
        assert cache.read("apparel") == state
        assert cache.has_entries("apparel")

    def test_read_returns_a_copy(self, cache):
        cache.write("pool", make_sales_state("pool", [("Piscine", 2, 500)]))
        copy = cache.read("pool")
        copy.items[0].quantity = 99
        assert cache.read("pool").items[0].quantity == 2

    def test_write_stores_a_copy(self, cache):
        state = make_sales_state("pool", [("Piscine", 2, 500)])
        cache.write("pool", state)
        state.items[0].quantity = 50
        assert cache.read("pool").items[0].quantity == 2

    def test_write_rejects_mismatched_kind(self, cache):
        with pytest.raises(ValueError):
            cache.write("snackbar", make_sales_state("pool"))
        with pytest.raises(ValueError):
            cache.write("pool", WristbandState())


class TestResetAll:
    def test_wristband_reset_keeps_configured_stock_in(self, cache):
        cache.write(
            "wristbands",
            WristbandState(
                rows=[
                    WristbandRow(
                        color="Bleu",
                        stock_in=100,
                        stock_out=37,
                        tracking_in="A001",
                        tracking_out="A037",
                        tracking_remaining="A038-A100",
                    )
                ]
            ),
        )
        cache.reset_all()
        row = cache.read("wristbands").rows[0]
        assert (row.color, row.stock_in, row.stock_out) == ("Bleu", 100, 0)
        assert row.tracking_in == "A001"
        assert row.tracking_out == ""
        assert row.tracking_remaining == ""

    def test_sales_reset_keeps_price_list(self, cache):
        cache.write(
            "pool",
            make_sales_state("pool", [("Piscine", 12, 600), ("Visite", 4, 200)], orange=2000, wave=500, misc=1500, note="glace"),
        )
        cache.reset_all()
        state = cache.read("pool")
        assert [(item.label, item.quantity, item.unit_price) for item in state.items] == [
            ("Piscine", 0, 600),
            ("Visite", 0, 200),
        ]
        assert state.mobile_money == {"orange": 0, "wave": 0}
        assert state.misc_deductions == 0
        assert state.misc_note == ""

    def test_reset_keeps_added_rows(self, cache):
        state = cache.read("wristbands")
        state.rows.append(WristbandRow(color="Vert", stock_in=30, stock_out=12))
        cache.write("wristbands", state)
        cache.reset_all()
        assert [row.color for row in cache.read("wristbands").rows] == ["Bleu", "Rouge", "Vert"]

    def test_untouched_modules_stay_on_template(self, cache):
        cache.write("apparel", make_sales_state("apparel", [("Homme", 1, 1000)]))
        cache.reset_all()
        assert not cache.has_entries("pool")
        assert cache.has_entries("apparel")
        assert cache.read("pool") == default_state("pool")

    def test_zeroed_state_does_not_mutate_input(self):
        state = make_sales_state("snackbar", [("Lotus", 3, 500)])
        zeroed_state(state)
        assert state.items[0].quantity == 3
