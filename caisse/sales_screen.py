"""Editing screen for a revenue module (pool, snackbar, apparel)."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Header, Static

from caisse.constant import MOBILE_MONEY_LABELS, MOBILE_MONEY_PROVIDERS, MODULE_LABELS
from caisse.context import CoreContext
from caisse.finalize import FinalizeError
from caisse.models import ModuleKind, SalesState, number_or_zero
from caisse.rendering import format_amount, format_module_badge, group_thousands
from caisse.wristband_screen import WristbandScreen

logger = logging.getLogger(__name__)

_MAX_DIGITS = 9
_QUANTITY_COLUMN = 0
_PRICE_COLUMN = 1


class SalesScreen(Screen[None]):
    """Quantity / price grid plus mobile money and expenses for one revenue module."""

    CSS = """
    #sales-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #sales-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #sales-table {
        height: 1fr;
    }

    #sales-totals {
        border: heavy $secondary;
        padding: 0 1;
        height: auto;
    }

    #sales-status {
        color: #ffb3b3;
    }

    #sales-help {
        color: $text-muted;
    }
    """

    def __init__(self, context: CoreContext, kind: ModuleKind) -> None:
        super().__init__()
        self.context = context
        self.kind = kind
        self.row_index = 0
        self.column = _QUANTITY_COLUMN
        self.error = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="sales-pane"):
            yield Static(id="sales-title")
            yield Static(id="sales-table")
            yield Static(id="sales-totals")
            yield Static(id="sales-status")
            help_text = "↑/↓ ligne, ←/→ quantité/prix, chiffres saisir, Retour effacer. Ctrl+S finaliser, Échap retour."
            if self.kind == "pool":
                help_text += " Ctrl+B bracelets."
            yield Static(help_text, id="sales-help")

    def on_mount(self) -> None:
        title = Text()
        title.append_text(format_module_badge(self.kind))
        title.append(f"  Rapport {MODULE_LABELS[self.kind]}")
        self.query_one("#sales-title", Static).update(title)
        self.refresh_view()

    def _state(self) -> SalesState:
        state = self.context.cache.read(self.kind)
        if not isinstance(state, SalesState):
            raise TypeError(f"Expected sales entries for {self.kind!r}, got {type(state).__name__}")
        return state

    def _extra_rows(self) -> list[str]:
        return [*MOBILE_MONEY_PROVIDERS, "misc", "note"]

    def _row_count(self, state: SalesState) -> int:
        return len(state.items) + len(self._extra_rows())

    def _current_extra(self, state: SalesState) -> str | None:
        offset = self.row_index - len(state.items)
        if offset < 0:
            return None
        return self._extra_rows()[offset]

    def on_key(self, event: Key) -> None:
        logger.debug("sales_key kind=%s key=%r char=%r", self.kind, event.key, event.character)

        if event.key == "escape":
            self.dismiss()
        elif event.key == "ctrl+s":
            self._finalize()
        elif event.key == "ctrl+b" and self.kind == "pool":
            # Wristbands are sold at the pool entrance.
            self.app.push_screen(WristbandScreen(self.context), callback=lambda _: self.refresh_view())
        elif event.key in {"up", "down"}:
            self._move_row(-1 if event.key == "up" else 1)
        elif event.key in {"left", "right"}:
            self.column = _QUANTITY_COLUMN if event.key == "left" else _PRICE_COLUMN
            self.refresh_view()
        elif event.key == "backspace":
            self._backspace()
        elif event.is_printable and event.character:
            self._type(event.character)
        else:
            return
        event.stop()

    def _move_row(self, delta: int) -> None:
        self.row_index = (self.row_index + delta) % self._row_count(self._state())
        self.refresh_view()

    def _get_number(self, state: SalesState) -> int:
        extra = self._current_extra(state)
        if extra is None:
            item = state.items[self.row_index]
            value = item.quantity if self.column == _QUANTITY_COLUMN else item.unit_price
        elif extra == "misc":
            value = state.misc_deductions
        else:
            value = state.mobile_money.get(extra, 0)
        return number_or_zero(value)

    def _set_number(self, state: SalesState, value: int) -> None:
        extra = self._current_extra(state)
        if extra is None:
            item = state.items[self.row_index]
            if self.column == _QUANTITY_COLUMN:
                item.quantity = value
            else:
                item.unit_price = value
        elif extra == "misc":
            state.misc_deductions = value
        else:
            state.mobile_money[extra] = value

    def _save(self, state: SalesState) -> None:
        self.context.cache.write(self.kind, state)
        self.error = ""
        self.refresh_view()

    def _type(self, char: str) -> None:
        state = self._state()
        if self._current_extra(state) == "note":
            state.misc_note += char
            self._save(state)
            return
        if not char.isdigit():
            return
        current = self._get_number(state)
        if len(str(current)) >= _MAX_DIGITS:
            return
        self._set_number(state, current * 10 + int(char))
        self._save(state)

    def _backspace(self) -> None:
        state = self._state()
        if self._current_extra(state) == "note":
            state.misc_note = state.misc_note[:-1]
        else:
            self._set_number(state, self._get_number(state) // 10)
        self._save(state)

    def _finalize(self) -> None:
        try:
            report = self.context.coordinator.finalize(self.kind, self._state())
        except FinalizeError as exc:
            self.error = str(exc)
            logger.info("finalize_rejected kind=%s error=%s", self.kind, exc)
            self.refresh_view()
            return
        self.error = ""
        logger.info("finalize_done kind=%s deposit=%d", self.kind, report.deposit_amount)
        self.refresh_view()

    def _cell(self, text: str, width: int, selected: bool) -> Text:
        return Text(f"{text:>{width}}", style="reverse bold" if selected else "")

    def refresh_view(self) -> None:
        state = self._state()
        if self.row_index >= self._row_count(state):
            self.row_index = 0

        lines = Text()
        lines.append(f"  {'Service':<22}{'Qté':>6}  {'Prix':>9}  {'Total':>12}\n", style="dim")
        for idx, item in enumerate(state.items):
            selected = idx == self.row_index
            lines.append("➤ " if selected else "  ")
            lines.append(f"{item.label:<22}")
            lines.append_text(self._cell(str(number_or_zero(item.quantity)), 6, selected and self.column == _QUANTITY_COLUMN))
            lines.append("  ")
            lines.append_text(self._cell(group_thousands(number_or_zero(item.unit_price)), 9, selected and self.column == _PRICE_COLUMN))
            lines.append(f"  {format_amount(item.subtotal):>12}\n")

        lines.append("\n")
        for offset, extra in enumerate(self._extra_rows()):
            selected = len(state.items) + offset == self.row_index
            lines.append("➤ " if selected else "  ")
            if extra == "note":
                lines.append(f"{'Motif dépenses':<22}")
                lines.append(state.misc_note + ("|" if selected else ""), style="reverse" if selected else "")
            elif extra == "misc":
                lines.append(f"{'Dépenses':<22}")
                lines.append_text(self._cell(group_thousands(number_or_zero(state.misc_deductions)), 12, selected))
            else:
                lines.append(f"{MOBILE_MONEY_LABELS[extra]:<22}")
                lines.append_text(self._cell(group_thousands(number_or_zero(state.mobile_money.get(extra))), 12, selected))
            lines.append("\n")
        self.query_one("#sales-table", Static).update(lines)

        totals = Text()
        totals.append(f"CA Total   {format_amount(state.gross_total)}\n", style="bold")
        deposit_style = "bold red" if state.deposit_amount < 0 else "bold #34d399"
        totals.append(f"Versement  {format_amount(state.deposit_amount)}", style=deposit_style)
        self.query_one("#sales-totals", Static).update(totals)
        self.query_one("#sales-status", Static).update(Text(self.error))
