"""Wristband stock screen: colors, stock in / out and numbering ranges."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Header, Static

from caisse.constant import NEW_WRISTBAND_COLOR, WRISTBAND_COLORS
from caisse.context import CoreContext
from caisse.finalize import FinalizeError
from caisse.models import WRISTBANDS, WristbandRow, WristbandState, number_or_zero
from caisse.rendering import format_color_badge, format_module_badge

logger = logging.getLogger(__name__)

_MAX_DIGITS = 6

# (attribute, header, width, numeric)
_COLUMNS: tuple[tuple[str, str, int, bool], ...] = (
    ("color", "Couleur", 10, False),
    ("stock_in", "Entrée", 7, True),
    ("stock_out", "Sortie", 7, True),
    ("tracking_in", "Nº E", 10, False),
    ("tracking_out", "Nº S", 10, False),
    ("tracking_remaining", "Nº R", 12, False),
)


class WristbandScreen(Screen[None]):
    """Inventory grid for wristband colors. Remaining stock is derived, never typed."""

    CSS = """
    #wristband-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #wristband-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #wristband-table {
        height: 1fr;
    }

    #wristband-status {
        color: #ffb3b3;
    }

    #wristband-help {
        color: $text-muted;
    }
    """

    def __init__(self, context: CoreContext) -> None:
        super().__init__()
        self.context = context
        self.row_index = 0
        self.column = 0
        self.error = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="wristband-pane"):
            yield Static(id="wristband-title")
            yield Static(id="wristband-table")
            yield Static(id="wristband-status")
            yield Static(
                "↑/↓/←/→ naviguer, Espace couleur suivante, Ctrl+N ajouter, Ctrl+D supprimer. "
                "Ctrl+S finaliser l'inventaire, Échap retour.",
                id="wristband-help",
            )

    def on_mount(self) -> None:
        title = Text()
        title.append_text(format_module_badge(WRISTBANDS))
        title.append("  Gestion des bracelets")
        self.query_one("#wristband-title", Static).update(title)
        self.refresh_view()

    def _state(self) -> WristbandState:
        state = self.context.cache.read(WRISTBANDS)
        if not isinstance(state, WristbandState):
            raise TypeError(f"Expected wristband rows, got {type(state).__name__}")
        return state

    def _save(self, state: WristbandState) -> None:
        self.context.cache.write(WRISTBANDS, state)
        self.error = ""
        self.refresh_view()

    def on_key(self, event: Key) -> None:
        logger.debug("wristband_key key=%r char=%r", event.key, event.character)

        if event.key == "escape":
            self.dismiss()
        elif event.key == "ctrl+s":
            self._finalize()
        elif event.key == "ctrl+n":
            self._add_row()
        elif event.key == "ctrl+d":
            self._delete_row()
        elif event.key in {"up", "down"}:
            self._move_row(-1 if event.key == "up" else 1)
        elif event.key in {"left", "right"}:
            self.column = (self.column + (-1 if event.key == "left" else 1)) % len(_COLUMNS)
            self.refresh_view()
        elif event.key == "backspace":
            self._backspace()
        elif event.is_printable and event.character:
            self._type(event.character)
        else:
            return
        event.stop()

    def _current_row(self, state: WristbandState) -> WristbandRow | None:
        if not (0 <= self.row_index < len(state.rows)):
            return None
        return state.rows[self.row_index]

    def _move_row(self, delta: int) -> None:
        state = self._state()
        if not state.rows:
            return
        self.row_index = (self.row_index + delta) % len(state.rows)
        self.refresh_view()

    def _add_row(self) -> None:
        state = self._state()
        state.rows.append(WristbandRow(color=NEW_WRISTBAND_COLOR))
        self.row_index = len(state.rows) - 1
        self._save(state)

    def _delete_row(self) -> None:
        state = self._state()
        if self._current_row(state) is None:
            return
        del state.rows[self.row_index]
        self.row_index = min(self.row_index, max(0, len(state.rows) - 1))
        self._save(state)

    def _cycle_color(self, row: WristbandRow) -> None:
        try:
            idx = WRISTBAND_COLORS.index(row.color)
        except ValueError:
            idx = -1
        row.color = WRISTBAND_COLORS[(idx + 1) % len(WRISTBAND_COLORS)]

    def _type(self, char: str) -> None:
        state = self._state()
        row = self._current_row(state)
        if row is None:
            return
        attr, _, _, numeric = _COLUMNS[self.column]
        if attr == "color":
            if char == " ":
                self._cycle_color(row)
                self._save(state)
            return
        if numeric:
            if not char.isdigit():
                return
            current = number_or_zero(getattr(row, attr))
            if len(str(current)) >= _MAX_DIGITS:
                return
            setattr(row, attr, current * 10 + int(char))
        else:
            setattr(row, attr, getattr(row, attr) + char)
        self._save(state)

    def _backspace(self) -> None:
        state = self._state()
        row = self._current_row(state)
        if row is None:
            return
        attr, _, _, numeric = _COLUMNS[self.column]
        if attr == "color":
            return
        if numeric:
            setattr(row, attr, number_or_zero(getattr(row, attr)) // 10)
        else:
            setattr(row, attr, getattr(row, attr)[:-1])
        self._save(state)

    def _finalize(self) -> None:
        try:
            self.context.coordinator.finalize(WRISTBANDS, self._state())
        except FinalizeError as exc:
            self.error = str(exc)
            logger.info("finalize_rejected kind=wristbands error=%s", exc)
        self.refresh_view()

    def refresh_view(self) -> None:
        state = self._state()
        if self.row_index >= len(state.rows):
            self.row_index = max(0, len(state.rows) - 1)

        lines = Text()
        lines.append("  ")
        for attr, header, width, _ in _COLUMNS:
            lines.append(f"{header:<{width}} ", style="dim")
            if attr == "stock_out":
                lines.append(f"{'Reste':<7} ", style="dim")
        lines.append("\n")

        if not state.rows:
            lines.append("  (aucune couleur, Ctrl+N pour ajouter)", style="dim")

        for idx, row in enumerate(state.rows):
            selected_row = idx == self.row_index
            lines.append("➤ " if selected_row else "  ")
            for col, (attr, _, width, numeric) in enumerate(_COLUMNS):
                selected = selected_row and col == self.column
                value = getattr(row, attr)
                if attr == "color":
                    badge = format_color_badge(value)
                    if selected:
                        badge.stylize("underline")
                    lines.append_text(badge)
                    lines.append(" " * max(1, width - len(value) - 1))
                else:
                    shown = str(number_or_zero(value)) if numeric else value
                    lines.append(f"{shown:<{width}}", style="reverse bold" if selected else "")
                    lines.append(" ")
                if attr == "stock_out":
                    remaining = row.remaining
                    lines.append(f"{remaining:<7} ", style="bold red" if remaining < 0 else "bold")
            lines.append("\n")

        self.query_one("#wristband-table", Static).update(lines)
        self.query_one("#wristband-status", Static).update(Text(self.error))
