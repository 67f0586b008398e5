"""Ledger history list and per-day detail modal."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.events import Key
from textual.screen import ModalScreen, Screen
from textual.widgets import Header, Static

from caisse.context import CoreContext
from caisse.models import DailyRecord
from caisse.rendering import format_record_detail, format_record_summary


class RecordDetailModal(ModalScreen[None]):
    """Centered modal with the archived reports of one day."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
    ]

    CSS = """
    RecordDetailModal {
        align: center middle;
        background: $background 60%;
    }

    #detail-dialog {
        width: 80;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #detail-body {
        color: white;
    }

    #detail-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, record: DailyRecord) -> None:
        super().__init__()
        self.record = record

    def compose(self) -> ComposeResult:
        with Container(id="detail-dialog"):
            yield Static(id="detail-body")
            yield Static("Esc / q fermer", id="detail-help")

    def on_mount(self) -> None:
        self.query_one("#detail-body", Static).update(format_record_detail(self.record))

    def action_close(self) -> None:
        self.dismiss()


class HistoryScreen(Screen[None]):
    """Finalized days, most recent first."""

    CSS = """
    #history-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #history-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #history-list {
        height: 1fr;
    }

    #history-help {
        color: $text-muted;
    }
    """

    def __init__(self, context: CoreContext) -> None:
        super().__init__()
        self.context = context
        self.selected_index = 0

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="history-pane"):
            yield Static("Historique", id="history-title")
            yield Static(id="history-list")
            yield Static("↑/↓ choisir, Entrée détail, Échap retour.", id="history-help")

    def on_mount(self) -> None:
        self.refresh_view()

    def on_key(self, event: Key) -> None:
        records = self.context.ledger.list_all()
        if event.key == "escape":
            self.dismiss()
        elif event.key in {"up", "down"} and records:
            delta = -1 if event.key == "up" else 1
            self.selected_index = (self.selected_index + delta) % len(records)
            self.refresh_view()
        elif event.key == "enter" and records:
            self.app.push_screen(RecordDetailModal(records[self.selected_index]))
        else:
            return
        event.stop()

    def refresh_view(self) -> None:
        records = self.context.ledger.list_all()
        widget = self.query_one("#history-list", Static)
        if not records:
            widget.update("(aucune journée archivée)")
            return
        if self.selected_index >= len(records):
            self.selected_index = len(records) - 1

        lines = Text()
        for idx, record in enumerate(records):
            if idx > 0:
                lines.append("\n")
            lines.append("➤ " if idx == self.selected_index else "  ")
            lines.append_text(format_record_summary(record))
        widget.update(lines)
