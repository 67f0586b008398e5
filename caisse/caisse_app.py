"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.widgets import Header, Static

from caisse.config import RESET_CHECK_INTERVAL_SECONDS, SUCCESS_BANNER_SECONDS
from caisse.constant import MODULE_LABELS
from caisse.context import CoreContext
from caisse.deposit import aggregate_cache
from caisse.deposit_screen import DepositScreen, format_deposit_figures
from caisse.history_screen import HistoryScreen
from caisse.models import REVENUE_KINDS, WRISTBANDS, ModuleReport
from caisse.rendering import format_amount, format_module_badge
from caisse.sales_screen import SalesScreen
from caisse.working_state import WorkingStateCache
from caisse.wristband_screen import WristbandScreen

logger = logging.getLogger(__name__)

_MENU: tuple[tuple[str, str, str], ...] = (
    ("1", "pool", "Accès & rapports"),
    ("2", "snackbar", "Vente & stock"),
    ("3", "apparel", "Vente & location"),
    ("4", WRISTBANDS, "Stock bracelets"),
    ("5", "deposit", "Caisse & banque"),
    ("6", "history", "Archives"),
)


def format_menu(cache: WorkingStateCache) -> Text:
    """Dashboard menu. Modules that already hold entries get a marker."""
    lines = Text()
    for idx, (key, target, description) in enumerate(_MENU):
        if idx > 0:
            lines.append("\n")
        lines.append(f" {key} ", style="bold reverse")
        lines.append(" ")
        if target in MODULE_LABELS:
            lines.append_text(format_module_badge(target))
        else:
            lines.append("Versement" if target == "deposit" else "Historique", style="bold")
        lines.append(f"  {description}", style="dim")
        if target in MODULE_LABELS and cache.has_entries(target):
            lines.append("  ● saisie", style="bold #fbbf24")
    return lines


class CaisseApp(App):
    """Cash desk of the park: module entry, daily ledger and deposit summary."""

    TITLE = "Hélène Park"
    SUB_TITLE = "Caisse du jour"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #deposit-summary-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 3;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, context: CoreContext) -> None:
        super().__init__()
        self.context = context
        self.system_status = ""
        context.coordinator.on_finalized = self._on_finalized
        context.ledger.on_write_error = self._on_write_error

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static("Bienvenue", classes="pane-title")
                yield Static(id="menu")
            with Vertical(id="deposit-summary-pane"):
                yield Static("Versement en cours", classes="pane-title")
                yield Static(id="deposit-summary")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        # First check runs immediately so a restart after the cutoff still resets.
        self._check_rollover()
        self.set_interval(RESET_CHECK_INTERVAL_SECONDS, self._check_rollover)
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        # Pushed screens own their keys; only the dashboard handles the menu.
        if len(self.screen_stack) > 1:
            return

        logger.debug("dashboard_key key=%r", event.key)
        for key, target, _ in _MENU:
            if event.key == key:
                self._open(target)
                event.stop()
                return

    def _open(self, target: str) -> None:
        if target in REVENUE_KINDS:
            screen = SalesScreen(self.context, target)
        elif target == WRISTBANDS:
            screen = WristbandScreen(self.context)
        elif target == "deposit":
            screen = DepositScreen(self.context)
        else:
            screen = HistoryScreen(self.context)
        self.push_screen(screen, callback=lambda _: self._refresh_all())

    def _check_rollover(self) -> None:
        if not self.context.scheduler.check():
            return
        self.system_status = "Remise à zéro de fin de journée effectuée"
        self.notify(self.system_status, timeout=SUCCESS_BANNER_SECONDS)
        refresh = getattr(self.screen, "refresh_view", None)
        if callable(refresh):
            refresh()
        self._refresh_all()

    def _on_finalized(self, report: ModuleReport) -> None:
        self.system_status = f"{MODULE_LABELS[report.kind]} validé ({format_amount(report.gross_total)})"
        self.notify("Validé", title=MODULE_LABELS[report.kind], timeout=SUCCESS_BANNER_SECONDS)
        self._refresh_all()

    def _on_write_error(self, exc: Exception) -> None:
        self.system_status = f"Enregistrement échoué: {exc}"
        self.notify(self.system_status, severity="error")
        self._refresh_all()

    def _refresh_all(self) -> None:
        try:
            menu = self.query_one("#menu", Static)
            summary = self.query_one("#deposit-summary", Static)
            status_bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return

        menu.update(format_menu(self.context.cache))
        summary.update(format_deposit_figures(aggregate_cache(self.context.cache)))

        today = self.context.ledger.get(self.context.clock().date().isoformat())
        day_total = today.day_total if today is not None else 0
        status = self.system_status or "Prêt"
        status_bar.update(Text(f"Chiffre d'affaires validé aujourd'hui: {format_amount(day_total)}   |   {status}"))
