"""Consolidated deposit ("versement du jour") screen."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Header, Static

from caisse.constant import MOBILE_MONEY_LABELS
from caisse.context import CoreContext
from caisse.deposit import aggregate_cache
from caisse.ledger import display_date_for
from caisse.models import DepositFigures
from caisse.printer import check_printer_dependencies, print_deposit_slip
from caisse.rendering import format_amount

logger = logging.getLogger(__name__)


def format_deposit_figures(figures: DepositFigures) -> Text:
    text = Text()
    text.append("Total recettes du jour\n", style="dim")
    text.append(f"{format_amount(figures.total)}\n\n", style="bold #34d399")
    text.append(f"{'Espèces':<14}{format_amount(figures.cash):>14}\n", style="bold")
    text.append(f"{MOBILE_MONEY_LABELS['orange']:<14}{format_amount(figures.orange_money):>14}\n", style="#f97316")
    text.append(f"{MOBILE_MONEY_LABELS['wave']:<14}{format_amount(figures.wave_pay):>14}", style="#38bdf8")
    return text


class DepositScreen(Screen[None]):
    """Read-only view of the live cash and mobile-money totals across revenue modules."""

    CSS = """
    #deposit-pane {
        height: 1fr;
        border: round $primary;
        padding: 1 2;
    }

    #deposit-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #deposit-body {
        height: 1fr;
    }

    #deposit-status {
        margin-top: 1;
    }

    #deposit-help {
        color: $text-muted;
    }
    """

    def __init__(self, context: CoreContext) -> None:
        super().__init__()
        self.context = context
        self.status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="deposit-pane"):
            yield Static("Versement du jour", id="deposit-title")
            yield Static(id="deposit-body")
            yield Static(
                "Agrège automatiquement les montants en cours des modules Piscine, Popcorn et Maillot.",
                id="deposit-note",
            )
            yield Static(id="deposit-status")
            yield Static("P clôturer la caisse (imprimer), Échap retour.", id="deposit-help")

    def on_mount(self) -> None:
        ok, message = check_printer_dependencies()
        self.status = message
        if not ok:
            logger.warning("printer_unavailable message=%s", message)
        self.refresh_view()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss()
        elif event.key == "p":
            self._print_slip()
        else:
            return
        event.stop()

    def _print_slip(self) -> None:
        figures = aggregate_cache(self.context.cache)
        display_date = display_date_for(self.context.clock().date().isoformat())
        try:
            print_deposit_slip(figures, display_date)
        except Exception as exc:
            self.status = f"Impression échouée: {exc}"
            logger.warning("deposit_slip_print_failed error=%r", exc)
        else:
            self.status = "Bordereau imprimé"
            logger.info("deposit_slip_printed total=%d", figures.total)
        self.refresh_view()

    def refresh_view(self) -> None:
        self.query_one("#deposit-body", Static).update(format_deposit_figures(aggregate_cache(self.context.cache)))
        self.query_one("#deposit-status", Static).update(Text(self.status))
