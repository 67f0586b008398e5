"""Process-wide core state, created at start-up and handed to the UI explicitly."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from caisse.config import RESET_CUTOFF_HOUR
from caisse.finalize import FinalizeCoordinator
from caisse.ledger import LedgerStore
from caisse.models import ModuleReport
from caisse.persistence import bootstrap_schema
from caisse.rollover import RolloverScheduler
from caisse.working_state import WorkingStateCache

logger = logging.getLogger(__name__)


@dataclass
class CoreContext:
    ledger: LedgerStore
    cache: WorkingStateCache
    scheduler: RolloverScheduler
    coordinator: FinalizeCoordinator
    clock: Callable[[], datetime]


def build_context(
    db_path: str | Path | None,
    clock: Callable[[], datetime] = datetime.now,
    cutoff_hour: int = RESET_CUTOFF_HOUR,
    on_write_error: Callable[[Exception], None] | None = None,
    on_finalized: Callable[[ModuleReport], None] | None = None,
) -> CoreContext:
    """Bootstrap storage, load the ledger and reset marker, and wire the core together."""
    if db_path is not None:
        try:
            bootstrap_schema(db_path)
        except (sqlite3.Error, OSError) as exc:
            logger.error("schema_bootstrap_failed db=%s error=%r", db_path, exc)

    ledger = LedgerStore(db_path, on_write_error=on_write_error)
    ledger.load()
    cache = WorkingStateCache()
    scheduler = RolloverScheduler(cache, db_path=db_path, cutoff_hour=cutoff_hour, clock=clock)
    scheduler.load()
    coordinator = FinalizeCoordinator(ledger, clock=clock, on_finalized=on_finalized)
    return CoreContext(ledger=ledger, cache=cache, scheduler=scheduler, coordinator=coordinator, clock=clock)
