"""End-of-day rollover: clear working figures once per local day after the cutoff."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Callable, Literal

from caisse.config import RESET_CUTOFF_HOUR
from caisse.persistence import load_reset_marker, save_reset_marker
from caisse.working_state import WorkingStateCache

logger = logging.getLogger(__name__)

RolloverState = Literal["ARMED", "FIRED"]


class RolloverScheduler:
    """
    Level-triggered reset check, meant to be polled on a fixed interval.

    The marker holds the ISO date of the last reset. Once it equals today the
    check is a no-op; when the date changes the old marker no longer matches
    and the check is armed again. A check after the cutoff fires even if the
    process was not running at the cutoff itself.
    """

    def __init__(
        self,
        cache: WorkingStateCache,
        db_path: str | Path | None = None,
        cutoff_hour: int = RESET_CUTOFF_HOUR,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if not (0 <= cutoff_hour <= 23):
            raise ValueError("cutoff_hour must be between 0 and 23")
        self.cache = cache
        self.db_path = db_path
        self.cutoff_hour = cutoff_hour
        self.clock = clock
        self.marker: str | None = None

    def load(self) -> None:
        """Read the persisted marker. A missing or unreadable marker means no reset yet."""
        self.marker = None
        if self.db_path is None:
            return
        try:
            self.marker = load_reset_marker(self.db_path)
        except sqlite3.Error as exc:
            logger.warning("reset_marker_load_failed db=%s error=%r", self.db_path, exc)

    def state(self, now: datetime | None = None) -> RolloverState:
        today = (now or self.clock()).date().isoformat()
        return "FIRED" if self.marker == today else "ARMED"

    def check(self, now: datetime | None = None) -> bool:
        """Run the reset if it is due. Returns True when the reset fired."""
        now = now or self.clock()
        today = now.date().isoformat()
        if now.hour < self.cutoff_hour or self.marker == today:
            return False

        self.cache.reset_all()
        self.marker = today
        logger.info("rollover_fired date=%s hour=%d", today, now.hour)
        self._save_marker(today)
        return True

    def _save_marker(self, today: str) -> None:
        if self.db_path is None:
            return
        try:
            save_reset_marker(today, self.db_path)
        except (sqlite3.Error, OSError) as exc:
            # The in-memory marker still guards this session.
            logger.error("reset_marker_write_failed db=%s error=%r", self.db_path, exc)
