"""Entry point for the cash desk Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from caisse.caisse_app import CaisseApp
from caisse.config import DB_PATH, DEBUG_LOG_PATH
from caisse.context import build_context


def configure_logging(log_path: str | Path = DEBUG_LOG_PATH, level: int = logging.INFO) -> None:
    """Send log records to a file; the terminal belongs to the TUI."""
    root = logging.getLogger()
    root.setLevel(level)
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        # Logging must never keep the app from starting.
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    CaisseApp(build_context(DB_PATH)).run()


if __name__ == "__main__":
    main()
