"""SQLite persistence for the daily ledger snapshot and the reset marker."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable

from caisse.config import DB_PATH

RESET_MARKER_KEY = "last_reset_date"


def _connect(db_path: str | Path = DB_PATH) -> sqlite3.Connection:
    db_file = Path(db_path)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_file)


def bootstrap_schema(db_path: str | Path = DB_PATH) -> None:
    """Create persistence schema if it does not already exist."""
    conn = _connect(db_path)
    try:
        with conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS daily_records (
                    date_key TEXT PRIMARY KEY,
                    display_date TEXT NOT NULL,
                    payload TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS app_state (
                    key TEXT PRIMARY KEY,
                    value TEXT
                );
                """
            )
    finally:
        conn.close()


def save_daily_records(rows: Iterable[tuple[str, str, str]], db_path: str | Path = DB_PATH) -> None:
    """Replace every stored day with the given (date_key, display_date, payload) rows."""
    conn = _connect(db_path)
    try:
        with conn:
            conn.execute("DELETE FROM daily_records")
            conn.executemany(
                "INSERT INTO daily_records (date_key, display_date, payload) VALUES (?, ?, ?)",
                list(rows),
            )
    finally:
        conn.close()


def load_daily_records(db_path: str | Path = DB_PATH) -> list[tuple[str, str, str]]:
    """Return stored (date_key, display_date, payload) rows, or nothing if no database exists yet."""
    if not Path(db_path).is_file():
        return []
    conn = _connect(db_path)
    try:
        cur = conn.execute("SELECT date_key, display_date, payload FROM daily_records")
        return [(str(date_key), str(display_date), str(payload)) for date_key, display_date, payload in cur]
    finally:
        conn.close()


def load_reset_marker(db_path: str | Path = DB_PATH) -> str | None:
    if not Path(db_path).is_file():
        return None
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT value FROM app_state WHERE key = ?", (RESET_MARKER_KEY,)).fetchone()
    finally:
        conn.close()
    if row is None or row[0] is None:
        return None
    return str(row[0])


def save_reset_marker(date_string: str, db_path: str | Path = DB_PATH) -> None:
    conn = _connect(db_path)
    try:
        with conn:
            conn.execute(
                "INSERT OR REPLACE INTO app_state (key, value) VALUES (?, ?)",
                (RESET_MARKER_KEY, date_string),
            )
    finally:
        conn.close()
