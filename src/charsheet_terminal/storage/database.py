"""SQLite database management for session history."""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

from charsheet_terminal.storage.models import HistoryEntry

logger = logging.getLogger(__name__)

_db: aiosqlite.Connection | None = None


async def init_db(db_path: str) -> None:
    """Initialize database and create tables."""
    global _db
    resolved = Path(db_path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)

    _db = await aiosqlite.connect(str(resolved))
    _db.row_factory = aiosqlite.Row
    await _db.execute("PRAGMA journal_mode = WAL")

    await _db.execute("""
        CREATE TABLE IF NOT EXISTS history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            line TEXT NOT NULL,
            command TEXT DEFAULT '',
            outcome TEXT DEFAULT 'named'
                CHECK(outcome IN ('named', 'field', 'unknown', 'block', 'error')),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    await _db.execute("CREATE INDEX IF NOT EXISTS idx_history_created_at ON history(created_at)")
    await _db.commit()
    logger.info("Database initialized: %s", resolved)


async def get_db() -> aiosqlite.Connection:
    """Get the database connection."""
    if _db is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _db


def is_open() -> bool:
    return _db is not None


async def close_db() -> None:
    """Close the database connection."""
    global _db
    if _db is not None:
        await _db.close()
        _db = None
        logger.info("Database closed")


async def save_command(line: str, command: str, outcome: str = "named") -> None:
    """Save a dispatched line to history."""
    try:
        db = await get_db()
        await db.execute(
            "INSERT INTO history (line, command, outcome) VALUES (?, ?, ?)",
            (line, command, outcome),
        )
        await db.commit()
    except Exception:
        logger.exception("Failed to save command history")


async def get_recent_commands(limit: int = 10) -> list[HistoryEntry]:
    """Get recent history, newest first."""
    db = await get_db()
    cursor = await db.execute(
        "SELECT id, line, command, outcome, created_at FROM history ORDER BY id DESC LIMIT ?",
        (limit,),
    )
    rows = await cursor.fetchall()
    return [HistoryEntry(**dict(row)) for row in rows]
