"""Data models for charsheet-terminal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HistoryEntry:
    """A stored line from the session history."""

    id: int = 0
    line: str = ""
    command: str = ""
    outcome: str = "named"
    created_at: str = ""
