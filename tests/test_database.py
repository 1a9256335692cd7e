"""Tests for database module."""

from __future__ import annotations

import sqlite3

import pytest

from charsheet_terminal.storage import database
from charsheet_terminal.storage.database import close_db, get_recent_commands, init_db, save_command


class TestDatabase:
    @pytest.mark.asyncio
    async def test_init_and_save(self, tmp_path):
        await init_db(str(tmp_path / "test.db"))
        assert database.is_open()

        await save_command(line="gold +5", command="gold", outcome="named")

        entries = await get_recent_commands(limit=5)
        assert len(entries) == 1
        assert entries[0].line == "gold +5"
        assert entries[0].command == "gold"
        assert entries[0].outcome == "named"
        assert entries[0].created_at

        await close_db()
        assert not database.is_open()

    @pytest.mark.asyncio
    async def test_multiple_commands_ordering(self, tmp_path):
        await init_db(str(tmp_path / "test2.db"))

        for i in range(5):
            await save_command(line=f"cmd_{i}", command=f"cmd_{i}", outcome="unknown")

        entries = await get_recent_commands(limit=3)
        assert len(entries) == 3
        # Most recent first
        assert entries[0].line == "cmd_4"
        assert entries[2].line == "cmd_2"

        await close_db()

    @pytest.mark.asyncio
    async def test_outcome_check_constraint(self, tmp_path):
        await init_db(str(tmp_path / "test3.db"))

        db = await database.get_db()
        with pytest.raises(sqlite3.IntegrityError):
            await db.execute("INSERT INTO history (line, outcome) VALUES ('x', 'bogus')")

        # save_command logs instead of raising
        await save_command(line="x", command="x", outcome="bogus")
        assert await get_recent_commands() == []

        await close_db()

    @pytest.mark.asyncio
    async def test_not_initialized(self):
        with pytest.raises(RuntimeError):
            await database.get_db()

    @pytest.mark.asyncio
    async def test_close_twice(self, tmp_path):
        await init_db(str(tmp_path / "test4.db"))
        await close_db()
        await close_db()
