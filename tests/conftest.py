"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest

from charsheet_terminal.config import AppConfig, LoggingConfig, OutputConfig, SessionConfig, StorageConfig
from charsheet_terminal.services.character import CharacterRecord
from charsheet_terminal.session.blocks import BlockStack
from charsheet_terminal.session.context import SessionContext
from charsheet_terminal.session.output import OutputScheduler

CHARACTER_DATA = {
    "name": "Vex",
    "class": "netrunner",
    "level": 5,
    "alignment": "true neutral",
    "gold": 50,
    "current_hp": 20,
    "max_hp": 30,
    "temporary_hp": 0,
    "inspiration": False,
    "notes": "",
    "background": None,
    "strength": 10,
    "dexterity": 16,
    "constitution": 12,
    "intelligence": 18,
    "wisdom": 13,
    "charisma": 8,
    "proficiencies": ["Computers", "Stealth", "Perception"],
    "features": ["Overclock", "Ghost Protocol"],
    "languages": [],
    "implants": [{"name": "Optic Zoom", "charges": 2}, {"name": "Reflex Wire", "charges": 0}],
    "contacts": {"fixer": "Nines"},
}


class FixedRandom:
    """Stand-in for random.Random that always rolls the same number."""

    def __init__(self, value: int) -> None:
        self.value = value

    def randint(self, a: int, b: int) -> int:
        return self.value


class ScriptedLineSource:
    """Feed prepared lines to the controller and remember the prompts shown."""

    def __init__(self, lines: list[str]) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []

    async def readline(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def app_config(tmp_path):
    """Create a test configuration with no animation delay."""
    return AppConfig(
        output=OutputConfig(char_delay_ms=0, fast_delay_ms=0, slow_delay_ms=0, table_delay_ms=0, color=False),
        session=SessionConfig(character_file=str(tmp_path / "character.json"), fast_boot=True),
        storage=StorageConfig(db_path=str(tmp_path / "history.db"), history_enabled=False),
        logging=LoggingConfig(level="DEBUG", file=str(tmp_path / "session.log")),
    )


@pytest.fixture
def character(tmp_path):
    return CharacterRecord(dict(CHARACTER_DATA), path=tmp_path / "character.json")


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def output(app_config, stream):
    return OutputScheduler(app_config.output, stream=stream, width=80)


@pytest.fixture
def ctx(app_config, output, character):
    return SessionContext(config=app_config, output=output, blocks=BlockStack(), character=character)
