"""Session setup and lifecycle."""

from __future__ import annotations

import logging
from typing import TextIO

from charsheet_terminal.commands import discover_commands
from charsheet_terminal.config import AppConfig
from charsheet_terminal.services.character import CharacterRecord
from charsheet_terminal.session.blocks import BlockStack
from charsheet_terminal.session.context import SessionContext
from charsheet_terminal.session.controller import LineSource, SessionController
from charsheet_terminal.session.input import CommandCompleter, PromptLineSource
from charsheet_terminal.session.output import OutputScheduler
from charsheet_terminal.session.resolver import CommandResolver
from charsheet_terminal.storage.database import close_db, init_db

logger = logging.getLogger(__name__)


def build_session(
    config: AppConfig,
    character: CharacterRecord,
    source: LineSource | None = None,
    stream: TextIO | None = None,
    record_history: bool = False,
) -> SessionController:
    """Wire the scheduler, block stack, resolver and controller together."""
    output = OutputScheduler(config.output, stream=stream)
    blocks = BlockStack(default_prompt=config.session.prompt)
    ctx = SessionContext(config=config, output=output, blocks=blocks, character=character)

    resolver = CommandResolver(discover_commands(), character)
    ctx.resolver = resolver

    if source is None:
        source = PromptLineSource(CommandCompleter(resolver.complete))
    return SessionController(ctx, resolver, source, record_history=record_history)


async def run_session(config: AppConfig, character: CharacterRecord, fast_boot: bool = False) -> None:
    """Run an interactive session until exit or end of input."""
    record_history = False
    if config.storage.history_enabled:
        try:
            await init_db(config.storage.db_path)
            record_history = True
        except Exception:
            logger.exception("History database unavailable, continuing without history")

    controller = build_session(config, character, record_history=record_history)
    logger.info("Session started for %r", character.name)
    try:
        await controller.run(fast_boot=fast_boot or config.session.fast_boot)
    finally:
        await close_db()
