"""Session-level commands: help, history, save and exit."""

from __future__ import annotations

import logging
from typing import Any

from charsheet_terminal.commands.base import command
from charsheet_terminal.session.context import SessionContext
from charsheet_terminal.storage import database

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


@command("help", usage="help    List every command and character field")
def show_help(ctx: SessionContext, flags: dict[str, Any], *_: str) -> Any:
    names = ctx.resolver.names if ctx.resolver is not None else []
    ctx.output.write("Type a command, or a field name to show it. Add --help to any command for usage.")
    return ctx.output.table(names)


@command("exit", usage="exit    Leave the terminal")
def exit_session(ctx: SessionContext, flags: dict[str, Any], *_: str) -> Any:
    ctx.request_exit()


@command(
    usage="""
    Save the character

    save            Save to the file it was loaded from
    save PATH       Save to PATH; later saves go there too
    """
)
def save(ctx: SessionContext, flags: dict[str, Any], path: str | None = None, *_: str) -> Any:
    try:
        target = ctx.character.save(path)
    except (OSError, ValueError) as e:
        logger.warning("Save failed: %s", e)
        return ctx.output.error(f"Could not save: {e}")
    return ctx.output.ok(f"Saved to {target}")


@command(usage="history [N]    Show the last N lines entered (default 10)")
async def history(ctx: SessionContext, flags: dict[str, Any], limit: str | None = None, *_: str) -> Any:
    if not database.is_open():
        return ctx.output.write("History is disabled.")

    try:
        count = int(limit) if limit is not None else DEFAULT_HISTORY_LIMIT
    except ValueError:
        return ctx.output.error(f"Not a number: {limit}")

    entries = await database.get_recent_commands(limit=max(count, 1))
    if not entries:
        return ctx.output.write("No history yet.")

    lines = [f"{i}. [{entry.outcome}] {entry.line}" for i, entry in enumerate(entries, 1)]
    return ctx.output.write("\n".join(lines))
