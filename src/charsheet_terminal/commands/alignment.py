"""Alignment command with an interactive selector."""

from __future__ import annotations

import re
from typing import Any

from charsheet_terminal.commands.base import command
from charsheet_terminal.session.context import SessionContext
from charsheet_terminal.utils.formatting import format_value

ALIGNMENTS = (
    "lawful good", "neutral good", "chaotic good",
    "lawful neutral", "true neutral", "chaotic neutral",
    "lawful evil", "neutral evil", "chaotic evil",
)
SHORTCUTS = (
    "lg", "ng", "cg",
    "ln", "tr", "cn",
    "le", "ne", "ce",
)
CANCEL_WORDS = ("", "cancel", "q")
SELECTOR_PROMPT = "alignment = "


def lookup_alignment(text: str) -> str | None:
    """Match a full alignment name or its two-letter shortcut."""
    text = re.sub(r"\s+", " ", text.strip().lower())
    if text in ALIGNMENTS:
        return text
    if text in SHORTCUTS:
        return ALIGNMENTS[SHORTCUTS.index(text)]
    return None


def _set_alignment(ctx: SessionContext, value: str) -> Any:
    ctx.character.set("alignment", value)
    return ctx.output.success(f"Changed alignment to {value}")


def open_selector(ctx: SessionContext) -> Any:
    """Show the options and read choices until one is valid."""
    out = ctx.output
    out.write("Choose an alignment (blank to cancel):")
    out.table([f"{name} ({shortcut})" for name, shortcut in zip(ALIGNMENTS, SHORTCUTS)])

    def on_line(line: str) -> Any:
        if line.strip().lower() in CANCEL_WORDS:
            ctx.blocks.exit()
            return out.write("Alignment unchanged")
        choice = lookup_alignment(line)
        if choice is None:
            return out.error("Please enter one of the available alignments")
        ctx.blocks.exit()
        return _set_alignment(ctx, choice)

    ctx.blocks.enter(SELECTOR_PROMPT, on_line)
    return out.write()


@command(
    usage="""
    Display or modify the character's alignment

    alignment                       Display the character's alignment
    alignment --help                Display this information
    alignment [-m|--modify] [VALUE] Set the alignment. No value brings up a selector
    """
)
def alignment(ctx: SessionContext, flags: dict[str, Any], *args: str) -> Any:
    modify = flags.get("modify") or flags.get("m")
    if not modify:
        return ctx.output.write(format_value(ctx.character.get("alignment")))

    value = modify if isinstance(modify, str) else " ".join(args)
    if value:
        choice = lookup_alignment(value)
        if choice is not None:
            return _set_alignment(ctx, choice)
        ctx.output.error("Invalid alignment type")

    return open_selector(ctx)
