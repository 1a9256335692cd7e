"""Generic display/modify access to character fields by name."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, NamedTuple

from charsheet_terminal.utils.formatting import format_delta, format_value

if TYPE_CHECKING:
    from charsheet_terminal.session.context import SessionContext

logger = logging.getLogger(__name__)

BOOLEAN_TOKENS = {"1": True, "true": True, "0": False, "false": False}

MODIFIER_HINT = "Expected similar to: -10 or +23"

NUMBER = re.compile(r"^[+-]?\d+(\.\d+)?$", re.ASCII)


class Modifier(NamedTuple):
    """A parsed numeric argument: a signed delta or an absolute value."""

    relative: bool
    amount: int | float


def parse_modifier(text: str) -> Modifier:
    """``+5`` and ``-5`` are deltas, ``5`` is absolute. Raises ValueError otherwise."""
    text = text.strip()
    if not text:
        raise ValueError("empty modifier")
    if not NUMBER.match(text):
        raise ValueError(f"not a number: {text}")
    relative = text[0] in "+-"
    digits = text[1:] if text[0] == "+" else text
    amount = float(digits) if "." in digits else int(digits)
    return Modifier(relative, amount)


def unescape(text: str) -> str:
    return text.replace("\\r", "\r").replace("\\n", "\n")


def field_usage(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return f"Usage: {name} [true|false|1|0]"
    if isinstance(value, (int, float)):
        return f"Usage: {name} [+N|-N|N]"
    if isinstance(value, str):
        return f"Usage: {name} [+text|text]"
    return f"Usage: {name}"


def display_field(ctx: SessionContext, name: str) -> Any:
    return ctx.output.write(format_value(ctx.character.get(name)))


def modify_field(ctx: SessionContext, name: str, raw: str) -> Any:
    """Change a field according to the type it currently holds."""
    current = ctx.character.get(name)
    out = ctx.output

    if isinstance(current, bool):
        token = raw.strip().lower()
        if token not in BOOLEAN_TOKENS:
            return out.error(field_usage(name, current))
        ctx.character.set(name, BOOLEAN_TOKENS[token])
        return out.write(f"{name}: {format_value(BOOLEAN_TOKENS[token])}")

    if isinstance(current, (int, float)):
        try:
            modifier = parse_modifier(raw)
        except ValueError:
            return out.error(f"Unknown modifier: {raw}. {MODIFIER_HINT}")
        if modifier.relative:
            total = current + modifier.amount
            out.write(format_delta(current, modifier.amount))
        else:
            total = modifier.amount
            out.write(f"Previous {name}: {current}")
        ctx.character.set(name, total)
        return out.write(f"{name}: {total}")

    if isinstance(current, str) or current is None:
        text = unescape(raw)
        if text.startswith("+"):
            text = (current or "") + text[1:]
        ctx.character.set(name, text)
        return out.write(f"{name}: {format_value(text)}")

    return out.error(f"{name} cannot be changed from the prompt")


def field_command(ctx: SessionContext, name: str, flags: dict[str, Any], *args: str) -> Any:
    """Show a field with no arguments, change it with one."""
    if flags.get("h") or flags.get("help"):
        return ctx.output.write(field_usage(name, ctx.character.get(name)))
    if not args:
        return display_field(ctx, name)
    logger.debug("Modifying field %s with %r", name, args)
    return modify_field(ctx, name, " ".join(args))
