"""Shared plumbing for command handlers."""

from __future__ import annotations

import functools
import textwrap
from typing import Any, Callable

from charsheet_terminal.session.context import SessionContext


def wants_help(flags: dict[str, Any]) -> bool:
    return bool(flags.get("h") or flags.get("help"))


def command(name: str | None = None, usage: str = "") -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Register a handler and answer ``-h``/``--help`` with its usage text."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        command_name = name or func.__name__
        usage_text = textwrap.dedent(usage).strip() or f"Usage: {command_name}"

        @functools.wraps(func)
        def wrapper(ctx: SessionContext, flags: dict[str, Any], *args: str) -> Any:
            if wants_help(flags):
                return ctx.output.write(usage_text)
            return func(ctx, flags, *args)

        wrapper.command_name = command_name  # type: ignore[attr-defined]
        wrapper.usage = usage_text  # type: ignore[attr-defined]
        return wrapper

    return decorator
