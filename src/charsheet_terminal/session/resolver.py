"""Command resolution: named handlers first, character fields second."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

from charsheet_terminal.services.character import CharacterRecord, is_private
from charsheet_terminal.session.fields import field_command
from charsheet_terminal.session.parser import ParsedCommand

if TYPE_CHECKING:
    from charsheet_terminal.session.context import SessionContext

logger = logging.getLogger(__name__)

CommandHandler = Callable[..., Any]


@dataclass(frozen=True)
class NamedCommand:
    name: str
    handler: CommandHandler


@dataclass(frozen=True)
class FieldAccess:
    name: str


@dataclass(frozen=True)
class Unknown:
    name: str


Resolution = Union[NamedCommand, FieldAccess, Unknown]


class CommandResolver:
    """Map command names to handlers, falling back to character fields."""

    def __init__(self, commands: dict[str, CommandHandler], character: CharacterRecord) -> None:
        self._commands = dict(commands)
        self.character = character
        self.names = self._build_names()

    def _build_names(self) -> list[str]:
        merged = set(self._commands) | set(self.character.fields)
        return sorted(name for name in merged if not is_private(name))

    def resolve(self, name: str) -> Resolution:
        handler = self._commands.get(name)
        if handler is not None:
            return NamedCommand(name, handler)
        if self.character.has(name):
            return FieldAccess(name)
        return Unknown(name)

    def dispatch(self, ctx: SessionContext, parsed: ParsedCommand) -> tuple[Resolution, Any]:
        """Run the resolved command and return what its handler returned."""
        resolution = self.resolve(parsed.name)
        flags = dict(parsed.flags)
        args = parsed.positional_args

        if isinstance(resolution, NamedCommand):
            logger.debug("Running command %s %r %r", resolution.name, flags, args)
            result = resolution.handler(ctx, flags, *args)
        elif isinstance(resolution, FieldAccess):
            result = field_command(ctx, resolution.name, flags, *args)
        else:
            logger.info("Unknown command: %s", resolution.name)
            result = ctx.output.write(f"Unknown command: {resolution.name}")
        return resolution, result

    def complete(self, prefix: str) -> list[str]:
        return [name for name in self.names if name.startswith(prefix)]
