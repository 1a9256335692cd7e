"""Session read loop.

The controller reads one line at a time, routes it either to the active block
or through the parser and resolver, and waits for any output the command
produced to finish animating before it prompts again.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from charsheet_terminal.session.blocks import BlockStack
from charsheet_terminal.session.context import SessionContext
from charsheet_terminal.session.output import OutputScheduler
from charsheet_terminal.session.parser import parse_command
from charsheet_terminal.session.resolver import CommandResolver, FieldAccess, NamedCommand, Unknown
from charsheet_terminal.storage.database import save_command

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    AWAITING_OUTPUT = "awaiting_output"


class LineSource(Protocol):
    async def readline(self, prompt: str) -> str:
        """Return the next line; raise EOFError at end of input."""
        ...


@dataclass(frozen=True)
class BootStep:
    title: str
    dots: int
    delay_ms: int


BOOT_STEPS = (
    BootStep("Initializing OS", 11, 200),
    BootStep("Activating daemon", 9, 100),
    BootStep("Connecting to network", 5, 300),
    BootStep("Launching terminal", 8, 200),
)
WELCOME_DELAY_MS = 75

_OUTCOMES = {NamedCommand: "named", FieldAccess: "field", Unknown: "unknown"}


class SessionController:
    """Own the read loop for one interactive session."""

    def __init__(
        self,
        ctx: SessionContext,
        resolver: CommandResolver,
        source: LineSource,
        record_history: bool = False,
        boot_steps: tuple[BootStep, ...] = BOOT_STEPS,
    ) -> None:
        self.ctx = ctx
        self.resolver = resolver
        self.source = source
        self.record_history = record_history
        self.boot_steps = boot_steps
        self.state = SessionState.IDLE

    @property
    def output(self) -> OutputScheduler:
        return self.ctx.output

    @property
    def blocks(self) -> BlockStack:
        return self.ctx.blocks

    async def boot(self) -> None:
        """Play the startup sequence and wait until it has fully displayed."""
        for step in self.boot_steps:
            await self.output.write(step.title, newline=False, delay=0)
            await self.output.write("." * step.dots + " ", newline=False, delay=step.delay_ms / 1000)
            await self.output.success("OK")
        await self.output.write(f"Welcome back, {self.ctx.character.name}", delay=WELCOME_DELAY_MS / 1000)

    async def run(self, fast_boot: bool = False) -> None:
        if not fast_boot:
            await self.boot()

        while not self.ctx.exit_requested:
            try:
                line = await self.source.readline(self.blocks.prompt)
            except (EOFError, KeyboardInterrupt):
                logger.info("End of input")
                break
            await self.handle_line(line)

        await self.output.drain()
        logger.info("Session finished")

    async def handle_line(self, line: str) -> bool:
        """Process one raw line. Returns False when the line was dropped."""
        if self.output.pending:
            logger.debug("Output in flight, dropped line %r", line)
            return False

        self.state = SessionState.DISPATCHING
        outcome, command = await self._route(line)
        if outcome and self.record_history:
            await save_command(line=line, command=command, outcome=outcome)

        if self.output.pending:
            self.state = SessionState.AWAITING_OUTPUT
            await self.output.drain()
        self.state = SessionState.IDLE
        return True

    async def _route(self, line: str) -> tuple[str | None, str]:
        command = ""
        try:
            block = self.blocks.current
            if block is not None:
                command = block.prompt.strip()
                result = block.handler(line)
                outcome = "block"
            else:
                parsed = parse_command(line)
                if not parsed.name:
                    return None, ""
                command = parsed.name
                resolution, result = self.resolver.dispatch(self.ctx, parsed)
                outcome = _OUTCOMES[type(resolution)]

            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.exception("Command failed: %r", line)
            self.output.error(f"Command failed: {e}")
            return "error", command
        return outcome, command
