"""Animated output scheduler.

All text leaving the session goes through one ``OutputScheduler``. It keeps a
single pending buffer and emits it one character at a time from an asyncio
task, so the terminal shows a typewriter effect. Writes made while a drain is
running extend the same buffer and share the same completion handle.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TextIO

from rich.console import Console

from charsheet_terminal.config import OutputConfig
from charsheet_terminal.utils.formatting import FAIL_STYLE, SUCCESS_STYLE, layout_table, paint

logger = logging.getLogger(__name__)


class OutputScheduler:
    """Serialize and animate everything written to the terminal."""

    def __init__(
        self,
        config: OutputConfig | None = None,
        stream: TextIO | None = None,
        width: int | None = None,
    ) -> None:
        self.config = config or OutputConfig()
        self._stream = stream if stream is not None else sys.stdout
        self._width = width
        self._buffer = ""
        self._cursor = 0
        self._handle: asyncio.Future[None] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def delay(self) -> float:
        return self.config.char_delay_ms / 1000

    @property
    def color(self) -> bool:
        return self.config.color

    @property
    def pending(self) -> bool:
        """True while some written text has not appeared yet."""
        return self._handle is not None

    @property
    def columns(self) -> int:
        if self._width is not None:
            return self._width
        return Console(file=self._stream).width

    def write(
        self,
        text: object = None,
        newline: bool = True,
        delay: float | None = None,
    ) -> asyncio.Future[None] | None:
        """Queue text for display and return the shared completion handle.

        Called without text, returns the outstanding handle, or ``None`` when
        nothing is being displayed.
        """
        if text is None:
            return self._handle

        self._buffer += str(text) + ("\n" if newline else "")

        if self._handle is None:
            loop = asyncio.get_running_loop()
            self._handle = loop.create_future()
            step = self.delay if delay is None else delay
            self._task = loop.create_task(self._drain_loop(self._handle, step))
        return self._handle

    async def drain(self) -> None:
        """Wait until everything written so far has been displayed."""
        handle = self._handle
        if handle is not None:
            await asyncio.shield(handle)

    async def _drain_loop(self, handle: asyncio.Future[None], delay: float) -> None:
        await asyncio.sleep(0)
        try:
            while self._cursor < len(self._buffer):
                self._stream.write(self._buffer[self._cursor])
                self._stream.flush()
                self._cursor += 1
                await asyncio.sleep(delay)
        except Exception:
            logger.exception("Output stream failed, dropping %d buffered chars", len(self._buffer) - self._cursor)
        self._reset()
        if not handle.done():
            handle.set_result(None)

    def _reset(self) -> None:
        self._buffer = ""
        self._cursor = 0
        self._handle = None
        self._task = None

    # --- Variants ---

    def fast(self, text: object, newline: bool = True) -> asyncio.Future[None] | None:
        return self.write(text, newline, self.config.fast_delay_ms / 1000)

    def slow(self, text: object, newline: bool = True) -> asyncio.Future[None] | None:
        return self.write(text, newline, self.config.slow_delay_ms / 1000)

    def success(self, text: str = "SUCCESS", newline: bool = True) -> asyncio.Future[None] | None:
        return self.fast(paint(text, SUCCESS_STYLE, self.color), newline)

    def critical_success(self) -> asyncio.Future[None] | None:
        return self.success("CRITICAL SUCCESS")

    def fail(self, text: str = "FAIL", newline: bool = True) -> asyncio.Future[None] | None:
        return self.fast(paint(text, FAIL_STYLE, self.color), newline)

    def critical_fail(self) -> asyncio.Future[None] | None:
        return self.fail("CRITICAL FAIL")

    def ok(self, text: object, newline: bool = True, delay: float | None = None) -> asyncio.Future[None] | None:
        return self.write(f"{paint('OK', SUCCESS_STYLE, self.color)} {text}", newline, delay)

    def error(self, text: object, newline: bool = True, delay: float | None = None) -> asyncio.Future[None] | None:
        return self.write(f"{paint('ERR', FAIL_STYLE, self.color)} {text}", newline, delay)

    def table(
        self,
        items: list[str],
        delay: float | None = None,
        columns: int | None = None,
    ) -> asyncio.Future[None] | None:
        """Write labels as aligned columns sized to the terminal width."""
        if delay is None:
            delay = self.config.table_delay_ms / 1000
        for line in layout_table(items, columns or self.columns):
            self.write(line, True, delay)
        return self.write()
