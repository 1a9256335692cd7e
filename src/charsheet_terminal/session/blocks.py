"""Modal input stack.

A command that needs a guided sub-dialogue pushes a ``Block``. While any block
is on the stack, raw lines go to the top block's handler instead of the
command grammar, and the prompt shows the top block's label.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable

from charsheet_terminal.config import DEFAULT_PROMPT

logger = logging.getLogger(__name__)

LineHandler = Callable[[str], Any]


@dataclass(frozen=True)
class Block:
    id: int
    prompt: str
    handler: LineHandler


class BlockStack:
    """Ordered stack of blocks; the last one is active."""

    def __init__(self, default_prompt: str = DEFAULT_PROMPT) -> None:
        self.default_prompt = default_prompt
        self._blocks: list[Block] = []
        self._ids = itertools.count()

    def enter(self, prompt: str, on_line: LineHandler) -> Block:
        """Route every following line to ``on_line`` until ``exit``."""
        block = Block(id=next(self._ids), prompt=prompt, handler=on_line)
        self._blocks.append(block)
        logger.debug("Entered block %d (%r), depth %d", block.id, prompt, self.depth)
        return block

    def exit(self) -> Block | None:
        """Pop the active block. Does nothing on an empty stack."""
        if not self._blocks:
            logger.debug("exit() called with no active block")
            return None
        block = self._blocks.pop()
        logger.debug("Exited block %d, depth %d", block.id, self.depth)
        return block

    @property
    def active(self) -> bool:
        return bool(self._blocks)

    @property
    def current(self) -> Block | None:
        return self._blocks[-1] if self._blocks else None

    @property
    def depth(self) -> int:
        return len(self._blocks)

    @property
    def prompt(self) -> str:
        """The label the user should currently see."""
        block = self.current
        return block.prompt if block is not None else self.default_prompt
