"""Terminal line input with tab completion of command names."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Callable, Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.input import Input
from prompt_toolkit.input.typeahead import clear_typeahead
from prompt_toolkit.output import Output

if sys.platform != "win32":
    import termios

logger = logging.getLogger(__name__)


class CommandCompleter(Completer):
    """Complete the first word of the line against the command catalog."""

    def __init__(self, complete: Callable[[str], Iterable[str]]) -> None:
        self._complete = complete

    def get_completions(self, document: Document, complete_event: Any) -> Any:
        text = document.text_before_cursor.lstrip()
        if " " in text:
            return
        for name in self._complete(text):
            yield Completion(name, start_position=-len(text))


class PromptLineSource:
    """Read lines from the terminal; the prompt label is given per call.

    Anything typed while the previous answer was still animating is thrown
    away before the next prompt is shown.
    """

    def __init__(
        self,
        completer: Completer | None = None,
        input: Input | None = None,
        output: Output | None = None,
    ) -> None:
        self._session: PromptSession[str] = PromptSession(
            completer=completer,
            complete_while_typing=False,
            input=input,
            output=output,
        )

    def discard_typeahead(self) -> None:
        inp = self._session.input
        clear_typeahead(inp)

        try:
            fd = inp.fileno()
        except NotImplementedError:
            fd = None
        if fd is not None and sys.platform != "win32" and os.isatty(fd):
            termios.tcflush(fd, termios.TCIFLUSH)

        # Lines already read by the terminal (or sitting in a pipe)
        discarded = 0
        while True:
            keys = inp.read_keys()
            if not keys:
                break
            discarded += len(keys)
        discarded += len(inp.flush_keys())
        if discarded:
            logger.debug("Discarded %d keys typed during output", discarded)

    async def readline(self, prompt: str) -> str:
        self.discard_typeahead()
        return await self._session.prompt_async(prompt)
