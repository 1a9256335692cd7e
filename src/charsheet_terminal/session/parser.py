"""Command line grammar: ``name [--flag [value]] [-x] [positional ...]``."""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass, field

FlagValue = bool | str | int | float

NEGATIVE_NUMBER = re.compile(r"^-\d+(\.\d+)?$")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


@dataclass(frozen=True)
class ParsedCommand:
    """A single input line split into command name, flags and arguments."""

    name: str
    flags: dict[str, FlagValue] = field(default_factory=dict)
    positional_args: tuple[str, ...] = ()


def _coerce(value: str) -> FlagValue:
    if _NUMBER.match(value):
        return float(value) if "." in value else int(value)
    return value


def tokenize(text: str) -> list[str]:
    """Split shell-style, keeping backslashes literal.

    An unbalanced quote falls back to plain whitespace splitting.
    """
    lexer = shlex.shlex(text, posix=True)
    lexer.whitespace_split = True
    lexer.escape = ""
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError:
        return text.split()


def parse_flags(tokens: list[str]) -> tuple[dict[str, FlagValue], list[str]]:
    """Apply the permissive flag grammar to already-split tokens."""
    flags: dict[str, FlagValue] = {}
    positional: list[str] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == "--":
            positional.extend(tokens[i + 1 :])
            break
        if token.startswith("--") and len(token) > 2:
            name, eq, value = token[2:].partition("=")
            if eq:
                flags[name] = _coerce(value)
            elif name.startswith("no-") and len(name) > 3:
                flags[name[3:]] = False
            elif i + 1 < len(tokens) and not tokens[i + 1].startswith("-"):
                flags[name] = _coerce(tokens[i + 1])
                i += 1
            else:
                flags[name] = True
        elif token.startswith("-") and len(token) > 1:
            for letter in token[1:]:
                flags[letter] = True
        else:
            positional.append(token)
        i += 1
    return flags, positional


def parse_command(line: str) -> ParsedCommand:
    """Parse one raw input line. Never raises."""
    line = line.strip()
    if not line:
        return ParsedCommand(name="")

    parts = line.split(None, 1)
    name = parts[0]
    tokens = tokenize(parts[1]) if len(parts) > 1 else []
    flags, positional = parse_flags(tokens)

    # "-10" reads as the short flags 1 and 0; put it back as an argument
    for token in tokens:
        if NEGATIVE_NUMBER.match(token):
            for letter in token[1:]:
                flags.pop(letter, None)
            if token in positional:
                positional.remove(token)
            positional.insert(0, token)
            break

    return ParsedCommand(name=name, flags=flags, positional_args=tuple(positional))
