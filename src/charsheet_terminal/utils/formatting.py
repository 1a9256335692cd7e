"""Text styling and layout helpers for the terminal."""

from __future__ import annotations

import logging

from rich.color import ColorSystem
from rich.style import Style

logger = logging.getLogger(__name__)

EMPTY_PLACEHOLDER = "--empty--"

SUCCESS_STYLE = "black on green"
FAIL_STYLE = "black on red"


def paint(text: object, style: str, color: bool = True) -> str:
    """Wrap text in the ANSI codes for a rich style string."""
    if not color:
        return str(text)
    return Style.parse(style).render(str(text), color_system=ColorSystem.STANDARD)


def format_number(value: int) -> str:
    """Format an ability score as a sign column plus three digits."""
    sign = "-" if value < 0 else " "
    return f"{sign}{abs(value):03d}"


def format_modifier(value: int) -> str:
    """Pad non-negative modifiers so they line up with negative ones."""
    return f" {value}" if value >= 0 else str(value)


def format_delta(current: int | float, diff: int | float) -> str:
    """Render the arithmetic of applying a signed delta."""
    if diff >= 0:
        return f"{current} + {diff}"
    return f"{current} - {-diff}"


def format_hp(hp: int, max_hp: int, color: bool = True) -> str:
    """Colour current HP by how close it is to the maximum."""
    if hp >= 0.75 * max_hp:
        style = "green"
    elif hp >= 0.4 * max_hp:
        style = "yellow"
    else:
        style = "red"
    return f"{paint(hp, style, color)}/{max_hp}"


def format_value(value: object) -> str:
    """Render a single character field for display."""
    if value is None:
        return EMPTY_PLACEHOLDER
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        if not value:
            return EMPTY_PLACEHOLDER
        return "\n".join(format_value(item) for item in value)
    if isinstance(value, dict):
        if not value:
            return EMPTY_PLACEHOLDER
        return "\n".join(f"{key}: {format_value(item)}" for key, item in value.items())
    text = str(value)
    return text if text else EMPTY_PLACEHOLDER


def layout_table(items: list[str], columns: int) -> list[str]:
    """Lay out labels in aligned columns, like a shell listing completions.

    Every cell is as wide as the widest label plus two spaces. An empty string
    in ``items`` closes the current group; each group is followed by a blank
    line. When the terminal is narrower than one cell, one column is used.
    """
    labels = [item for item in items if item]
    if not labels:
        return []

    width = max(len(label) for label in labels) + 2
    max_columns = max(columns // width, 1)

    lines: list[str] = []

    def flush(group: list[str]) -> None:
        if not group:
            return
        for start in range(0, len(group), max_columns):
            row = group[start : start + max_columns]
            cells = [label.ljust(width) for label in row[:-1]]
            cells.append(row[-1])
            lines.append("".join(cells))
        lines.append("")

    group: list[str] = []
    for item in items:
        if item == "":
            flush(group)
            group = []
        else:
            group.append(item)
    flush(group)
    return lines
