"""System utility checks."""

from __future__ import annotations

from pathlib import Path


def check_character_file(path: str) -> tuple[bool, str]:
    """Validate a character file path."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        return False, f"Character file not found: {resolved}"
    if not resolved.is_file():
        return False, f"Not a file: {resolved}"
    return True, str(resolved)
