"""Dice rolling."""

from __future__ import annotations

import random
import re
from collections import Counter
from dataclasses import dataclass

DICE_NOTATION = re.compile(r"^(\d*)d(\d+)$", re.IGNORECASE)
MAX_DICE = 100


@dataclass
class RollResult:
    rolls: list[int]
    sum: int
    average: float
    median: int
    mode: int
    max: int
    min: int


def roll(die_type: int, times: int = 1, rng: random.Random | None = None) -> RollResult:
    """Roll a ``die_type``-sided die ``times`` times."""
    if die_type < 1 or times < 1:
        raise ValueError("Dice need at least one side and one roll")
    rng = rng or random
    rolls = sorted(rng.randint(1, die_type) for _ in range(times))
    total = sum(rolls)
    # Ties go to the value that reached the top count first, in sorted order
    mode = max(Counter(rolls).items(), key=lambda item: item[1])[0]
    return RollResult(
        rolls=rolls,
        sum=total,
        average=total / times,
        median=rolls[len(rolls) // 2],
        mode=mode,
        max=rolls[-1],
        min=rolls[0],
    )


def d20(rng: random.Random | None = None) -> int:
    return roll(20, 1, rng).sum


def parse_notation(text: str) -> tuple[int, int] | None:
    """``3d6`` -> ``(3, 6)``; ``d20`` -> ``(1, 20)``; anything else -> None."""
    match = DICE_NOTATION.match(text.strip())
    if not match:
        return None
    times = int(match.group(1) or 1)
    sides = int(match.group(2))
    if not 1 <= times <= MAX_DICE or sides < 1:
        return None
    return times, sides
