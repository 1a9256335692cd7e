"""Dice commands."""

from __future__ import annotations

from typing import Any

from charsheet_terminal.commands.base import command
from charsheet_terminal.services import dice
from charsheet_terminal.services.skills import UnknownStatError
from charsheet_terminal.session.context import SessionContext
from charsheet_terminal.session.fields import parse_modifier

# Minimum total needed to connect, by corporation size
CORP_DIFFICULTY = {"small": 15, "medium": 15, "large": 10, "huge": 10}


@command(
    usage="""
    Roll dice

    roll            Roll a d20 for luck
    roll STAT       Ability or skill check: roll dex, roll perception, roll str_save
    roll NdM        Roll N dice with M sides: roll 3d6
    roll +N / -N    Roll a d20 with a flat modifier
    """
)
def roll(ctx: SessionContext, flags: dict[str, Any], stat: str | None = None, *_: str) -> Any:
    out = ctx.output
    if stat is None:
        return out.write(f"Luck: {dice.d20(ctx.rng)}")

    notation = dice.parse_notation(stat)
    if notation is not None:
        times, sides = notation
        result = dice.roll(sides, times, ctx.rng)
        if times == 1:
            return out.write(f"{stat}: {result.sum}")
        return out.write(f"{stat}: {' + '.join(str(r) for r in result.rolls)} = {result.sum}")

    natural = dice.d20(ctx.rng)
    try:
        flat = parse_modifier(stat)
    except ValueError:
        flat = None
    if flat is not None:
        return out.write(f"R:{natural} + M:{flat.amount} = {natural + flat.amount}")

    try:
        info = ctx.skills.get(stat)
    except UnknownStatError as e:
        return out.error(str(e))

    # Raw ability checks never add proficiency
    proficiency = info.proficiency_bonus if info.name != info.stat else 0
    if proficiency:
        total = natural + info.modifier + proficiency
        return out.write(f"R:{natural} + M:{info.modifier} + P:{proficiency} = {total}")
    return out.write(f"R:{natural} + M:{info.modifier} = {natural + info.modifier}")


@command(
    usage="""
    Attempt to connect to a corporate network

    connect             Roll Computers and show the total
    connect SIZE        Roll against a corporation: small, medium, large or huge
    """
)
def connect(ctx: SessionContext, flags: dict[str, Any], corp_type: str | None = None, *_: str) -> Any:
    out = ctx.output
    natural = dice.d20(ctx.rng)
    bonus = ctx.skills.proficiency_bonus("computers")
    total = natural + bonus

    if natural <= 1:
        return out.critical_fail()
    if natural >= 20:
        return out.critical_success()

    if corp_type is None:
        return out.write(f"{natural} + {bonus} = {total}")

    required = CORP_DIFFICULTY.get(corp_type.lower())
    if required is None:
        return out.write(f"Unknown corp type: {corp_type}. Try small, medium, large, or huge")

    if total < required:
        return out.fail()
    return out.success()
