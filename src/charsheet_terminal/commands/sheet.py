"""Character sheet commands: money, health, stats and features."""

from __future__ import annotations

from typing import Any

from charsheet_terminal.commands.base import command
from charsheet_terminal.services.skills import ABILITIES, UnknownStatError, ability_modifier
from charsheet_terminal.session.context import SessionContext
from charsheet_terminal.session.fields import MODIFIER_HINT, parse_modifier
from charsheet_terminal.utils.formatting import (
    format_delta,
    format_hp,
    format_modifier,
    format_number,
    format_value,
    paint,
)


@command(
    usage="""
    Display or modify the character's gold

    gold        Display current gold
    gold +N     Add N gold
    gold -N     Spend N gold
    gold N      Set gold to N
    """
)
def gold(ctx: SessionContext, flags: dict[str, Any], modifier: str | None = None, *_: str) -> Any:
    out = ctx.output
    current = ctx.character.get("gold", 0) or 0
    if modifier is None:
        return out.write(f"GP: {paint(current, 'yellow', ctx.color)}")

    try:
        parsed = parse_modifier(modifier)
    except ValueError:
        return out.write(f"Unknown modifier: {modifier}. {MODIFIER_HINT}")

    if parsed.relative:
        total = current + parsed.amount
        out.write(format_delta(current, parsed.amount))
    else:
        total = parsed.amount
        out.write(f"Previous GP: {current}")

    ctx.character.set("gold", total)
    return out.write(f"GP: {paint(total, 'yellow', ctx.color)}")


@command(
    usage="""
    Display or modify hit points

    hp          Display current (and temporary) hit points
    hp +N       Heal N, up to the maximum
    hp -N       Take N damage
    hp N        Set current hit points to N
    """
)
def hp(ctx: SessionContext, flags: dict[str, Any], modifier: str | None = None, *_: str) -> Any:
    out = ctx.output
    character = ctx.character
    current = character.get("current_hp", 0) or 0
    max_hp = character.get("max_hp", 0) or 0

    if modifier is None:
        temporary = character.get("temporary_hp", 0) or 0
        temp = f"(+{temporary})" if temporary else ""
        return out.write(f"{format_hp(current + temporary, max_hp, ctx.color)} {temp}".rstrip())

    try:
        parsed = parse_modifier(modifier)
    except ValueError:
        return out.write(f"Unknown modifier: {modifier}. {MODIFIER_HINT}")

    if parsed.relative:
        total = min(current + parsed.amount, max_hp)
        out.write(format_delta(current, parsed.amount))
    else:
        total = parsed.amount
        out.write(f"Previous HP: {format_hp(current, max_hp, ctx.color)}")

    character.set("current_hp", total)
    return out.write(f"HP: {format_hp(total, max_hp, ctx.color)}")


@command(usage="implants    List implants and their remaining charges")
def implants(ctx: SessionContext, flags: dict[str, Any], *_: str) -> Any:
    items = ctx.character.get("implants") or []
    if not items:
        return ctx.output.write(format_value(items))
    for implant in items:
        ctx.output.write(f"{implant.get('name', '?')} - {implant.get('charges', 0)} charges")
    return ctx.output.write()


@command(usage="proficiencies    List the character's proficiencies")
def proficiencies(ctx: SessionContext, flags: dict[str, Any], *_: str) -> Any:
    return ctx.output.write(format_value(ctx.character.get("proficiencies") or []))


@command(usage="proficiency_bonus    Show the proficiency bonus for the current level")
def proficiency_bonus(ctx: SessionContext, flags: dict[str, Any], *_: str) -> Any:
    return ctx.output.write(ctx.skills.proficiency_bonus())


@command(usage="stats    Show ability scores and modifiers")
def stats(ctx: SessionContext, flags: dict[str, Any], *_: str) -> Any:
    width = max(len(name) for name in ABILITIES) + 2
    for ability in ABILITIES:
        score = int(ctx.character.get(ability, 10) or 0)
        label = f"{ability.capitalize()}:".ljust(width)
        ctx.output.write(f"{label}{format_number(score)} -   {format_modifier(ability_modifier(score))}")
    return ctx.output.write()


@command(
    usage="""
    Show a skill's ability score, modifier and proficiency

    skill NAME      Long or short names work: perception, perc, dex_save
    """
)
def skill(ctx: SessionContext, flags: dict[str, Any], name: str | None = None, *_: str) -> Any:
    if name is None:
        return ctx.output.write("Usage: skill NAME")
    try:
        info = ctx.skills.get(name)
    except UnknownStatError as e:
        return ctx.output.error(str(e))

    proficient = f"proficient +{info.proficiency_bonus}" if info.proficient else "not proficient"
    return ctx.output.write(
        f"{info.name} ({info.stat}): score {info.score}, modifier {info.modifier:+d}, {proficient}"
    )


@command(
    usage="""
    List features, or describe one of them

    features            List the character's features
    features NAME       Show the description of NAME
    """
)
def features(ctx: SessionContext, flags: dict[str, Any], *words: str) -> Any:
    out = ctx.output
    name = " ".join(words)
    if not name:
        return out.write(format_value(ctx.character.get("features") or []))

    feature = ctx.character.features_table.get(name)
    if not feature:
        return out.write(f"Unknown feature: {name}")

    description = feature.get("description", []) if isinstance(feature, dict) else feature
    if isinstance(description, str):
        description = [description]
    for line in description:
        out.fast(line)
    return out.write()
