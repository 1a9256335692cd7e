"""Skill and ability score lookups.

Every method accepts short names (``dex``, ``perc``) as well as long ones
(``dexterity``, ``Sleight of Hand``).
"""

from __future__ import annotations

from dataclasses import dataclass

from charsheet_terminal.services.character import CharacterRecord

ABILITIES = ("strength", "dexterity", "constitution", "intelligence", "wisdom", "charisma")

SKILL_TO_STAT: dict[str, str] = {
    "strength_save": "strength",
    "athletics": "strength",
    "dexterity_save": "dexterity",
    "acrobatics": "dexterity",
    "sleight_of_hand": "dexterity",
    "stealth": "dexterity",
    "constitution_save": "constitution",
    "intelligence_save": "intelligence",
    "arcana": "intelligence",
    "computers": "intelligence",
    "history": "intelligence",
    "investigation": "intelligence",
    "nature": "intelligence",
    "religion": "intelligence",
    "wisdom_save": "wisdom",
    "animal_handling": "wisdom",
    "insight": "wisdom",
    "medicine": "wisdom",
    "perception": "wisdom",
    "survival": "wisdom",
    "charisma_save": "charisma",
    "deception": "charisma",
    "intimidation": "charisma",
    "performance": "charisma",
    "persuasion": "charisma",
}

SHORT_FORMS: dict[str, str] = {
    "str": "strength",
    "dex": "dexterity",
    "con": "constitution",
    "int": "intelligence",
    "wis": "wisdom",
    "cha": "charisma",
    "str_save": "strength_save",
    "dex_save": "dexterity_save",
    "con_save": "constitution_save",
    "int_save": "intelligence_save",
    "wis_save": "wisdom_save",
    "cha_save": "charisma_save",
    "acr": "acrobatics",
    "ani": "animal_handling",
    "arc": "arcana",
    "ath": "athletics",
    "com": "computers",
    "dec": "deception",
    "his": "history",
    "ins": "insight",
    "inti": "intimidation",
    "inv": "investigation",
    "med": "medicine",
    "nat": "nature",
    "perc": "perception",
    "perf": "performance",
    "pers": "persuasion",
    "rel": "religion",
    "soh": "sleight_of_hand",
    "ste": "stealth",
    "sur": "survival",
}


class UnknownStatError(ValueError):
    """Raised when a name maps to no ability score on the character."""


def to_lookup(name: str) -> str:
    return name.strip().lower().replace(" ", "_")


def canonical_name(name: str) -> str:
    """Expand a short form: ``perc`` -> ``perception``."""
    key = to_lookup(name)
    return SHORT_FORMS.get(key, key)


def ability_modifier(score: int) -> int:
    return (score - 10) // 2


@dataclass
class SkillInfo:
    given_name: str
    name: str
    stat: str
    score: int
    modifier: int
    proficient: bool
    proficiency_bonus: int


class Skills:
    """Skill math against one character."""

    def __init__(self, character: CharacterRecord) -> None:
        self.character = character

    def to_base_stat(self, name: str) -> str:
        """Return the ability behind a skill (athletics -> strength)."""
        if not name:
            raise UnknownStatError("A skill or stat name is required")
        skill = canonical_name(name)
        stat = SKILL_TO_STAT.get(skill, skill)
        if stat not in ABILITIES or not self.character.has(stat):
            raise UnknownStatError(f"Unknown stat: {name}")
        return stat

    def score(self, name: str) -> int:
        return int(self.character[self.to_base_stat(name)])

    def modifier(self, name: str) -> int:
        return ability_modifier(self.score(name))

    def is_proficient(self, name: str) -> bool:
        wanted = canonical_name(name)
        proficiencies = self.character.get("proficiencies") or []
        return any(canonical_name(str(p)) == wanted for p in proficiencies)

    def proficiency_bonus(self, name: str | None = None) -> int:
        """The character's bonus, or 0 for a named skill it is not proficient in."""
        if name and not self.is_proficient(name):
            return 0
        return self.character.proficiency_bonus

    def get(self, name: str) -> SkillInfo:
        stat = self.to_base_stat(name)
        return SkillInfo(
            given_name=name,
            name=canonical_name(name),
            stat=stat,
            score=self.score(name),
            modifier=self.modifier(name),
            proficient=self.is_proficient(name),
            proficiency_bonus=self.proficiency_bonus(name),
        )
