"""Enumeration types for the D&D 5E character roster.

This module defines the enumerations used throughout the roster: abilities,
skills, classes, races, sizes, spell schools, and the derived states the
calculation engines report. They are the foundation for type-safe 5E
mechanics.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """D&D 5E ability scores.

    The six core abilities that define a character's physical
    and mental characteristics.
    """

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability.

        Returns:
            Full ability name (e.g., 'Strength' for STR).
        """
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation.

        Returns:
            Three-letter abbreviation (e.g., 'STR').
        """
        return self.name


class Skill(StrEnum):
    """D&D 5E skills.

    Every skill is governed by exactly one ability, see ``Skill.ability``.
    """

    # Strength skills
    ATHLETICS = "athletics"

    # Dexterity skills
    ACROBATICS = "acrobatics"
    SLEIGHT_OF_HAND = "sleight_of_hand"
    STEALTH = "stealth"

    # Intelligence skills
    ARCANA = "arcana"
    HISTORY = "history"
    INVESTIGATION = "investigation"
    NATURE = "nature"
    RELIGION = "religion"

    # Wisdom skills
    ANIMAL_HANDLING = "animal_handling"
    INSIGHT = "insight"
    MEDICINE = "medicine"
    PERCEPTION = "perception"
    SURVIVAL = "survival"

    # Charisma skills
    DECEPTION = "deception"
    INTIMIDATION = "intimidation"
    PERFORMANCE = "performance"
    PERSUASION = "persuasion"

    @property
    def ability(self) -> Ability:
        """Get the governing ability for this skill.

        Returns:
            The Ability used for checks with this skill.
        """
        return SKILL_ABILITIES[self]


SKILL_ABILITIES: dict[Skill, Ability] = {
    # Strength
    Skill.ATHLETICS: Ability.STR,
    # Dexterity
    Skill.ACROBATICS: Ability.DEX,
    Skill.SLEIGHT_OF_HAND: Ability.DEX,
    Skill.STEALTH: Ability.DEX,
    # Intelligence
    Skill.ARCANA: Ability.INT,
    Skill.HISTORY: Ability.INT,
    Skill.INVESTIGATION: Ability.INT,
    Skill.NATURE: Ability.INT,
    Skill.RELIGION: Ability.INT,
    # Wisdom
    Skill.ANIMAL_HANDLING: Ability.WIS,
    Skill.INSIGHT: Ability.WIS,
    Skill.MEDICINE: Ability.WIS,
    Skill.PERCEPTION: Ability.WIS,
    Skill.SURVIVAL: Ability.WIS,
    # Charisma
    Skill.DECEPTION: Ability.CHA,
    Skill.INTIMIDATION: Ability.CHA,
    Skill.PERFORMANCE: Ability.CHA,
    Skill.PERSUASION: Ability.CHA,
}
"""Fixed skill-to-ability table covering every skill."""


class CharacterKind(StrEnum):
    """Whether a character is played by a player or the DM."""

    PC = "pc"
    NPC = "npc"


class CharacterClass(StrEnum):
    """Classes a character may take levels in."""

    ARTIFICER = "artificer"
    BARBARIAN = "barbarian"
    BARD = "bard"
    CLERIC = "cleric"
    DRUID = "druid"
    FIGHTER = "fighter"
    MONK = "monk"
    PALADIN = "paladin"
    RANGER = "ranger"
    ROGUE = "rogue"
    SORCERER = "sorcerer"
    WARLOCK = "warlock"
    WIZARD = "wizard"

    @property
    def display_name(self) -> str:
        """Get the capitalized class name."""
        return self.value.capitalize()


class Race(StrEnum):
    """Playable races. ``CUSTOM`` pairs with a free-text custom race."""

    DRAGONBORN = "dragonborn"
    DWARF = "dwarf"
    ELF = "elf"
    GNOME = "gnome"
    HALF_ELF = "half-elf"
    HALFLING = "halfling"
    HALF_ORC = "half-orc"
    HUMAN = "human"
    TIEFLING = "tiefling"
    AARAKOCRA = "aarakocra"
    GENASI = "genasi"
    GOLIATH = "goliath"
    AASIMAR = "aasimar"
    BUGBEAR = "bugbear"
    FIRBOLG = "firbolg"
    GOBLIN = "goblin"
    HOBGOBLIN = "hobgoblin"
    KENKU = "kenku"
    KOBOLD = "kobold"
    LIZARDFOLK = "lizardfolk"
    ORC = "orc"
    TABAXI = "tabaxi"
    TRITON = "triton"
    YUAN_TI = "yuan-ti"
    CUSTOM = "custom"


class Size(StrEnum):
    """D&D 5E creature sizes."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"
    GARGANTUAN = "gargantuan"


class SpellSchool(StrEnum):
    """Schools of magic."""

    ABJURATION = "abjuration"
    CONJURATION = "conjuration"
    DIVINATION = "divination"
    ENCHANTMENT = "enchantment"
    EVOCATION = "evocation"
    ILLUSION = "illusion"
    NECROMANCY = "necromancy"
    TRANSMUTATION = "transmutation"


class CasterProgression(StrEnum):
    """How a class's levels contribute to multiclass caster level.

    Levels:
        FULL: Every class level counts.
        HALF: Half the class level, rounded down.
        THIRD: A third of the class level, rounded down.
        PACT: Pact magic; separate slots, no caster level contribution.
        NONE: Not a spellcaster.
    """

    FULL = "full"
    HALF = "half"
    THIRD = "third"
    PACT = "pact"
    NONE = "none"


class VitalityStatus(StrEnum):
    """Vitality derived from current hit points.

    ``DEAD`` is part of the reported vocabulary but no HP transition
    produces it; death is not tracked by this roster.
    """

    ALIVE = "alive"
    UNCONSCIOUS = "unconscious"
    DEAD = "dead"


class EncumbranceLevel(StrEnum):
    """Ordered encumbrance tiers, lightest first."""

    NONE = "none"
    LIGHT = "light"
    HEAVY = "heavy"
    OVERLOADED = "overloaded"


class LifecycleState(StrEnum):
    """Storage lifecycle of a character record."""

    ACTIVE = "active"
    PENDING_DELETION = "pending_deletion"


__all__ = [
    "Ability",
    "Skill",
    "SKILL_ABILITIES",
    "CharacterKind",
    "CharacterClass",
    "Race",
    "Size",
    "SpellSchool",
    "CasterProgression",
    "VitalityStatus",
    "EncumbranceLevel",
    "LifecycleState",
]
