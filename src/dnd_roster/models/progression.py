"""D&D 5E level progression data.

Static tables consumed by the progression and spellcasting engines:
- XP thresholds for each level
- Hit dice by class
- Multiclass spellcaster slot table (by caster level)
- Warlock pact magic slots
- Default spellcasting ability by class

All values come from the 5E Player's Handbook. The engines look these
tables up; they never derive their own values.
"""

from __future__ import annotations

from dnd_roster.models.enums import Ability, CasterProgression, CharacterClass

# =============================================================================
# XP Thresholds (PHB p.15)
# =============================================================================

XP_THRESHOLDS: dict[int, int] = {
    1: 0,
    2: 300,
    3: 900,
    4: 2700,
    5: 6500,
    6: 14000,
    7: 23000,
    8: 34000,
    9: 48000,
    10: 64000,
    11: 85000,
    12: 100000,
    13: 120000,
    14: 140000,
    15: 165000,
    16: 195000,
    17: 225000,
    18: 265000,
    19: 305000,
    20: 355000,
}
"""Cumulative XP required to reach each level."""


# =============================================================================
# Hit Dice by Class
# =============================================================================

CLASS_HIT_DIE: dict[CharacterClass, int] = {
    CharacterClass.BARBARIAN: 12,
    CharacterClass.FIGHTER: 10,
    CharacterClass.PALADIN: 10,
    CharacterClass.RANGER: 10,
    CharacterClass.ARTIFICER: 8,
    CharacterClass.BARD: 8,
    CharacterClass.CLERIC: 8,
    CharacterClass.DRUID: 8,
    CharacterClass.MONK: 8,
    CharacterClass.ROGUE: 8,
    CharacterClass.WARLOCK: 8,
    CharacterClass.SORCERER: 6,
    CharacterClass.WIZARD: 6,
}


def get_hit_die(class_name: str) -> int:
    """Get the hit die size for a class, defaulting to d8 for unknown names."""
    try:
        return CLASS_HIT_DIE[CharacterClass(class_name)]
    except ValueError:
        return 8


# =============================================================================
# Spell Slots (PHB p.165, Multiclass Spellcaster table)
# =============================================================================

# Indexed by combined caster level, not by class level
MULTICLASS_SPELL_SLOTS: dict[int, dict[int, int]] = {
    1:  {1: 2},
    2:  {1: 3},
    3:  {1: 4, 2: 2},
    4:  {1: 4, 2: 3},
    5:  {1: 4, 2: 3, 3: 2},
    6:  {1: 4, 2: 3, 3: 3},
    7:  {1: 4, 2: 3, 3: 3, 4: 1},
    8:  {1: 4, 2: 3, 3: 3, 4: 2},
    9:  {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    10: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
    11: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    12: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    13: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    14: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    15: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    16: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    17: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1, 9: 1},
    18: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 1, 7: 1, 8: 1, 9: 1},
    19: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 1, 8: 1, 9: 1},
    20: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 2, 8: 1, 9: 1},
}

# Warlock pact magic
WARLOCK_PACT_SLOTS: dict[int, tuple[int, int]] = {
    # level: (num_slots, slot_level)
    1:  (1, 1),
    2:  (2, 1),
    3:  (2, 2),
    4:  (2, 2),
    5:  (2, 3),
    6:  (2, 3),
    7:  (2, 4),
    8:  (2, 4),
    9:  (2, 5),
    10: (2, 5),
    11: (3, 5),
    12: (3, 5),
    13: (3, 5),
    14: (3, 5),
    15: (3, 5),
    16: (3, 5),
    17: (4, 5),
    18: (4, 5),
    19: (4, 5),
    20: (4, 5),
}


# =============================================================================
# Spellcasting by Class
# =============================================================================

CLASS_CASTER_PROGRESSION: dict[CharacterClass, CasterProgression] = {
    CharacterClass.BARD: CasterProgression.FULL,
    CharacterClass.CLERIC: CasterProgression.FULL,
    CharacterClass.DRUID: CasterProgression.FULL,
    CharacterClass.SORCERER: CasterProgression.FULL,
    CharacterClass.WIZARD: CasterProgression.FULL,
    CharacterClass.ARTIFICER: CasterProgression.HALF,
    CharacterClass.PALADIN: CasterProgression.HALF,
    CharacterClass.RANGER: CasterProgression.HALF,
    CharacterClass.WARLOCK: CasterProgression.PACT,
    CharacterClass.BARBARIAN: CasterProgression.NONE,
    CharacterClass.FIGHTER: CasterProgression.NONE,
    CharacterClass.MONK: CasterProgression.NONE,
    CharacterClass.ROGUE: CasterProgression.NONE,
}

SPELLCASTING_ABILITY: dict[CharacterClass, Ability] = {
    CharacterClass.ARTIFICER: Ability.INT,
    CharacterClass.BARD: Ability.CHA,
    CharacterClass.CLERIC: Ability.WIS,
    CharacterClass.DRUID: Ability.WIS,
    CharacterClass.PALADIN: Ability.CHA,
    CharacterClass.RANGER: Ability.WIS,
    CharacterClass.SORCERER: Ability.CHA,
    CharacterClass.WARLOCK: Ability.CHA,
    CharacterClass.WIZARD: Ability.INT,
}

# Third casters are decided by subclass, not class
THIRD_CASTER_SUBCLASSES: dict[str, Ability] = {
    "eldritch knight": Ability.INT,
    "arcane trickster": Ability.INT,
}


__all__ = [
    "XP_THRESHOLDS",
    "CLASS_HIT_DIE",
    "get_hit_die",
    "MULTICLASS_SPELL_SLOTS",
    "WARLOCK_PACT_SLOTS",
    "CLASS_CASTER_PROGRESSION",
    "SPELLCASTING_ABILITY",
    "THIRD_CASTER_SUBCLASSES",
]
