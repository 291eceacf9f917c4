"""Application-wide constants for the D&D 5E character roster.

This module defines the rule constants and field limits shared by the
models, the validation gate, and the calculation engines.
"""

from __future__ import annotations

# =============================================================================
# Ability Scores
# =============================================================================

MIN_ABILITY_SCORE = 1
"""Minimum ability score (1 is barely functioning)."""

MAX_ABILITY_SCORE = 30
"""Maximum ability score (RAW D&D 5E, monsters and deities)."""

ABILITY_SCORE_BASELINE = 10
"""Score whose modifier is zero."""

# =============================================================================
# Levels and Proficiency
# =============================================================================

MIN_CHARACTER_LEVEL = 1
"""Minimum total character level."""

MAX_CHARACTER_LEVEL = 20
"""Maximum total character level in D&D 5E."""

MIN_PROFICIENCY_BONUS = 2
"""Proficiency bonus at levels 1-4."""

MAX_PROFICIENCY_BONUS = 6
"""Proficiency bonus at levels 17-20."""

MIN_HIT_DIE = 4
"""Smallest hit die a class entry may declare."""

MAX_HIT_DIE = 12
"""Largest hit die a class entry may declare."""

# =============================================================================
# Combat Values
# =============================================================================

MIN_ARMOR_CLASS = 1
MAX_ARMOR_CLASS = 30

DEFAULT_SPEED = 30
"""Default walking speed in feet (most medium creatures)."""

MAX_SPEED = 120
"""Highest walking speed accepted on a character record."""

SPELL_SAVE_DC_BASE = 8
"""Base of the spell save DC formula (8 + modifier + proficiency)."""

MAX_SPELL_LEVEL = 9

# =============================================================================
# Carrying Capacity
# =============================================================================

CARRYING_CAPACITY_MULTIPLIER = 15
"""Carrying capacity in pounds per point of Strength (PHB p.176)."""

# =============================================================================
# Record Field Limits
# =============================================================================

MAX_NAME_LENGTH = 100
MAX_CUSTOM_RACE_LENGTH = 50
MAX_SUBCLASS_LENGTH = 50
MAX_BACKSTORY_LENGTH = 2000
MAX_NOTES_LENGTH = 1000
MAX_IMAGE_URL_LENGTH = 500
MAX_EQUIPMENT_ITEMS = 100
MAX_SPELLS = 200
MAX_ITEM_DESCRIPTION_LENGTH = 500
MAX_SPELL_DESCRIPTION_LENGTH = 2000


__all__ = [
    # Ability Scores
    "MIN_ABILITY_SCORE",
    "MAX_ABILITY_SCORE",
    "ABILITY_SCORE_BASELINE",
    # Levels
    "MIN_CHARACTER_LEVEL",
    "MAX_CHARACTER_LEVEL",
    "MIN_PROFICIENCY_BONUS",
    "MAX_PROFICIENCY_BONUS",
    "MIN_HIT_DIE",
    "MAX_HIT_DIE",
    # Combat
    "MIN_ARMOR_CLASS",
    "MAX_ARMOR_CLASS",
    "DEFAULT_SPEED",
    "MAX_SPEED",
    "SPELL_SAVE_DC_BASE",
    "MAX_SPELL_LEVEL",
    # Carrying
    "CARRYING_CAPACITY_MULTIPLIER",
    # Field limits
    "MAX_NAME_LENGTH",
    "MAX_CUSTOM_RACE_LENGTH",
    "MAX_SUBCLASS_LENGTH",
    "MAX_BACKSTORY_LENGTH",
    "MAX_NOTES_LENGTH",
    "MAX_IMAGE_URL_LENGTH",
    "MAX_EQUIPMENT_ITEMS",
    "MAX_SPELLS",
    "MAX_ITEM_DESCRIPTION_LENGTH",
    "MAX_SPELL_DESCRIPTION_LENGTH",
]
