"""Spellcasting resources: caster level, spell slots, attack bonus and save DC.

Which classes cast, how their levels count toward caster level, and which
ability governs their spells all come from a ``SpellcastingRules`` table
passed in by the caller. ``SpellcastingRules.default()`` carries the
Player's Handbook values.

Caster level rules (multiclass spellcaster):
    - Full casters add their class level.
    - Half casters add half their class level, rounded down.
    - Third casters add a third of their class level, rounded down.
    - Pact magic adds nothing; its slots are merged in at the pact slot level.

Example:
    >>> stats = calculate_spellcasting_stats(record)
    >>> stats.caster_level, stats.spell_slots
    (5, {1: 4, 2: 3, 3: 2})
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dnd_roster.core.constants import SPELL_SAVE_DC_BASE
from dnd_roster.models.character import CharacterRecord, ClassEntry
from dnd_roster.models.enums import Ability, CasterProgression, CharacterClass
from dnd_roster.models.progression import (
    CLASS_CASTER_PROGRESSION,
    MULTICLASS_SPELL_SLOTS,
    SPELLCASTING_ABILITY,
    THIRD_CASTER_SUBCLASSES,
    WARLOCK_PACT_SLOTS,
)
from dnd_roster.models.stats import SpellcastingStats
from dnd_roster.rules.progression import proficiency_bonus_for_classes
from dnd_roster.rules.stats import ability_modifier


# =============================================================================
# Configuration
# =============================================================================


class CasterProfile(BaseModel):
    """How one class (or subclass) casts spells."""

    model_config = ConfigDict(frozen=True)

    progression: CasterProgression
    ability: Ability | None = None

    @property
    def is_caster(self) -> bool:
        return self.progression != CasterProgression.NONE

    def caster_level_contribution(self, class_level: int) -> int:
        """Levels this class adds to the multiclass caster level."""
        if self.progression == CasterProgression.FULL:
            return class_level
        if self.progression == CasterProgression.HALF:
            return class_level // 2
        if self.progression == CasterProgression.THIRD:
            return class_level // 3
        return 0


NON_CASTER = CasterProfile(progression=CasterProgression.NONE)


class SpellcastingRules(BaseModel):
    """Per-class spellcasting configuration.

    Attributes:
        classes: Profile for each class. Missing classes do not cast.
        subclasses: Profiles keyed by lowercase subclass name. A matching
            subclass overrides its class's profile.
        slot_table: Spell slots per spell level, indexed by caster level.
        pact_slots: Pact magic (slot count, slot level) by class level.
    """

    model_config = ConfigDict(frozen=True)

    classes: dict[CharacterClass, CasterProfile] = Field(default_factory=dict)
    subclasses: dict[str, CasterProfile] = Field(default_factory=dict)
    slot_table: dict[int, dict[int, int]] = Field(
        default_factory=lambda: dict(MULTICLASS_SPELL_SLOTS)
    )
    pact_slots: dict[int, tuple[int, int]] = Field(default_factory=lambda: dict(WARLOCK_PACT_SLOTS))

    @classmethod
    def default(cls) -> "SpellcastingRules":
        """Build the Player's Handbook rules table."""
        classes = {
            class_name: CasterProfile(
                progression=progression,
                ability=SPELLCASTING_ABILITY.get(class_name),
            )
            for class_name, progression in CLASS_CASTER_PROGRESSION.items()
        }
        subclasses = {
            name: CasterProfile(progression=CasterProgression.THIRD, ability=ability)
            for name, ability in THIRD_CASTER_SUBCLASSES.items()
        }
        return cls(classes=classes, subclasses=subclasses)

    def profile_for(self, entry: ClassEntry) -> CasterProfile:
        """Resolve the profile governing a class entry."""
        if entry.subclass:
            override = self.subclasses.get(entry.subclass.strip().lower())
            if override is not None:
                return override
        return self.classes.get(entry.class_name, NON_CASTER)


# =============================================================================
# Calculations
# =============================================================================


def caster_level(record: CharacterRecord, rules: SpellcastingRules | None = None) -> int:
    """Combined caster level used to look up the multiclass slot table."""
    rules = rules or SpellcastingRules.default()
    return sum(
        rules.profile_for(entry).caster_level_contribution(entry.level)
        for entry in record.classes
    )


def spell_slots(record: CharacterRecord, rules: SpellcastingRules | None = None) -> dict[int, int]:
    """Spell slots by spell level, pact magic included.

    Args:
        record: Character snapshot.
        rules: Spellcasting configuration; defaults to the PHB table.

    Returns:
        Mapping of spell level to slot count, ordered by spell level.
        Empty when the character has no slots.
    """
    rules = rules or SpellcastingRules.default()
    slots = dict(rules.slot_table.get(caster_level(record, rules), {}))

    for entry in record.classes:
        if rules.profile_for(entry).progression != CasterProgression.PACT:
            continue
        pact = rules.pact_slots.get(entry.level)
        if pact is None:
            continue
        count, slot_level = pact
        slots[slot_level] = slots.get(slot_level, 0) + count

    return dict(sorted(slots.items()))


def spellcasting_ability(
    record: CharacterRecord, rules: SpellcastingRules | None = None
) -> Ability | None:
    """Ability of the highest-level casting class.

    Ties go to the class listed first. Returns None when no class casts.
    """
    rules = rules or SpellcastingRules.default()
    best_level = 0
    best_ability: Ability | None = None
    for entry in record.classes:
        profile = rules.profile_for(entry)
        if not profile.is_caster or profile.ability is None:
            continue
        # Strictly greater keeps the first-listed class on ties
        if entry.level > best_level:
            best_level = entry.level
            best_ability = profile.ability
    return best_ability


def calculate_spellcasting_stats(
    record: CharacterRecord, rules: SpellcastingRules | None = None
) -> SpellcastingStats:
    """Compute spellcasting resources for a record.

    Args:
        record: Character snapshot.
        rules: Spellcasting configuration; defaults to the PHB table.

    Returns:
        SpellcastingStats. A character without a casting class gets caster
        level 0, no slots, attack bonus 0 and save DC 8.
    """
    rules = rules or SpellcastingRules.default()
    ability = spellcasting_ability(record, rules)
    level = caster_level(record, rules)
    slots = spell_slots(record, rules)

    if ability is None:
        return SpellcastingStats(
            caster_level=level,
            spell_slots=slots,
            spell_attack_bonus=0,
            spell_save_dc=SPELL_SAVE_DC_BASE,
        )

    modifier = ability_modifier(record.ability_scores.get_score(ability))
    proficiency = proficiency_bonus_for_classes(record.classes)
    return SpellcastingStats(
        caster_level=level,
        spell_slots=slots,
        spell_attack_bonus=modifier + proficiency,
        spell_save_dc=SPELL_SAVE_DC_BASE + modifier + proficiency,
        spellcasting_ability=ability,
    )


__all__ = [
    "CasterProfile",
    "NON_CASTER",
    "SpellcastingRules",
    "caster_level",
    "spell_slots",
    "spellcasting_ability",
    "calculate_spellcasting_stats",
]
