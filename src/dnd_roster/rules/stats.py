"""Ability modifiers, saving throws, skills and the stats projection.

The engine always uses the proficiency bonus derived from total level,
never the value cached on the record. Results depend only on the record
snapshot, so repeated calls return equal projections.
"""

from __future__ import annotations

from dnd_roster.core.constants import ABILITY_SCORE_BASELINE
from dnd_roster.models.character import CharacterRecord
from dnd_roster.models.enums import Ability, Skill
from dnd_roster.models.stats import CharacterStats, CharacterSummary
from dnd_roster.rules.damage import effective_hp, is_alive, is_unconscious, vitality_status
from dnd_roster.rules.progression import class_levels, proficiency_bonus_for_classes


# =============================================================================
# Modifiers
# =============================================================================


def ability_modifier(score: int) -> int:
    """Calculate the ability modifier from an ability score.

    Floor division rounds toward negative infinity, so odd scores below 10
    round down (7 gives -2, not -1).

    Args:
        score: The ability score (1-30).

    Returns:
        The ability modifier (-5 to +10).

    Example:
        >>> ability_modifier(16)
        3
        >>> ability_modifier(1)
        -5
    """
    return (score - ABILITY_SCORE_BASELINE) // 2


def ability_modifiers(record: CharacterRecord) -> dict[Ability, int]:
    """Modifier for each of the six abilities."""
    scores = record.ability_scores
    return {ability: ability_modifier(scores.get_score(ability)) for ability in Ability}


def saving_throw_bonuses(record: CharacterRecord, proficiency_bonus: int) -> dict[Ability, int]:
    """Saving throw bonus per ability.

    Args:
        record: Character snapshot.
        proficiency_bonus: Bonus added for proficient saves.

    Returns:
        Mapping of ability to total saving throw bonus.
    """
    modifiers = ability_modifiers(record)
    return {
        ability: modifiers[ability]
        + (proficiency_bonus if record.saving_throws.is_proficient(ability) else 0)
        for ability in Ability
    }


def skill_bonuses(record: CharacterRecord, proficiency_bonus: int) -> dict[Skill, int]:
    """Bonus for every skill, proficient or not.

    Args:
        record: Character snapshot.
        proficiency_bonus: Bonus added for proficient skills.

    Returns:
        Mapping covering all 18 skills.
    """
    modifiers = ability_modifiers(record)
    return {
        skill: modifiers[skill.ability] + (proficiency_bonus if skill in record.skills else 0)
        for skill in Skill
    }


def initiative_modifier(record: CharacterRecord) -> int:
    """Initiative is the Dexterity modifier."""
    return ability_modifier(record.ability_scores.dexterity)


# =============================================================================
# Projections
# =============================================================================


def calculate_character_stats(record: CharacterRecord) -> CharacterStats:
    """Compute the full stats projection of a record.

    Args:
        record: Character snapshot.

    Returns:
        CharacterStats for the record.
    """
    proficiency = proficiency_bonus_for_classes(record.classes)
    hp = record.hit_points
    return CharacterStats(
        ability_modifiers=ability_modifiers(record),
        saving_throws=saving_throw_bonuses(record, proficiency),
        skills=skill_bonuses(record, proficiency),
        total_level=record.total_level,
        class_levels=class_levels(record.classes),
        proficiency_bonus=proficiency,
        initiative_modifier=initiative_modifier(record),
        armor_class=record.armor_class,
        speed=record.speed,
        effective_hit_points=effective_hp(hp),
        status=vitality_status(hp),
        is_alive=is_alive(hp),
        is_unconscious=is_unconscious(hp),
    )


def character_summary(record: CharacterRecord) -> CharacterSummary:
    """Reduce a record to its list-view projection."""
    return CharacterSummary(
        id=record.id,
        name=record.name,
        race=record.race,
        kind=record.kind,
        total_level=record.total_level,
        classes=record.classes,
        hit_points=record.hit_points,
        armor_class=record.armor_class,
        is_public=record.is_public,
    )


__all__ = [
    "ability_modifier",
    "ability_modifiers",
    "saving_throw_bonuses",
    "skill_bonuses",
    "initiative_modifier",
    "calculate_character_stats",
    "character_summary",
]
