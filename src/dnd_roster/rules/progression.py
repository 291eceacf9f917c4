"""Multiclass level aggregation, proficiency bonus and XP progression.

All functions are pure; the tables live in ``dnd_roster.models.progression``.
"""

from __future__ import annotations

from collections.abc import Iterable

from dnd_roster.core.constants import MAX_CHARACTER_LEVEL, MIN_CHARACTER_LEVEL
from dnd_roster.core.exceptions import InvalidCharacterDataError, InvalidCharacterLevelError
from dnd_roster.models.character import ClassEntry
from dnd_roster.models.enums import CharacterClass
from dnd_roster.models.progression import XP_THRESHOLDS
from dnd_roster.models.stats import ExperienceInfo


# =============================================================================
# Levels
# =============================================================================


def total_level(classes: Iterable[ClassEntry]) -> int:
    """Sum the levels of every class entry."""
    return sum(entry.level for entry in classes)


def class_levels(classes: Iterable[ClassEntry]) -> dict[CharacterClass, int]:
    """Map each class to its level, in class-list order."""
    return {entry.class_name: entry.level for entry in classes}


def proficiency_bonus_for_level(level: int) -> int:
    """Get the proficiency bonus for a total character level.

    Levels 1-4 give +2, 5-8 give +3, 9-12 give +4, 13-16 give +5 and
    17-20 give +6.

    Args:
        level: Total character level.

    Returns:
        The proficiency bonus.

    Raises:
        InvalidCharacterLevelError: If the level is outside 1-20.

    Example:
        >>> proficiency_bonus_for_level(5)
        3
    """
    if not MIN_CHARACTER_LEVEL <= level <= MAX_CHARACTER_LEVEL:
        raise InvalidCharacterLevelError(level)
    return 2 + (level - 1) // 4


def proficiency_bonus_for_classes(classes: Iterable[ClassEntry]) -> int:
    """Proficiency bonus derived from the summed class levels."""
    return proficiency_bonus_for_level(total_level(classes))


# =============================================================================
# Experience
# =============================================================================


def _check_experience(xp: int) -> None:
    if xp < 0:
        raise InvalidCharacterDataError(
            "Experience points cannot be negative",
            validation_errors=[
                {
                    "field": "experience_points",
                    "message": "Input should be greater than or equal to 0",
                    "type": "greater_than_equal",
                }
            ],
        )


def level_for_experience(xp: int) -> int:
    """Determine the level reached with a cumulative XP total.

    Raises:
        InvalidCharacterDataError: If ``xp`` is negative.
    """
    _check_experience(xp)
    for level in range(MAX_CHARACTER_LEVEL, MIN_CHARACTER_LEVEL, -1):
        if xp >= XP_THRESHOLDS[level]:
            return level
    return MIN_CHARACTER_LEVEL


def experience_info(xp: int) -> ExperienceInfo:
    """Describe where an XP total sits on the level table.

    Args:
        xp: Cumulative experience points.

    Returns:
        ExperienceInfo with the current level and the distance to the next.

    Raises:
        InvalidCharacterDataError: If ``xp`` is negative.

    Example:
        >>> experience_info(1000).xp_to_next_level
        1700
    """
    level = level_for_experience(xp)
    if level >= MAX_CHARACTER_LEVEL:
        return ExperienceInfo(
            current_xp=xp,
            current_level=level,
            next_level_xp=XP_THRESHOLDS[MAX_CHARACTER_LEVEL],
            xp_to_next_level=0,
            is_max_level=True,
        )

    next_level_xp = XP_THRESHOLDS[level + 1]
    return ExperienceInfo(
        current_xp=xp,
        current_level=level,
        next_level_xp=next_level_xp,
        xp_to_next_level=max(0, next_level_xp - xp),
        is_max_level=False,
    )


__all__ = [
    "total_level",
    "class_levels",
    "proficiency_bonus_for_level",
    "proficiency_bonus_for_classes",
    "level_for_experience",
    "experience_info",
]
