"""Creation and update commands accepted by the character service.

Commands carry the user-editable fields of a character. Identity,
ownership, timestamps, revision and lifecycle are never client-supplied;
the service fills them in when it builds a ``CharacterRecord``.

Both commands reject unknown fields, trim names, and strip markup from
the free-text fields.
"""

from __future__ import annotations

import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from dnd_roster.core.constants import (
    DEFAULT_SPEED,
    MAX_BACKSTORY_LENGTH,
    MAX_CHARACTER_LEVEL,
    MAX_CUSTOM_RACE_LENGTH,
    MAX_EQUIPMENT_ITEMS,
    MAX_IMAGE_URL_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_SPELLS,
    MIN_CHARACTER_LEVEL,
)
from dnd_roster.models.character import (
    RECORD_MODEL_CONFIG,
    AbilityScores,
    ArmorClass,
    CharacterName,
    ClassEntry,
    EquipmentItem,
    HitPoints,
    NonNegativeInt,
    ProficiencyBonus,
    SavingThrowProficiencies,
    Speed,
    Spell,
    coerce_skill_set,
)
from dnd_roster.models.enums import CharacterClass, CharacterKind, Race, Size, Skill


# =============================================================================
# Sanitisation
# =============================================================================

_SCRIPT_BLOCK = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_HTML_TAG = re.compile(r"<[^>]+>")


def strip_markup(text: str) -> str:
    """Remove script blocks and HTML tags from free text.

    Args:
        text: Raw user text.

    Returns:
        The text with ``<script>`` blocks (including their content) and any
        remaining tags removed, trimmed of surrounding whitespace.

    Example:
        >>> strip_markup("Brave <b>knight</b><script>alert(1)</script>")
        'Brave knight'
    """
    without_scripts = _SCRIPT_BLOCK.sub("", text)
    return _HTML_TAG.sub("", without_scripts).strip()


def _trim(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _sanitise(value: Any) -> Any:
    return strip_markup(value) if isinstance(value, str) else value


# =============================================================================
# Commands
# =============================================================================


class CharacterCreate(BaseModel):
    """Fields a user supplies to create a character.

    ``proficiency_bonus`` is accepted for compatibility with exported
    documents but is always replaced by the level-derived value.
    """

    model_config = RECORD_MODEL_CONFIG

    name: CharacterName
    kind: CharacterKind
    race: Race
    custom_race: str | None = Field(default=None, max_length=MAX_CUSTOM_RACE_LENGTH)
    size: Size = Size.MEDIUM
    classes: tuple[ClassEntry, ...] = Field(min_length=1)
    ability_scores: AbilityScores
    hit_points: HitPoints
    armor_class: ArmorClass
    speed: Speed = DEFAULT_SPEED
    proficiency_bonus: ProficiencyBonus | None = None
    saving_throws: SavingThrowProficiencies = Field(default_factory=SavingThrowProficiencies)
    skills: frozenset[Skill] = frozenset()
    equipment: tuple[EquipmentItem, ...] = Field(default=(), max_length=MAX_EQUIPMENT_ITEMS)
    spells: tuple[Spell, ...] = Field(default=(), max_length=MAX_SPELLS)
    backstory: str = Field(default="", max_length=MAX_BACKSTORY_LENGTH)
    notes: str = Field(default="", max_length=MAX_NOTES_LENGTH)
    image_url: str | None = Field(default=None, max_length=MAX_IMAGE_URL_LENGTH)
    is_public: bool = False
    party_id: str | None = None
    experience_points: NonNegativeInt = 0

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value: Any) -> Any:
        """Trim surrounding whitespace from the name."""
        return _trim(value)

    @field_validator("backstory", "notes", mode="before")
    @classmethod
    def sanitise_text(cls, value: Any) -> Any:
        """Strip markup from free-text fields."""
        return _sanitise(value)

    @field_validator("skills", mode="before")
    @classmethod
    def accept_skill_mapping(cls, value: Any) -> Any:
        """Accept ``{skill: bool}`` mappings for the skill set."""
        return coerce_skill_set(value)

    def record_fields(self) -> dict[str, Any]:
        """Fields to copy onto a new record, without the proficiency hint."""
        return self.model_dump(exclude={"proficiency_bonus"})


class CharacterUpdate(BaseModel):
    """A partial update. Only supplied fields are validated and applied.

    Nested values (classes, hit points, ability scores...) replace the
    stored value wholesale.
    """

    model_config = RECORD_MODEL_CONFIG

    NULLABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"custom_race", "image_url", "party_id"})

    name: CharacterName | None = None
    kind: CharacterKind | None = None
    race: Race | None = None
    custom_race: str | None = Field(default=None, max_length=MAX_CUSTOM_RACE_LENGTH)
    size: Size | None = None
    classes: tuple[ClassEntry, ...] | None = Field(default=None, min_length=1)
    ability_scores: AbilityScores | None = None
    hit_points: HitPoints | None = None
    armor_class: ArmorClass | None = None
    speed: Speed | None = None
    proficiency_bonus: ProficiencyBonus | None = None
    saving_throws: SavingThrowProficiencies | None = None
    skills: frozenset[Skill] | None = None
    equipment: tuple[EquipmentItem, ...] | None = Field(default=None, max_length=MAX_EQUIPMENT_ITEMS)
    spells: tuple[Spell, ...] | None = Field(default=None, max_length=MAX_SPELLS)
    backstory: str | None = Field(default=None, max_length=MAX_BACKSTORY_LENGTH)
    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)
    image_url: str | None = Field(default=None, max_length=MAX_IMAGE_URL_LENGTH)
    is_public: bool | None = None
    party_id: str | None = None
    experience_points: NonNegativeInt | None = None

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value: Any) -> Any:
        """Trim surrounding whitespace from the name."""
        return _trim(value)

    @field_validator("backstory", "notes", mode="before")
    @classmethod
    def sanitise_text(cls, value: Any) -> Any:
        """Strip markup from free-text fields."""
        return _sanitise(value)

    @field_validator("skills", mode="before")
    @classmethod
    def accept_skill_mapping(cls, value: Any) -> Any:
        """Accept ``{skill: bool}`` mappings for the skill set."""
        return coerce_skill_set(value)

    def changes(self) -> dict[str, Any]:
        """Supplied fields as a dict ready to merge onto a record dump.

        A field counts as supplied when it was explicitly set. ``None`` is
        only meaningful for the nullable fields, where it clears the value.
        The proficiency hint is dropped; the service derives it.
        """
        dumped = self.model_dump(exclude_unset=True, exclude={"proficiency_bonus"})
        return {
            key: value
            for key, value in dumped.items()
            if value is not None or key in self.NULLABLE_FIELDS
        }

    @property
    def is_empty(self) -> bool:
        """Whether the update changes nothing."""
        return not self.changes()


class CharacterFilter(BaseModel):
    """Search criteria for ``CharacterService.find_characters``.

    Unset criteria match everything. ``name`` is a case-insensitive
    substring match.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str | None = Field(default=None, min_length=1, max_length=100)
    kind: CharacterKind | None = None
    race: Race | None = None
    class_name: CharacterClass | None = None
    party_id: str | None = None
    is_public: bool | None = None
    min_level: int | None = Field(default=None, ge=MIN_CHARACTER_LEVEL, le=MAX_CHARACTER_LEVEL)
    max_level: int | None = Field(default=None, ge=MIN_CHARACTER_LEVEL, le=MAX_CHARACTER_LEVEL)

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value: Any) -> Any:
        """Trim surrounding whitespace from the name fragment."""
        return _trim(value)

    @model_validator(mode="after")
    def validate_level_range(self) -> "CharacterFilter":
        """Ensure min_level does not exceed max_level."""
        if (
            self.min_level is not None
            and self.max_level is not None
            and self.min_level > self.max_level
        ):
            msg = f"min_level ({self.min_level}) cannot exceed max_level ({self.max_level})"
            raise ValueError(msg)
        return self


__all__ = [
    "strip_markup",
    "CharacterCreate",
    "CharacterUpdate",
    "CharacterFilter",
]
