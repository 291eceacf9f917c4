"""Derived data contracts returned by the character service.

These are read-only projections computed from a ``CharacterRecord``. They
are never stored. Field names serialize to camelCase for API consumers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dnd_roster.models.character import (
    AbilityScores,
    ArmorClass,
    ClassEntry,
    ClassLevel,
    HitPoints,
)
from dnd_roster.models.enums import (
    Ability,
    CharacterClass,
    CharacterKind,
    EncumbranceLevel,
    Race,
    Skill,
    VitalityStatus,
)


CONTRACT_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)

T = TypeVar("T")


# =============================================================================
# Rule Engine Outputs
# =============================================================================


class CharacterStats(BaseModel):
    """Combat-relevant statistics derived from a record.

    Attributes:
        ability_modifiers: Modifier for each ability.
        saving_throws: Saving throw bonus for each ability.
        skills: Bonus for each of the 18 skills.
        total_level: Sum of class levels.
        class_levels: Levels per class.
        proficiency_bonus: Level-derived proficiency bonus.
        initiative_modifier: Dexterity modifier.
        armor_class: Armor class, passed through.
        speed: Walking speed, passed through.
        effective_hit_points: Current plus temporary HP.
        status: Vitality derived from current HP.
        is_alive: Current HP above zero.
        is_unconscious: Current HP at zero.
    """

    model_config = CONTRACT_MODEL_CONFIG

    ability_modifiers: dict[Ability, int]
    saving_throws: dict[Ability, int]
    skills: dict[Skill, int]
    total_level: int
    class_levels: dict[CharacterClass, int]
    proficiency_bonus: int
    initiative_modifier: int
    armor_class: int
    speed: int
    effective_hit_points: int
    status: VitalityStatus
    is_alive: bool
    is_unconscious: bool


class SpellcastingStats(BaseModel):
    """Spellcasting resources derived from a record's classes.

    ``spellcasting_ability`` is None when the character has no casting
    class; in that case the attack bonus is 0 and the save DC is 8.
    """

    model_config = CONTRACT_MODEL_CONFIG

    caster_level: int
    spell_slots: dict[int, int]
    spell_attack_bonus: int
    spell_save_dc: int = Field(alias="spellSaveDC")
    spellcasting_ability: Ability | None = None


class EquipmentWeight(BaseModel):
    """Carried weight split by whether items are equipped."""

    model_config = CONTRACT_MODEL_CONFIG

    total: float
    equipped: float
    carried: float


class CarryingCapacity(BaseModel):
    """Carrying capacity and the encumbrance tier of the current load."""

    model_config = CONTRACT_MODEL_CONFIG

    maximum: int
    current: float
    encumbrance_level: EncumbranceLevel


class ExperienceInfo(BaseModel):
    """Position on the XP table.

    At level 20 ``next_level_xp`` repeats the level 20 threshold and
    ``xp_to_next_level`` is 0.
    """

    model_config = CONTRACT_MODEL_CONFIG

    current_xp: int = Field(alias="currentXP")
    current_level: int
    next_level_xp: int = Field(alias="nextLevelXP")
    xp_to_next_level: int = Field(alias="xpToNextLevel")
    is_max_level: bool


class CharacterSummary(BaseModel):
    """Reduced projection of a record for list views."""

    model_config = CONTRACT_MODEL_CONFIG

    id: UUID
    name: str
    race: Race
    kind: CharacterKind
    total_level: int
    classes: tuple[ClassEntry, ...]
    hit_points: HitPoints
    armor_class: int
    is_public: bool


# =============================================================================
# Access
# =============================================================================


class CharacterPermissions(BaseModel):
    """What a requester may do with a character."""

    model_config = CONTRACT_MODEL_CONFIG

    can_view: bool
    can_edit: bool
    can_delete: bool
    can_share: bool
    is_owner: bool
    is_public: bool


# =============================================================================
# Service Payloads
# =============================================================================


class CharacterTemplate(BaseModel):
    """A reusable single-class starting point for new characters.

    Attributes:
        name: Template name, used as the default character name.
        kind: Player character or NPC.
        race: Race of characters built from the template.
        class_name: The single class.
        level: Level in that class.
        ability_scores: Starting ability scores.
        hit_points: Maximum hit points.
        armor_class: Armor class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str = Field(min_length=1, max_length=100)
    kind: CharacterKind
    race: Race
    class_name: CharacterClass
    level: ClassLevel
    ability_scores: AbilityScores
    hit_points: int = Field(ge=1)
    armor_class: ArmorClass


class DeletionReceipt(BaseModel):
    """Returned by a soft delete; the token undoes it until ``expires_at``."""

    model_config = CONTRACT_MODEL_CONFIG

    character_id: UUID
    restore_token: str
    expires_at: datetime


class Page(BaseModel, Generic[T]):
    """One page of a listing.

    Attributes:
        items: Records on this page.
        page: 1-based page number.
        limit: Page size.
        total: Matching records across all pages.
        total_pages: Number of pages at this size.
    """

    model_config = CONTRACT_MODEL_CONFIG

    items: list[T]
    page: int
    limit: int
    total: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        """Whether a further page exists."""
        return self.page < self.total_pages


class BulkFailure(BaseModel):
    """An input that a bulk operation could not apply."""

    model_config = CONTRACT_MODEL_CONFIG

    data: Any
    code: str
    error: str


class BulkOperationResult(BaseModel, Generic[T]):
    """Outcome of a bulk operation; one entry per input."""

    model_config = CONTRACT_MODEL_CONFIG

    successful: list[T] = Field(default_factory=list)
    failed: list[BulkFailure] = Field(default_factory=list)


__all__ = [
    "CONTRACT_MODEL_CONFIG",
    "CharacterStats",
    "SpellcastingStats",
    "EquipmentWeight",
    "CarryingCapacity",
    "ExperienceInfo",
    "CharacterSummary",
    "CharacterPermissions",
    "CharacterTemplate",
    "DeletionReceipt",
    "Page",
    "BulkFailure",
    "BulkOperationResult",
]
