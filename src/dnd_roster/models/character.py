"""Pydantic V2 schemas for the character record.

This module defines ``CharacterRecord`` and the value objects it is built
from. Records are frozen snapshots: every mutation produces a new record,
which keeps the calculation engines referentially transparent.

Field names are snake_case in Python and camelCase on the wire; both are
accepted on input.

Example:
    >>> record = CharacterRecord(
    ...     owner_id="user-1",
    ...     name="Thorin",
    ...     kind="pc",
    ...     race="dwarf",
    ...     classes=[{"class_name": "fighter", "level": 3}],
    ...     ability_scores={"strength": 16, "dexterity": 12, "constitution": 15,
    ...                     "intelligence": 10, "wisdom": 11, "charisma": 8},
    ...     hit_points={"maximum": 28, "current": 28},
    ...     armor_class=18,
    ... )
    >>> record.total_level
    3
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Literal
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from dnd_roster.core.constants import (
    DEFAULT_SPEED,
    MAX_ABILITY_SCORE,
    MAX_ARMOR_CLASS,
    MAX_BACKSTORY_LENGTH,
    MAX_CHARACTER_LEVEL,
    MAX_CUSTOM_RACE_LENGTH,
    MAX_EQUIPMENT_ITEMS,
    MAX_HIT_DIE,
    MAX_IMAGE_URL_LENGTH,
    MAX_ITEM_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_PROFICIENCY_BONUS,
    MAX_SPEED,
    MAX_SPELL_DESCRIPTION_LENGTH,
    MAX_SPELL_LEVEL,
    MAX_SPELLS,
    MAX_SUBCLASS_LENGTH,
    MIN_ABILITY_SCORE,
    MIN_ARMOR_CLASS,
    MIN_CHARACTER_LEVEL,
    MIN_HIT_DIE,
    MIN_PROFICIENCY_BONUS,
)
from dnd_roster.models.enums import (
    Ability,
    CharacterClass,
    CharacterKind,
    LifecycleState,
    Race,
    Size,
    Skill,
    SpellSchool,
)
from dnd_roster.models.progression import get_hit_die


# =============================================================================
# Shared Configuration and Type Definitions
# =============================================================================


RECORD_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)
"""Config shared by the record and its value objects."""

AbilityScore = Annotated[
    int,
    Field(ge=MIN_ABILITY_SCORE, le=MAX_ABILITY_SCORE, description="Ability score (1-30)"),
]
ClassLevel = Annotated[
    int,
    Field(ge=MIN_CHARACTER_LEVEL, le=MAX_CHARACTER_LEVEL, description="Class level (1-20)"),
]
ArmorClass = Annotated[
    int,
    Field(ge=MIN_ARMOR_CLASS, le=MAX_ARMOR_CLASS, description="Armor class (1-30)"),
]
ProficiencyBonus = Annotated[
    int,
    Field(ge=MIN_PROFICIENCY_BONUS, le=MAX_PROFICIENCY_BONUS, description="Proficiency bonus"),
]
Speed = Annotated[int, Field(ge=0, le=MAX_SPEED, description="Walking speed in feet")]
NonNegativeInt = Annotated[int, Field(ge=0)]
CharacterName = Annotated[str, Field(min_length=1, max_length=MAX_NAME_LENGTH)]


def coerce_skill_set(value: Any) -> Any:
    """Accept a skill mapping of ``{skill: proficient}`` as a skill set.

    Stored documents from the legacy format keep skill proficiency as a
    boolean map; only the keys mapped to True are proficiencies.
    """
    if isinstance(value, dict):
        return [skill for skill, proficient in value.items() if proficient]
    return value


# =============================================================================
# Value Objects
# =============================================================================


class AbilityScores(BaseModel):
    """The six ability scores of a character, each between 1 and 30."""

    model_config = RECORD_MODEL_CONFIG

    strength: AbilityScore
    dexterity: AbilityScore
    constitution: AbilityScore
    intelligence: AbilityScore
    wisdom: AbilityScore
    charisma: AbilityScore

    def get_score(self, ability: Ability) -> int:
        """Get the score for a specific ability.

        Args:
            ability: The ability to read.

        Returns:
            The ability score value.
        """
        return getattr(self, ability.value)


class HitPoints(BaseModel):
    """Hit point pools.

    Attributes:
        maximum: Maximum hit points.
        current: Current hit points, never above maximum.
        temporary: Temporary hit points, consumed before current.
    """

    model_config = RECORD_MODEL_CONFIG

    maximum: NonNegativeInt
    current: NonNegativeInt
    temporary: NonNegativeInt = 0

    @model_validator(mode="after")
    def validate_current_within_maximum(self) -> "HitPoints":
        """Ensure current HP does not exceed maximum HP."""
        if self.current > self.maximum:
            msg = (
                f"Current hit points ({self.current}) cannot exceed "
                f"maximum hit points ({self.maximum})"
            )
            raise ValueError(msg)
        return self


class ClassEntry(BaseModel):
    """Levels taken in a single class.

    Attributes:
        class_name: The class.
        level: Levels in this class (1-20).
        subclass: Optional subclass name.
        hit_die: Hit die size; defaults to the class's standard die.
    """

    model_config = RECORD_MODEL_CONFIG

    class_name: CharacterClass
    level: ClassLevel
    subclass: str | None = Field(default=None, min_length=1, max_length=MAX_SUBCLASS_LENGTH)
    hit_die: Annotated[int, Field(ge=MIN_HIT_DIE, le=MAX_HIT_DIE)]

    @model_validator(mode="before")
    @classmethod
    def default_hit_die(cls, data: Any) -> Any:
        """Fill in the class's standard hit die when none is given."""
        if isinstance(data, dict) and "hit_die" not in data and "hitDie" not in data:
            class_name = data.get("class_name", data.get("className"))
            if isinstance(class_name, str):
                return {**data, "hit_die": get_hit_die(class_name)}
        return data


class SavingThrowProficiencies(BaseModel):
    """Saving throw proficiency flags, one per ability."""

    model_config = RECORD_MODEL_CONFIG

    strength: bool = False
    dexterity: bool = False
    constitution: bool = False
    intelligence: bool = False
    wisdom: bool = False
    charisma: bool = False

    def is_proficient(self, ability: Ability) -> bool:
        """Check whether the character is proficient in an ability's saves."""
        return getattr(self, ability.value)


class EquipmentItem(BaseModel):
    """An equipment entry. Weight is per unit, in pounds."""

    model_config = RECORD_MODEL_CONFIG

    name: Annotated[str, Field(min_length=1, max_length=100)]
    quantity: NonNegativeInt = 1
    weight: float = Field(default=0.0, ge=0)
    value: float = Field(default=0.0, ge=0)
    description: str | None = Field(default=None, max_length=MAX_ITEM_DESCRIPTION_LENGTH)
    equipped: bool = False
    magical: bool = False

    @property
    def total_weight(self) -> float:
        """Weight of the whole stack."""
        return self.weight * self.quantity


class Spell(BaseModel):
    """A spell known or prepared by the character."""

    model_config = RECORD_MODEL_CONFIG

    name: Annotated[str, Field(min_length=1, max_length=100)]
    level: Annotated[int, Field(ge=0, le=MAX_SPELL_LEVEL, description="0 for cantrips")]
    school: SpellSchool
    casting_time: Annotated[str, Field(min_length=1, max_length=50)]
    range: Annotated[str, Field(min_length=1, max_length=50)]
    components: Annotated[str, Field(min_length=1, max_length=200)]
    duration: Annotated[str, Field(min_length=1, max_length=100)]
    description: Annotated[str, Field(min_length=1, max_length=MAX_SPELL_DESCRIPTION_LENGTH)]
    prepared: bool = False


# =============================================================================
# Lifecycle
# =============================================================================


class ActiveLifecycle(BaseModel):
    """The record is live and visible to its readers."""

    model_config = RECORD_MODEL_CONFIG

    state: Literal["active"] = LifecycleState.ACTIVE.value


class PendingDeletion(BaseModel):
    """The record was soft-deleted and can be restored until ``expires_at``.

    Attributes:
        expires_at: End of the restore window (UTC).
        restore_token: Single-use token that undoes the deletion.
    """

    model_config = RECORD_MODEL_CONFIG

    state: Literal["pending_deletion"] = LifecycleState.PENDING_DELETION.value
    expires_at: datetime
    restore_token: str = Field(min_length=16)

    def is_expired(self, now: datetime) -> bool:
        """Check whether the restore window has closed."""
        return now >= self.expires_at


Lifecycle = Annotated[ActiveLifecycle | PendingDeletion, Field(discriminator="state")]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


# =============================================================================
# Character Record
# =============================================================================


class CharacterRecord(BaseModel):
    """A player character or NPC as stored in the roster.

    Total level is derived from ``classes`` and never stored. The stored
    ``proficiency_bonus`` caches the level-derived value; the service
    rewrites it on every mutation.

    Attributes:
        id: Unique character identifier.
        owner_id: Identity of the owning user.
        name: Character name.
        kind: Player character or NPC.
        race: Character race.
        custom_race: Free-text race when ``race`` is custom.
        size: Size category.
        classes: Class entries, one per distinct class.
        ability_scores: The six ability scores.
        hit_points: Maximum, current and temporary HP.
        armor_class: Armor class (not derived from abilities).
        speed: Walking speed in feet.
        proficiency_bonus: Cached proficiency bonus.
        saving_throws: Saving throw proficiency flags.
        skills: Skills the character is proficient in.
        equipment: Carried and equipped items.
        spells: Known spells.
        backstory: Free-text backstory.
        notes: Free-text notes.
        image_url: Optional portrait URL.
        is_public: Whether any user may view the character.
        party_id: Optional party association.
        experience_points: Cumulative XP.
        revision: Optimistic concurrency marker.
        lifecycle: Active or pending deletion.
    """

    model_config = RECORD_MODEL_CONFIG

    id: UUID = Field(default_factory=uuid4)
    owner_id: str = Field(min_length=1)
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
    proficiency_bonus: ProficiencyBonus = MIN_PROFICIENCY_BONUS
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
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    revision: int = Field(default=1, ge=1)
    lifecycle: Lifecycle = Field(default_factory=ActiveLifecycle)

    @field_validator("skills", mode="before")
    @classmethod
    def accept_skill_mapping(cls, value: Any) -> Any:
        """Accept ``{skill: bool}`` mappings for the skill set."""
        return coerce_skill_set(value)

    @field_serializer("skills")
    def serialize_skills(self, skills: frozenset[Skill]) -> list[str]:
        """Serialize skills in a stable order."""
        return sorted(skill.value for skill in skills)

    @model_validator(mode="after")
    def validate_classes(self) -> "CharacterRecord":
        """Ensure each class appears once and the total level is 1-20."""
        names = [entry.class_name.value for entry in self.classes]
        if len(set(names)) != len(names):
            raise ValueError(f"Each class may appear only once: {', '.join(names)}")

        total = self.total_level
        if not MIN_CHARACTER_LEVEL <= total <= MAX_CHARACTER_LEVEL:
            raise ValueError(
                f"Total level ({total}) must be between "
                f"{MIN_CHARACTER_LEVEL} and {MAX_CHARACTER_LEVEL}"
            )
        return self

    @property
    def total_level(self) -> int:
        """Sum of all class levels."""
        return sum(entry.level for entry in self.classes)

    @property
    def is_active(self) -> bool:
        """Whether the record is live (not pending deletion)."""
        return isinstance(self.lifecycle, ActiveLifecycle)

    def class_entry(self, class_name: CharacterClass) -> ClassEntry | None:
        """Get the entry for a class, if the character has levels in it."""
        for entry in self.classes:
            if entry.class_name == class_name:
                return entry
        return None


__all__ = [
    "RECORD_MODEL_CONFIG",
    "AbilityScore",
    "AbilityScores",
    "HitPoints",
    "ClassEntry",
    "SavingThrowProficiencies",
    "EquipmentItem",
    "Spell",
    "ActiveLifecycle",
    "PendingDeletion",
    "Lifecycle",
    "CharacterRecord",
    "coerce_skill_set",
    "utc_now",
]
