"""Pydantic V2 schemas for the D&D 5E character roster.

This package provides the data model layer: the character record and its
value objects, the commands that create and update it, the derived data
contracts, and the static progression tables.

Submodules:
    enums: Enumeration types (Ability, Skill, CharacterClass, Race, etc.)
    character: CharacterRecord and its value objects
    commands: CharacterCreate and CharacterUpdate
    stats: Derived contracts (CharacterStats, SpellcastingStats, etc.)
    progression: XP, hit die and spell slot tables

Example:
    >>> from dnd_roster.models import CharacterCreate, CharacterClass
    >>> command = CharacterCreate.model_validate(payload)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dnd_roster.models.enums import (
    SKILL_ABILITIES,
    Ability,
    CasterProgression,
    CharacterClass,
    CharacterKind,
    EncumbranceLevel,
    LifecycleState,
    Race,
    Size,
    Skill,
    SpellSchool,
    VitalityStatus,
)

# =============================================================================
# Record
# =============================================================================
from dnd_roster.models.character import (
    AbilityScores,
    ActiveLifecycle,
    CharacterRecord,
    ClassEntry,
    EquipmentItem,
    HitPoints,
    Lifecycle,
    PendingDeletion,
    SavingThrowProficiencies,
    Spell,
)

# =============================================================================
# Commands
# =============================================================================
from dnd_roster.models.commands import (
    CharacterCreate,
    CharacterFilter,
    CharacterUpdate,
    strip_markup,
)

# =============================================================================
# Derived Contracts
# =============================================================================
from dnd_roster.models.stats import (
    BulkFailure,
    BulkOperationResult,
    CarryingCapacity,
    CharacterPermissions,
    CharacterStats,
    CharacterSummary,
    CharacterTemplate,
    DeletionReceipt,
    EquipmentWeight,
    ExperienceInfo,
    Page,
    SpellcastingStats,
)


__all__ = [
    # Enums
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
    # Record
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
    # Commands
    "CharacterCreate",
    "CharacterUpdate",
    "CharacterFilter",
    "strip_markup",
    # Contracts
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
