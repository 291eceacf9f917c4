"""Pure rule engines for D&D 5E character statistics.

Every function takes frozen record snapshots and returns new values; none
of them touch storage.

Submodules:
    validation: Creation/update validation gate
    stats: Ability modifiers, saves, skills and the stats projection
    progression: Level aggregation, proficiency bonus and XP
    damage: Hit point transitions and vitality
    spellcasting: Caster level, slots, attack bonus and save DC
    encumbrance: Carrying capacity and encumbrance tiers
"""

from __future__ import annotations

from dnd_roster.rules.damage import (
    add_temporary_hp,
    apply_damage,
    apply_healing,
    apply_temporary_hp,
    effective_hp,
    heal,
    is_alive,
    is_unconscious,
    take_damage,
    vitality_status,
)
from dnd_roster.rules.encumbrance import (
    calculate_carrying_capacity,
    carrying_capacity,
    encumbrance_level,
    equipment_weight,
)
from dnd_roster.rules.progression import (
    class_levels,
    experience_info,
    level_for_experience,
    proficiency_bonus_for_classes,
    proficiency_bonus_for_level,
    total_level,
)
from dnd_roster.rules.spellcasting import (
    CasterProfile,
    SpellcastingRules,
    calculate_spellcasting_stats,
    caster_level,
    spell_slots,
    spellcasting_ability,
)
from dnd_roster.rules.stats import (
    ability_modifier,
    ability_modifiers,
    calculate_character_stats,
    character_summary,
    initiative_modifier,
    saving_throw_bonuses,
    skill_bonuses,
)
from dnd_roster.rules.validation import (
    check_class_rules,
    format_violations,
    parse_character_data,
    parse_update_data,
    validate_character_data,
    validate_update_data,
)


__all__ = [
    # Validation
    "validate_character_data",
    "validate_update_data",
    "parse_character_data",
    "parse_update_data",
    "check_class_rules",
    "format_violations",
    # Stats
    "ability_modifier",
    "ability_modifiers",
    "saving_throw_bonuses",
    "skill_bonuses",
    "initiative_modifier",
    "calculate_character_stats",
    "character_summary",
    # Progression
    "total_level",
    "class_levels",
    "proficiency_bonus_for_level",
    "proficiency_bonus_for_classes",
    "level_for_experience",
    "experience_info",
    # Damage
    "take_damage",
    "heal",
    "add_temporary_hp",
    "effective_hp",
    "is_alive",
    "is_unconscious",
    "vitality_status",
    "apply_damage",
    "apply_healing",
    "apply_temporary_hp",
    # Spellcasting
    "CasterProfile",
    "SpellcastingRules",
    "caster_level",
    "spell_slots",
    "spellcasting_ability",
    "calculate_spellcasting_stats",
    # Encumbrance
    "carrying_capacity",
    "equipment_weight",
    "encumbrance_level",
    "calculate_carrying_capacity",
]
