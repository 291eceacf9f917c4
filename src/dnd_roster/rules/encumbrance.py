"""Carrying capacity, equipment weight and encumbrance tiers.

Tiers follow the variant encumbrance rule, with the Strength multipliers
taken from ``EncumbranceSettings``:

    none        weight <= light_multiplier * STR      (default 5)
    light       weight <= heavy_multiplier * STR      (default 10)
    heavy       weight <= capacity_multiplier * STR   (default 15, the capacity)
    overloaded  weight >  capacity
"""

from __future__ import annotations

from dnd_roster.core.config import EncumbranceSettings, get_settings
from dnd_roster.models.character import CharacterRecord
from dnd_roster.models.enums import EncumbranceLevel
from dnd_roster.models.stats import CarryingCapacity, EquipmentWeight


def _settings(settings: EncumbranceSettings | None) -> EncumbranceSettings:
    return settings if settings is not None else get_settings().encumbrance


def carrying_capacity(strength: int, settings: EncumbranceSettings | None = None) -> int:
    """Maximum weight in pounds a character can carry.

    Example:
        >>> carrying_capacity(16)
        240
    """
    return strength * _settings(settings).capacity_multiplier


def equipment_weight(record: CharacterRecord) -> EquipmentWeight:
    """Total weight of the equipment list, split by equipped state."""
    equipped = sum(item.total_weight for item in record.equipment if item.equipped)
    carried = sum(item.total_weight for item in record.equipment if not item.equipped)
    return EquipmentWeight(total=equipped + carried, equipped=equipped, carried=carried)


def encumbrance_level(
    weight: float,
    strength: int,
    settings: EncumbranceSettings | None = None,
) -> EncumbranceLevel:
    """Classify a carried weight into an encumbrance tier.

    Args:
        weight: Total carried weight in pounds.
        strength: Strength score.
        settings: Tier multipliers; defaults to the application settings.

    Returns:
        The encumbrance tier for the load.
    """
    config = _settings(settings)
    if weight <= strength * config.light_multiplier:
        return EncumbranceLevel.NONE
    if weight <= strength * config.heavy_multiplier:
        return EncumbranceLevel.LIGHT
    if weight <= strength * config.capacity_multiplier:
        return EncumbranceLevel.HEAVY
    return EncumbranceLevel.OVERLOADED


def calculate_carrying_capacity(
    record: CharacterRecord,
    settings: EncumbranceSettings | None = None,
) -> CarryingCapacity:
    """Capacity, current load and tier for a record."""
    config = _settings(settings)
    strength = record.ability_scores.strength
    weight = equipment_weight(record).total
    return CarryingCapacity(
        maximum=carrying_capacity(strength, config),
        current=weight,
        encumbrance_level=encumbrance_level(weight, strength, config),
    )


__all__ = [
    "carrying_capacity",
    "equipment_weight",
    "encumbrance_level",
    "calculate_carrying_capacity",
]
