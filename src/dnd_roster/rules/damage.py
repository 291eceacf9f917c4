"""Hit point state transitions.

Every function takes a frozen ``HitPoints`` (or ``CharacterRecord``)
snapshot and returns a new one; nothing is mutated in place. Vitality is
recomputed from ``current`` on every read.

Example:
    >>> hp = HitPoints(maximum=20, current=20, temporary=5)
    >>> take_damage(hp, 8)
    HitPoints(maximum=20, current=17, temporary=0)
"""

from __future__ import annotations

from dnd_roster.models.character import CharacterRecord, HitPoints
from dnd_roster.models.enums import VitalityStatus


# =============================================================================
# HitPoints Transitions
# =============================================================================


def take_damage(hp: HitPoints, amount: int) -> HitPoints:
    """Apply damage, draining temporary HP before current HP.

    Args:
        hp: Current hit point snapshot.
        amount: Damage dealt. Zero or negative amounts change nothing.

    Returns:
        New snapshot with ``current`` floored at 0.
    """
    if amount <= 0:
        return hp

    absorbed = min(amount, hp.temporary)
    remaining = amount - absorbed
    return hp.model_copy(
        update={
            "temporary": hp.temporary - absorbed,
            "current": max(0, hp.current - remaining),
        }
    )


def heal(hp: HitPoints, amount: int) -> HitPoints:
    """Restore current HP, capped at maximum.

    Args:
        hp: Current hit point snapshot.
        amount: Healing received. Zero or negative amounts change nothing.

    Returns:
        New snapshot.
    """
    if amount <= 0:
        return hp
    return hp.model_copy(update={"current": min(hp.maximum, hp.current + amount)})


def add_temporary_hp(hp: HitPoints, amount: int) -> HitPoints:
    """Grant temporary HP. Grants do not stack; the larger pool is kept."""
    if amount <= 0:
        return hp
    return hp.model_copy(update={"temporary": max(hp.temporary, amount)})


def effective_hp(hp: HitPoints) -> int:
    """Current plus temporary hit points."""
    return hp.current + hp.temporary


def is_alive(hp: HitPoints) -> bool:
    return hp.current > 0


def is_unconscious(hp: HitPoints) -> bool:
    return hp.current <= 0


def vitality_status(hp: HitPoints) -> VitalityStatus:
    """Derive vitality from current HP.

    Only ``ALIVE`` and ``UNCONSCIOUS`` are produced; dropping to 0 HP never
    kills a character outright.
    """
    return VitalityStatus.ALIVE if is_alive(hp) else VitalityStatus.UNCONSCIOUS


# =============================================================================
# Record Wrappers
# =============================================================================


def apply_damage(record: CharacterRecord, amount: int) -> CharacterRecord:
    """Return a record snapshot with damage applied."""
    return record.model_copy(update={"hit_points": take_damage(record.hit_points, amount)})


def apply_healing(record: CharacterRecord, amount: int) -> CharacterRecord:
    """Return a record snapshot with healing applied."""
    return record.model_copy(update={"hit_points": heal(record.hit_points, amount)})


def apply_temporary_hp(record: CharacterRecord, amount: int) -> CharacterRecord:
    """Return a record snapshot with temporary HP granted."""
    return record.model_copy(
        update={"hit_points": add_temporary_hp(record.hit_points, amount)}
    )


__all__ = [
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
]
