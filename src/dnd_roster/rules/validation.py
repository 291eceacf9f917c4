"""Validation gate for character creation and update commands.

Schema checks (types, ranges, required fields, unknown fields) run first
through the pydantic command models. Business rules on the class list run
only when the schema passes:

1. A repeated class name is an invalid multiclass combination.
2. A total level outside 1-20 is an invalid character level.

Nothing here touches storage or checks ownership.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from dnd_roster.core.constants import MAX_CHARACTER_LEVEL, MIN_CHARACTER_LEVEL
from dnd_roster.core.exceptions import (
    CharacterServiceError,
    InvalidCharacterDataError,
    InvalidCharacterLevelError,
    InvalidMulticlassCombinationError,
)
from dnd_roster.core.result import ServiceResult, failure_result, success_result
from dnd_roster.models.character import ClassEntry
from dnd_roster.models.commands import CharacterCreate, CharacterUpdate


# =============================================================================
# Helpers
# =============================================================================


def format_violations(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten a pydantic ValidationError into field violations.

    Args:
        exc: The error raised by model validation.

    Returns:
        One ``{field, message, type}`` entry per error, with the field as a
        dotted location path (``classes.0.level``).
    """
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "__root__",
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def check_class_rules(classes: Iterable[ClassEntry]) -> None:
    """Apply the multiclass business rules.

    Raises:
        InvalidMulticlassCombinationError: If a class name appears twice.
        InvalidCharacterLevelError: If the summed level is outside 1-20.
    """
    entries = list(classes)
    names = [entry.class_name.value for entry in entries]
    if len(set(names)) != len(names):
        raise InvalidMulticlassCombinationError(names)

    total = sum(entry.level for entry in entries)
    if not MIN_CHARACTER_LEVEL <= total <= MAX_CHARACTER_LEVEL:
        raise InvalidCharacterLevelError(total)


# =============================================================================
# Raising API
# =============================================================================


def parse_character_data(data: Mapping[str, Any] | CharacterCreate) -> CharacterCreate:
    """Validate a creation command.

    Args:
        data: Raw command payload, or an already-built command.

    Returns:
        The validated command.

    Raises:
        InvalidCharacterDataError: If the schema check fails.
        InvalidMulticlassCombinationError: If a class repeats.
        InvalidCharacterLevelError: If the total level is out of range.
    """
    if isinstance(data, CharacterCreate):
        command = data
    else:
        try:
            command = CharacterCreate.model_validate(data)
        except ValidationError as exc:
            raise InvalidCharacterDataError(validation_errors=format_violations(exc)) from exc

    check_class_rules(command.classes)
    return command


def parse_update_data(data: Mapping[str, Any] | CharacterUpdate) -> CharacterUpdate:
    """Validate an update command. Only supplied fields are checked.

    Raises:
        InvalidCharacterDataError: If the schema check fails.
        InvalidMulticlassCombinationError: If a supplied class list repeats a class.
        InvalidCharacterLevelError: If a supplied class list is out of range.
    """
    if isinstance(data, CharacterUpdate):
        command = data
    else:
        try:
            command = CharacterUpdate.model_validate(data)
        except ValidationError as exc:
            raise InvalidCharacterDataError(validation_errors=format_violations(exc)) from exc

    if command.classes is not None:
        check_class_rules(command.classes)
    return command


# =============================================================================
# Result API
# =============================================================================


def validate_character_data(data: Mapping[str, Any]) -> ServiceResult[CharacterCreate]:
    """Validate a creation command, reporting failures as a result."""
    try:
        return success_result(parse_character_data(data))
    except CharacterServiceError as exc:
        return failure_result(exc)


def validate_update_data(data: Mapping[str, Any]) -> ServiceResult[CharacterUpdate]:
    """Validate an update command, reporting failures as a result."""
    try:
        return success_result(parse_update_data(data))
    except CharacterServiceError as exc:
        return failure_result(exc)


__all__ = [
    "format_violations",
    "check_class_rules",
    "parse_character_data",
    "parse_update_data",
    "validate_character_data",
    "validate_update_data",
]
