"""Import and export of character documents.

An ``ImportRegistry`` maps a format tag to one parser. A parser turns an
external payload into a creation payload; the registry then runs the
result through the validation gate. Adding a format means registering one
parser:

    >>> registry = default_registry()
    >>> registry.register("roll20", parse_roll20)
    >>> command = registry.parse("roll20", payload)

Built-in formats:
    json: The roster's own export document (see ``export_character``).
    dndbeyond: D&D Beyond style sheets (``stats.str``, ``hp``, ``ac``).
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from dnd_roster.core.exceptions import InvalidCharacterDataError, UnsupportedImportFormatError
from dnd_roster.core.logging import get_logger
from dnd_roster.models.character import CharacterRecord
from dnd_roster.models.commands import CharacterCreate
from dnd_roster.models.enums import CharacterClass, Race
from dnd_roster.rules.validation import parse_character_data

logger = get_logger(__name__)


ImportParser = Callable[[Any], dict[str, Any]]
"""Turns an external payload into a creation payload."""

EXPORT_EXCLUDED_FIELDS = frozenset(
    {"id", "owner_id", "party_id", "created_at", "updated_at", "revision", "lifecycle"}
)
"""Record fields that belong to the roster rather than the character."""

_DNDBEYOND_ABILITIES = {
    "str": "strength",
    "dex": "dexterity",
    "con": "constitution",
    "int": "intelligence",
    "wis": "wisdom",
    "cha": "charisma",
}


# =============================================================================
# Registry
# =============================================================================


class ImportRegistry:
    """Registry of import parsers keyed by format tag.

    Tags are case-insensitive. Registering an existing tag replaces its
    parser.
    """

    def __init__(self, parsers: Mapping[str, ImportParser] | None = None) -> None:
        self._parsers: dict[str, ImportParser] = {}
        for tag, parser in (parsers or {}).items():
            self.register(tag, parser)

    @staticmethod
    def _normalize(tag: str) -> str:
        return tag.strip().lower()

    def register(self, tag: str, parser: ImportParser) -> None:
        """Register a parser for a format tag."""
        self._parsers[self._normalize(tag)] = parser
        logger.debug("Registered import format", format=self._normalize(tag))

    def supports(self, tag: str) -> bool:
        return self._normalize(tag) in self._parsers

    @property
    def formats(self) -> list[str]:
        """Registered tags, sorted."""
        return sorted(self._parsers)

    def parse(self, tag: str, payload: Any) -> CharacterCreate:
        """Parse and validate an external payload.

        Args:
            tag: Format tag selecting the parser.
            payload: The external document.

        Returns:
            A validated creation command.

        Raises:
            UnsupportedImportFormatError: If no parser is registered for ``tag``.
            InvalidCharacterDataError: If the parser rejects the payload or the
                parsed data fails validation.
            InvalidMulticlassCombinationError: If the parsed classes repeat.
            InvalidCharacterLevelError: If the parsed total level is out of range.
        """
        parser = self._parsers.get(self._normalize(tag))
        if parser is None:
            raise UnsupportedImportFormatError(tag, supported=self.formats)

        try:
            data = parser(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise InvalidCharacterDataError(
                f"Could not parse {self._normalize(tag)} payload",
                validation_errors=[
                    {"field": "payload", "message": str(exc), "type": "parse_error"}
                ],
            ) from exc

        return parse_character_data(data)


# =============================================================================
# Parsers
# =============================================================================


def _as_mapping(payload: Any) -> dict[str, Any]:
    if isinstance(payload, (str, bytes)):
        payload = json.loads(payload)
    if not isinstance(payload, Mapping):
        raise TypeError(f"Expected a JSON object, got {type(payload).__name__}")
    return dict(payload)


def _sheet_mapping(value: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{field} must be an object, got {type(value).__name__}")
    return value


def parse_json(payload: Any) -> dict[str, Any]:
    """Parse the roster's own export document.

    Accepts the exported mapping or its JSON text.
    """
    return _as_mapping(payload)


def _dndbeyond_race(value: Any) -> dict[str, Any]:
    name = str(value or "human").strip()
    slug = name.lower().replace(" ", "-")
    if slug in {race.value for race in Race}:
        return {"race": slug}
    return {"race": Race.CUSTOM.value, "custom_race": name}


def _dndbeyond_classes(data: Mapping[str, Any]) -> list[dict[str, Any]]:
    raw = data.get("classes")
    if raw is None:
        raw = [{"name": data["class"], "level": data.get("level", 1)}]

    classes = []
    for index, raw_entry in enumerate(raw):
        entry = _sheet_mapping(raw_entry, f"classes.{index}")
        class_entry: dict[str, Any] = {
            "class_name": CharacterClass(str(entry["name"]).strip().lower()).value,
            "level": int(entry.get("level", 1)),
        }
        if entry.get("subclass"):
            class_entry["subclass"] = entry["subclass"]
        classes.append(class_entry)
    return classes


def parse_dndbeyond(payload: Any) -> dict[str, Any]:
    """Parse a D&D Beyond style character sheet.

    Missing ability scores default to 10, missing hit points to 1, armor
    class to 10 and speed to 30. Equipment given as plain strings becomes
    one item of that name.

    Raises:
        ValueError: If the name is missing.
        KeyError: If no class is given.
        TypeError: If stats or a class entry is not an object.
    """
    data = _as_mapping(payload)
    if not data.get("name"):
        raise ValueError("name is required")

    stats = _sheet_mapping(data.get("stats") or {}, "stats")
    hp = int(data.get("hp") or 1)
    equipment = [
        {"name": item} if isinstance(item, str) else item
        for item in data.get("equipment") or []
    ]

    return {
        "name": data["name"],
        "kind": data.get("type", "pc"),
        **_dndbeyond_race(data.get("race")),
        "classes": _dndbeyond_classes(data),
        "ability_scores": {
            full_name: int(stats.get(short, 10) or 10)
            for short, full_name in _DNDBEYOND_ABILITIES.items()
        },
        "hit_points": {"maximum": hp, "current": hp, "temporary": 0},
        "armor_class": int(data.get("ac") or 10),
        "speed": int(data.get("speed") or 30),
        "equipment": equipment,
        "backstory": data.get("backstory") or "",
    }


def default_registry() -> ImportRegistry:
    """Registry holding the built-in formats."""
    return ImportRegistry({"json": parse_json, "dndbeyond": parse_dndbeyond})


# =============================================================================
# Export
# =============================================================================


def export_character(record: CharacterRecord) -> dict[str, Any]:
    """Serialize a record to the ``json`` import format.

    Identity, ownership, party, timestamps, revision and lifecycle are
    left out, so the document can be imported by any owner.
    """
    return record.model_dump(mode="json", by_alias=True, exclude=set(EXPORT_EXCLUDED_FIELDS))


__all__ = [
    "ImportParser",
    "ImportRegistry",
    "EXPORT_EXCLUDED_FIELDS",
    "parse_json",
    "parse_dndbeyond",
    "default_registry",
    "export_character",
]
