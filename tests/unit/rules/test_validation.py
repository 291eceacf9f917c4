"""Tests for the validation gate."""

from __future__ import annotations

from typing import Any

import pytest

from dnd_roster.core.exceptions import (
    InvalidCharacterDataError,
    InvalidCharacterLevelError,
    InvalidMulticlassCombinationError,
)
from dnd_roster.core.result import Failure, Success
from dnd_roster.models import CharacterCreate
from dnd_roster.rules.validation import (
    parse_character_data,
    parse_update_data,
    validate_character_data,
    validate_update_data,
)


class TestParseCharacterData:
    """Tests for creation validation."""

    def test_valid_payload(self, multiclass_payload: dict[str, Any]) -> None:
        """Test a valid multiclass payload passes."""
        command = parse_character_data(multiclass_payload)
        assert isinstance(command, CharacterCreate)
        assert len(command.classes) == 2

    def test_existing_command_passes_through(self, multiclass_payload: dict[str, Any]) -> None:
        """Test an already-built command is checked, not rebuilt."""
        command = CharacterCreate.model_validate(multiclass_payload)
        assert parse_character_data(command) is command

    def test_schema_violations_listed(self, payload_factory: Any) -> None:
        """Test each violation names its field path."""
        payload = payload_factory("Mira", armor_class=40)
        payload["ability_scores"] = {**payload["ability_scores"], "strength": 0}

        with pytest.raises(InvalidCharacterDataError) as exc_info:
            parse_character_data(payload)

        fields = {violation["field"] for violation in exc_info.value.validation_errors}
        assert fields == {"armor_class", "ability_scores.strength"}

    def test_missing_required_field(self, payload_factory: Any) -> None:
        """Test a missing field is reported with type ``missing``."""
        payload = payload_factory("Mira")
        del payload["race"]

        with pytest.raises(InvalidCharacterDataError) as exc_info:
            parse_character_data(payload)

        assert exc_info.value.validation_errors[0]["type"] == "missing"

    def test_duplicate_class(self, payload_factory: Any) -> None:
        """Test a repeated class is an invalid multiclass combination."""
        payload = payload_factory(
            "Mira",
            classes=[
                {"class_name": "fighter", "level": 2},
                {"class_name": "fighter", "level": 3},
            ],
        )
        with pytest.raises(InvalidMulticlassCombinationError):
            parse_character_data(payload)

    def test_total_level_above_twenty(self, payload_factory: Any) -> None:
        """Test class levels may not sum past 20."""
        payload = payload_factory(
            "Mira",
            classes=[
                {"class_name": "fighter", "level": 15},
                {"class_name": "wizard", "level": 6},
            ],
        )
        with pytest.raises(InvalidCharacterLevelError) as exc_info:
            parse_character_data(payload)
        assert exc_info.value.details["level"] == 21

    def test_duplicate_checked_before_level(self, payload_factory: Any) -> None:
        """Test a list that breaks both rules reports the duplicate."""
        payload = payload_factory(
            "Mira",
            classes=[
                {"class_name": "fighter", "level": 15},
                {"class_name": "fighter", "level": 15},
            ],
        )
        with pytest.raises(InvalidMulticlassCombinationError):
            parse_character_data(payload)

    def test_level_twenty_accepted(self, payload_factory: Any) -> None:
        """Test exactly 20 total levels is valid."""
        payload = payload_factory(
            "Mira",
            classes=[
                {"class_name": "fighter", "level": 10},
                {"class_name": "wizard", "level": 10},
            ],
        )
        assert parse_character_data(payload).classes[1].level == 10


class TestParseUpdateData:
    """Tests for update validation."""

    def test_partial_update(self) -> None:
        """Test only supplied fields are required."""
        assert parse_update_data({"notes": "Hello"}).notes == "Hello"

    def test_class_rules_apply_to_supplied_classes(self) -> None:
        """Test a supplied class list is checked for duplicates."""
        with pytest.raises(InvalidMulticlassCombinationError):
            parse_update_data(
                {
                    "classes": [
                        {"class_name": "rogue", "level": 1},
                        {"class_name": "rogue", "level": 1},
                    ]
                }
            )

    def test_unknown_field(self) -> None:
        """Test unknown fields fail the schema check."""
        with pytest.raises(InvalidCharacterDataError):
            parse_update_data({"revision": 7})


class TestResultApi:
    """Tests for the result-returning wrappers."""

    def test_success(self, multiclass_payload: dict[str, Any]) -> None:
        """Test a valid payload yields Success."""
        assert isinstance(validate_character_data(multiclass_payload), Success)

    def test_failure_code(self, payload_factory: Any) -> None:
        """Test an invalid payload yields a coded Failure."""
        result = validate_character_data(payload_factory("", armor_class=12))

        assert isinstance(result, Failure)
        assert result.code == "INVALID_CHARACTER_DATA"
        assert result.error.details["validation_errors"][0]["field"] == "name"

    def test_update_failure(self) -> None:
        """Test an invalid update yields a Failure."""
        result = validate_update_data({"speed": -5})
        assert isinstance(result, Failure)
        assert result.code == "INVALID_CHARACTER_DATA"
