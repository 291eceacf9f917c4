"""Tests for creation, update and filter commands."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from dnd_roster.models import (
    CharacterCreate,
    CharacterFilter,
    CharacterUpdate,
    Size,
    strip_markup,
)


class TestStripMarkup:
    """Tests for free-text sanitisation."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Plain text", "Plain text"),
            ("Brave <b>knight</b>", "Brave knight"),
            ("Hi<script>alert(1)</script> there", "Hi there"),
            ("<SCRIPT type='x'>\nbad()\n</SCRIPT>ok", "ok"),
            ("  padded  ", "padded"),
        ],
    )
    def test_strip_markup(self, raw: str, expected: str) -> None:
        """Test script blocks and tags are removed."""
        assert strip_markup(raw) == expected


class TestCharacterCreate:
    """Tests for CharacterCreate."""

    def test_defaults(self, payload_factory: Any) -> None:
        """Test optional fields take their defaults."""
        command = CharacterCreate.model_validate(payload_factory("Mira"))

        assert command.size == Size.MEDIUM
        assert command.speed == 30
        assert command.skills == frozenset()
        assert command.experience_points == 0

    def test_name_trimmed(self, payload_factory: Any) -> None:
        """Test the name is trimmed."""
        command = CharacterCreate.model_validate(payload_factory("  Mira  "))
        assert command.name == "Mira"

    def test_blank_name_rejected(self, payload_factory: Any) -> None:
        """Test a whitespace-only name fails the length check."""
        with pytest.raises(ValidationError):
            CharacterCreate.model_validate(payload_factory("   "))

    def test_free_text_sanitised(self, payload_factory: Any) -> None:
        """Test backstory and notes are stripped of markup."""
        command = CharacterCreate.model_validate(
            payload_factory(
                "Mira",
                backstory="<p>Raised by wolves</p><script>x()</script>",
                notes="<i>Owes</i> a favour",
            )
        )
        assert command.backstory == "Raised by wolves"
        assert command.notes == "Owes a favour"

    def test_unknown_field_rejected(self, payload_factory: Any) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            CharacterCreate.model_validate(payload_factory("Mira", owner_id="someone"))

    def test_camel_case_input(self, payload_factory: Any) -> None:
        """Test camelCase keys are accepted."""
        payload = payload_factory("Mira")
        payload["armorClass"] = payload.pop("armor_class")
        payload["hitPoints"] = payload.pop("hit_points")

        command = CharacterCreate.model_validate(payload)
        assert command.armor_class == 12

    def test_record_fields_drop_proficiency(self, payload_factory: Any) -> None:
        """Test the proficiency hint is not copied onto records."""
        command = CharacterCreate.model_validate(payload_factory("Mira", proficiency_bonus=6))
        assert "proficiency_bonus" not in command.record_fields()


class TestCharacterUpdate:
    """Tests for CharacterUpdate."""

    def test_changes_only_supplied(self) -> None:
        """Test unset fields are not reported as changes."""
        update = CharacterUpdate.model_validate({"name": "New Name", "armor_class": 15})
        assert update.changes() == {"name": "New Name", "armor_class": 15}

    def test_null_clears_nullable_fields(self) -> None:
        """Test an explicit None clears a nullable field."""
        update = CharacterUpdate.model_validate({"party_id": None, "name": None})
        assert update.changes() == {"party_id": None}

    def test_is_empty(self) -> None:
        """Test an update with nothing to apply."""
        assert CharacterUpdate().is_empty is True
        assert CharacterUpdate(proficiency_bonus=3).is_empty is True
        assert CharacterUpdate(notes="x").is_empty is False

    def test_empty_class_list_rejected(self) -> None:
        """Test a supplied class list must not be empty."""
        with pytest.raises(ValidationError):
            CharacterUpdate.model_validate({"classes": []})

    def test_invalid_range_rejected(self) -> None:
        """Test supplied fields are range checked."""
        with pytest.raises(ValidationError):
            CharacterUpdate.model_validate({"armor_class": 0})


class TestCharacterFilter:
    """Tests for CharacterFilter."""

    def test_level_range(self) -> None:
        """Test a valid level range."""
        criteria = CharacterFilter(min_level=3, max_level=5)
        assert criteria.min_level == 3

    def test_inverted_level_range_rejected(self) -> None:
        """Test min_level cannot exceed max_level."""
        with pytest.raises(ValidationError, match="cannot exceed"):
            CharacterFilter(min_level=6, max_level=5)

    def test_camel_case_keys(self) -> None:
        """Test filters accept camelCase keys."""
        criteria = CharacterFilter.model_validate({"className": "wizard", "isPublic": True})
        assert criteria.class_name == "wizard"
        assert criteria.is_public is True
