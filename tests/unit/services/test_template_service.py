"""Tests for templates, cloning and bulk operations."""

from __future__ import annotations

from typing import Any

import pytest

from dnd_roster.core.config import CharacterSettings, EncumbranceSettings
from dnd_roster.core.result import Failure
from dnd_roster.models import CharacterClass, CharacterRecord, CharacterTemplate
from dnd_roster.services import CharacterService, CharacterTemplateService
from dnd_roster.storage import InMemoryCharacterStore


OWNER = "user-owner"
STRANGER = "user-other"


@pytest.fixture
def templates(service: CharacterService) -> CharacterTemplateService:
    """Template service over the shared character service."""
    return CharacterTemplateService(service)


class TestTemplates:
    """Tests for create_template and create_from_template."""

    def test_create_template(
        self,
        templates: CharacterTemplateService,
        service: CharacterService,
        multiclass_payload: dict[str, Any],
    ) -> None:
        """Test the template keeps the first class and core numbers."""
        record = service.create_character(OWNER, multiclass_payload).data
        template = templates.create_template(record.id, OWNER, "Spellblade").data

        assert template.name == "Spellblade"
        assert template.class_name == CharacterClass.FIGHTER
        assert template.level == 3
        assert template.hit_points == 38
        assert template.ability_scores == record.ability_scores

    def test_template_requires_view(
        self, templates: CharacterTemplateService, fighter: CharacterRecord
    ) -> None:
        """Test strangers cannot template private characters."""
        result = templates.create_template(fighter.id, STRANGER, "Copycat")
        assert isinstance(result, Failure)
        assert result.code == "UNAUTHORIZED_ACCESS"

    def test_create_from_template(
        self, templates: CharacterTemplateService, sample_ability_scores: dict[str, int]
    ) -> None:
        """Test a character is built from a template."""
        template = CharacterTemplate(
            name="Guard",
            kind="npc",
            race="human",
            class_name="fighter",
            level=2,
            ability_scores=sample_ability_scores,
            hit_points=20,
            armor_class=16,
        )
        record = templates.create_from_template(template, OWNER).data

        assert record.name == "Guard"
        assert record.classes[0].hit_die == 10
        assert record.hit_points.current == 20
        assert record.speed == 30
        assert record.proficiency_bonus == 2

    def test_customizations_override(
        self, templates: CharacterTemplateService, sample_ability_scores: dict[str, int]
    ) -> None:
        """Test customizations replace template defaults."""
        template = CharacterTemplate(
            name="Guard",
            kind="npc",
            race="human",
            class_name="fighter",
            level=1,
            ability_scores=sample_ability_scores,
            hit_points=12,
            armor_class=16,
        )
        record = templates.create_from_template(
            template, OWNER, {"name": "Sergeant Brask", "is_public": True}
        ).data

        assert record.name == "Sergeant Brask"
        assert record.is_public is True

    def test_invalid_customization(
        self, templates: CharacterTemplateService, sample_ability_scores: dict[str, int]
    ) -> None:
        """Test customizations go through validation."""
        template = CharacterTemplate(
            name="Guard",
            kind="npc",
            race="human",
            class_name="fighter",
            level=1,
            ability_scores=sample_ability_scores,
            hit_points=12,
            armor_class=16,
        )
        result = templates.create_from_template(template, OWNER, {"armor_class": 0})
        assert result.code == "INVALID_CHARACTER_DATA"


class TestCloneCharacter:
    """Tests for clone_character."""

    def test_clone_public_character(
        self,
        templates: CharacterTemplateService,
        service: CharacterService,
        fighter: CharacterRecord,
    ) -> None:
        """Test a stranger can clone a public character into their roster."""
        service.take_damage(fighter.id, OWNER, 10)
        service.add_temporary_hp(fighter.id, OWNER, 4)
        service.set_visibility(fighter.id, OWNER, True)

        clone = templates.clone_character(fighter.id, STRANGER, "Thorin's Echo").data

        assert clone.id != fighter.id
        assert clone.owner_id == STRANGER
        assert clone.name == "Thorin's Echo"
        assert clone.hit_points.current == clone.hit_points.maximum == 44
        assert clone.hit_points.temporary == 0
        assert clone.is_public is False
        assert clone.skills == fighter.skills

    def test_clone_private_denied(
        self, templates: CharacterTemplateService, fighter: CharacterRecord
    ) -> None:
        """Test private characters cannot be cloned by strangers."""
        result = templates.clone_character(fighter.id, STRANGER, "Thief")
        assert result.code == "UNAUTHORIZED_ACCESS"


class TestBulkOperations:
    """Tests for bulk create, update and delete."""

    def test_create_many_partial_failure(
        self, templates: CharacterTemplateService, payload_factory: Any
    ) -> None:
        """Test each payload succeeds or fails on its own."""
        bad = payload_factory("Broken", armor_class=0)
        result = templates.create_many(
            OWNER, [payload_factory("One"), bad, payload_factory("Two")]
        ).data

        assert [r.name for r in result.successful] == ["One", "Two"]
        assert len(result.failed) == 1
        assert result.failed[0].code == "INVALID_CHARACTER_DATA"
        assert result.failed[0].data == bad

    def test_create_many_respects_cap(self, payload_factory: Any) -> None:
        """Test the cap applies item by item."""
        service = CharacterService(
            InMemoryCharacterStore(),
            settings=CharacterSettings(max_characters_per_owner=2),
            encumbrance_settings=EncumbranceSettings(),
        )
        result = CharacterTemplateService(service).create_many(
            OWNER, [payload_factory(f"Hero {i}") for i in range(3)]
        ).data

        assert len(result.successful) == 2
        assert result.failed[0].code == "CHARACTER_LIMIT_EXCEEDED"

    def test_update_many(
        self,
        templates: CharacterTemplateService,
        service: CharacterService,
        payload_factory: Any,
    ) -> None:
        """Test updates are applied one by one."""
        mine = service.create_character(OWNER, payload_factory("Mine")).data
        theirs = service.create_character(STRANGER, payload_factory("Theirs")).data

        result = templates.update_many(
            OWNER,
            [(mine.id, {"notes": "updated"}), (theirs.id, {"notes": "nope"})],
        ).data

        assert [r.notes for r in result.successful] == ["updated"]
        assert result.failed[0].data == str(theirs.id)
        assert result.failed[0].code == "UNAUTHORIZED_ACCESS"

    def test_delete_many(
        self,
        templates: CharacterTemplateService,
        service: CharacterService,
        payload_factory: Any,
    ) -> None:
        """Test deletions are applied one by one."""
        first = service.create_character(OWNER, payload_factory("First")).data
        second = service.create_character(OWNER, payload_factory("Second")).data

        result = templates.delete_many(OWNER, [first.id, "missing-id", second.id]).data

        assert [r.character_id for r in result.successful] == [first.id, second.id]
        assert result.failed[0].data == "missing-id"
        assert result.failed[0].code == "CHARACTER_NOT_FOUND"
        assert service.get_characters_by_owner(OWNER, OWNER).data.total == 0


class TestMalformedArguments:
    """Tests that malformed arguments come back as results."""

    def test_non_mapping_customizations(
        self, templates: CharacterTemplateService, sample_ability_scores: dict[str, int]
    ) -> None:
        """Test customizations that are not a mapping are invalid data."""
        template = CharacterTemplate(
            name="Guard",
            kind="npc",
            race="human",
            class_name="fighter",
            level=1,
            ability_scores=sample_ability_scores,
            hit_points=12,
            armor_class=16,
        )
        result = templates.create_from_template(template, OWNER, ["name", "Brask"])  # type: ignore[arg-type]

        assert isinstance(result, Failure)
        assert result.code == "INVALID_CHARACTER_DATA"
        assert result.error.details["validation_errors"][0]["field"] == "customizations"

    @pytest.mark.parametrize("operation", ["create_many", "update_many", "delete_many"])
    def test_bulk_without_items(
        self, templates: CharacterTemplateService, operation: str
    ) -> None:
        """Test a missing item list fails inside the result boundary."""
        result = getattr(templates, operation)(OWNER, None)

        assert isinstance(result, Failure)
        assert result.code == "INTERNAL_ERROR"
        assert result.error.details["operation"].endswith("multiple characters")

    def test_bulk_accepts_generators(
        self, templates: CharacterTemplateService, payload_factory: Any
    ) -> None:
        """Test any iterable of payloads is accepted."""
        result = templates.create_many(OWNER, (payload_factory(n) for n in ("Ash", "Birch")))
        assert [r.name for r in result.data.successful] == ["Ash", "Birch"]
