"""Templates, cloning and bulk operations built on the character service.

Every operation goes through ``CharacterService``, so validation, the
per-owner cap and access control apply exactly as for single calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from dnd_roster.core.constants import DEFAULT_SPEED
from dnd_roster.core.exceptions import InvalidCharacterDataError
from dnd_roster.core.logging import get_logger
from dnd_roster.core.result import Failure, ServiceResult
from dnd_roster.models.character import CharacterRecord
from dnd_roster.models.commands import CharacterCreate, CharacterUpdate
from dnd_roster.models.progression import get_hit_die
from dnd_roster.models.stats import (
    BulkFailure,
    BulkOperationResult,
    CharacterTemplate,
    DeletionReceipt,
)
from dnd_roster.rules.progression import proficiency_bonus_for_level
from dnd_roster.services.characters import CharacterService, service_operation

logger = get_logger(__name__)


def _bulk_failure(data: Any, failure: Failure) -> BulkFailure:
    return BulkFailure(data=data, code=failure.error.code, error=failure.error.message)


class CharacterTemplateService:
    """Template and bulk operations over a ``CharacterService``."""

    def __init__(self, characters: CharacterService) -> None:
        self.characters = characters

    # =========================================================================
    # Templates
    # =========================================================================

    def create_template(
        self,
        character_id: str | UUID,
        requester_id: str,
        template_name: str,
    ) -> ServiceResult[CharacterTemplate]:
        """Capture a viewable character as a single-class template.

        The template keeps the first class entry, the ability scores, the
        maximum hit points and the armor class.
        """
        result = self.characters.get_character(character_id, requester_id)
        if isinstance(result, Failure):
            return result
        return self._template_from(result.data, template_name)

    @service_operation("create template")
    def _template_from(self, record: CharacterRecord, template_name: str) -> CharacterTemplate:
        first = record.classes[0]
        return CharacterTemplate(
            name=template_name,
            kind=record.kind,
            race=record.race,
            class_name=first.class_name,
            level=first.level,
            ability_scores=record.ability_scores,
            hit_points=max(1, record.hit_points.maximum),
            armor_class=record.armor_class,
        )

    def clone_character(
        self,
        character_id: str | UUID,
        requester_id: str,
        new_name: str,
    ) -> ServiceResult[CharacterRecord]:
        """Copy a viewable character into a new one owned by the requester.

        The copy starts at full hit points with no temporary hit points,
        private and outside any party.
        """
        result = self.characters.get_character(character_id, requester_id)
        if isinstance(result, Failure):
            return result

        source = result.data
        data = source.model_dump(
            include=set(CharacterCreate.model_fields),
            exclude={"is_public", "party_id"},
        )
        data["name"] = new_name
        data["hit_points"] = {
            "maximum": source.hit_points.maximum,
            "current": source.hit_points.maximum,
            "temporary": 0,
        }
        created = self.characters.create_character(requester_id, data)
        if created.success:
            logger.info(
                "Character cloned",
                source_id=str(source.id),
                clone_id=str(created.data.id),
            )
        return created

    def create_from_template(
        self,
        template: CharacterTemplate,
        owner_id: str,
        customizations: Mapping[str, Any] | None = None,
    ) -> ServiceResult[CharacterRecord]:
        """Create a character from a template.

        Customizations are creation fields that override the template's
        defaults (for example a different ``name``).
        """
        payload = self._template_payload(template, customizations)
        if isinstance(payload, Failure):
            return payload
        return self.characters.create_character(owner_id, payload.data)

    @service_operation("create from template")
    def _template_payload(
        self,
        template: CharacterTemplate,
        customizations: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        if customizations is not None and not isinstance(customizations, Mapping):
            raise InvalidCharacterDataError(
                "Template customizations must be a mapping of fields",
                validation_errors=[
                    {
                        "field": "customizations",
                        "message": f"Expected a mapping, got {type(customizations).__name__}",
                        "type": "dict_type",
                    }
                ],
            )

        data: dict[str, Any] = {
            "name": template.name,
            "kind": template.kind,
            "race": template.race,
            "classes": [
                {
                    "class_name": template.class_name,
                    "level": template.level,
                    "hit_die": get_hit_die(template.class_name),
                }
            ],
            "ability_scores": template.ability_scores.model_dump(),
            "hit_points": {
                "maximum": template.hit_points,
                "current": template.hit_points,
                "temporary": 0,
            },
            "armor_class": template.armor_class,
            "speed": DEFAULT_SPEED,
            "proficiency_bonus": proficiency_bonus_for_level(template.level),
        }
        data.update(customizations or {})
        return data

    # =========================================================================
    # Bulk Operations
    # =========================================================================

    @service_operation("create multiple characters")
    def create_many(
        self,
        owner_id: str,
        payloads: Iterable[Mapping[str, Any] | CharacterCreate],
    ) -> BulkOperationResult[CharacterRecord]:
        """Create characters one by one, collecting per-item outcomes."""
        successful: list[CharacterRecord] = []
        failed: list[BulkFailure] = []
        for payload in payloads:
            result = self.characters.create_character(owner_id, payload)
            if isinstance(result, Failure):
                failed.append(_bulk_failure(payload, result))
            else:
                successful.append(result.data)

        logger.info(
            "Bulk create finished",
            owner_id=owner_id,
            successful=len(successful),
            failed=len(failed),
        )
        return BulkOperationResult(successful=successful, failed=failed)

    @service_operation("update multiple characters")
    def update_many(
        self,
        requester_id: str,
        updates: Iterable[tuple[str | UUID, Mapping[str, Any] | CharacterUpdate]],
    ) -> BulkOperationResult[CharacterRecord]:
        """Apply ``(character_id, update)`` pairs one by one."""
        successful: list[CharacterRecord] = []
        failed: list[BulkFailure] = []
        for character_id, data in updates:
            result = self.characters.update_character(character_id, requester_id, data)
            if isinstance(result, Failure):
                failed.append(_bulk_failure(str(character_id), result))
            else:
                successful.append(result.data)
        return BulkOperationResult(successful=successful, failed=failed)

    @service_operation("delete multiple characters")
    def delete_many(
        self,
        requester_id: str,
        character_ids: Iterable[str | UUID],
    ) -> BulkOperationResult[DeletionReceipt]:
        """Soft-delete characters one by one."""
        successful: list[DeletionReceipt] = []
        failed: list[BulkFailure] = []
        for character_id in character_ids:
            result = self.characters.delete_character(character_id, requester_id)
            if isinstance(result, Failure):
                failed.append(_bulk_failure(str(character_id), result))
            else:
                successful.append(result.data)
        return BulkOperationResult(successful=successful, failed=failed)


__all__ = ["CharacterTemplateService"]
