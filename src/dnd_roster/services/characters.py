"""Character service: the façade over storage, access control and rule engines.

Every public operation returns a ``ServiceResult``; no exception crosses
this boundary. Inside, failures are raised as ``CharacterServiceError``
subclasses and converted by ``service_operation``:

- ``CharacterServiceError`` becomes a ``Failure`` with its own code.
- ``StorageError`` becomes ``DATABASE_ERROR`` tagged with the operation.
- Anything else is logged with its traceback and becomes ``INTERNAL_ERROR``.

Mutations run read, compute, then a write conditioned on the revision that
was read. A conflicting write is retried from a fresh read.

Example:
    >>> service = CharacterService(InMemoryCharacterStore())
    >>> created = service.create_character("user-1", payload)
    >>> result = service.take_damage(created.data.id, "user-1", 8)
    >>> result.data.hit_points.current
    12
"""

from __future__ import annotations

import functools
import inspect
import math
import secrets
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import Any, TypeVar
from uuid import UUID

from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt

from dnd_roster.core.config import CharacterSettings, EncumbranceSettings, Settings, get_settings
from dnd_roster.core.exceptions import (
    CharacterLimitExceededError,
    CharacterNotFoundError,
    CharacterServiceError,
    DatabaseError,
    InternalServiceError,
    InvalidCharacterDataError,
    InvalidRestoreTokenError,
    InvalidSearchCriteriaError,
    RevisionConflictError,
    StorageError,
    UnauthorizedAccessError,
)
from dnd_roster.core.logging import configure_logging_from_settings, get_logger, operation_context
from dnd_roster.core.result import ServiceResult, failure_result, success_result
from dnd_roster.models.character import (
    ActiveLifecycle,
    CharacterRecord,
    PendingDeletion,
    utc_now,
)
from dnd_roster.models.commands import CharacterCreate, CharacterFilter, CharacterUpdate
from dnd_roster.models.enums import CharacterClass, CharacterKind, LifecycleState, Race
from dnd_roster.models.stats import (
    CarryingCapacity,
    CharacterPermissions,
    CharacterStats,
    CharacterSummary,
    DeletionReceipt,
    EquipmentWeight,
    ExperienceInfo,
    Page,
    SpellcastingStats,
)
from dnd_roster.rules import damage, encumbrance, progression, spellcasting, stats
from dnd_roster.rules.spellcasting import SpellcastingRules
from dnd_roster.rules.validation import format_violations, parse_character_data, parse_update_data
from dnd_roster.services.access import AccessControl, OwnerAccessControl, record_permissions
from dnd_roster.services.importers import ImportRegistry, default_registry, export_character
from dnd_roster.storage.base import CharacterQuery, CharacterStore
from dnd_roster.storage.database import SqliteCharacterStore

logger = get_logger(__name__)

T = TypeVar("T")

RESTORE_TOKEN_BYTES = 24

LOG_CONTEXT_ARGUMENTS = ("character_id", "requester_id", "owner_id")


# =============================================================================
# Service Boundary
# =============================================================================


def service_operation(operation: str) -> Callable[[Callable[..., T]], Callable[..., ServiceResult[T]]]:
    """Convert a raising method into one that returns a ``ServiceResult``.

    Args:
        operation: Human-readable operation name used in errors and logs
            (for example ``"update character"``).
    """

    def decorator(func: Callable[..., T]) -> Callable[..., ServiceResult[T]]:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ServiceResult[T]:
            context = _log_context(signature, args, kwargs)
            with operation_context(operation=operation, **context):
                try:
                    return success_result(func(*args, **kwargs))
                except CharacterServiceError as exc:
                    logger.warning("Character operation failed", code=exc.code, error=exc.message)
                    return failure_result(exc)
                except StorageError as exc:
                    logger.error(
                        "Storage failure",
                        storage_operation=exc.details.get("operation"),
                        error=exc.message,
                    )
                    return failure_result(DatabaseError(operation, original_error=exc.message))
                except Exception as exc:
                    logger.exception("Unexpected error in character operation")
                    return failure_result(InternalServiceError(operation, reason=str(exc)))

        return wrapper

    return decorator


def _log_context(
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, str]:
    """Pick the identifying arguments of a call for the log context.

    Calls that do not match the signature bind nothing here; the call
    itself then fails inside the result boundary.
    """
    try:
        arguments = signature.bind_partial(*args, **kwargs).arguments
    except TypeError:
        return {}
    return {
        key: str(arguments[key])
        for key in LOG_CONTEXT_ARGUMENTS
        if arguments.get(key) is not None
    }


def _parse_id(character_id: str | UUID) -> UUID:
    """Parse a character id; unparseable ids cannot exist, so they are not found."""
    if isinstance(character_id, UUID):
        return character_id
    try:
        return UUID(str(character_id))
    except ValueError as exc:
        raise CharacterNotFoundError(str(character_id)) from exc


def _parse_enum(enum_type: type[Any], value: Any, criterion: str) -> Any:
    if isinstance(value, str):
        value = value.strip().lower()
    try:
        return enum_type(value)
    except ValueError as exc:
        raise InvalidSearchCriteriaError({criterion: value}) from exc


# =============================================================================
# Character Service
# =============================================================================


class CharacterService:
    """Character operations over injected storage and access-control ports.

    Attributes:
        store: Storage port.
        access: Access-control port.
        settings: Character lifecycle settings.
    """

    def __init__(
        self,
        store: CharacterStore,
        access: AccessControl | None = None,
        *,
        settings: CharacterSettings | None = None,
        encumbrance_settings: EncumbranceSettings | None = None,
        spellcasting_rules: SpellcastingRules | None = None,
        importers: ImportRegistry | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Storage port implementation.
            access: Access control; defaults to owner-only access.
            settings: Character settings; defaults to the application settings.
            encumbrance_settings: Encumbrance tiers; defaults to the application settings.
            spellcasting_rules: Per-class spellcasting table; defaults to the PHB table.
            importers: Import format registry; defaults to the built-in formats.
            clock: Source of the current UTC time.
        """
        if settings is None or encumbrance_settings is None:
            app_settings = get_settings()
            settings = settings or app_settings.characters
            encumbrance_settings = encumbrance_settings or app_settings.encumbrance

        self.store = store
        self.access = access or OwnerAccessControl()
        self.settings = settings
        self.encumbrance_settings = encumbrance_settings
        self.spellcasting_rules = spellcasting_rules or SpellcastingRules.default()
        self.importers = importers or default_registry()
        self._clock = clock or utc_now

        logger.info(
            "CharacterService initialized",
            store=type(store).__name__,
            max_characters_per_owner=self.settings.max_characters_per_owner,
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _now(self) -> datetime:
        return self._clock()

    def _load_active(self, character_id: UUID) -> CharacterRecord:
        """Load a record that is readable, or raise not found.

        Records pending deletion read as missing whether or not their
        restore window is still open.
        """
        record = self.store.find_by_id(character_id)
        if record is None or not record.is_active:
            raise CharacterNotFoundError(str(character_id))
        return record

    def _permissions(self, record: CharacterRecord, requester_id: str) -> CharacterPermissions:
        return record_permissions(self.access, record, requester_id)

    def _load_viewable(self, character_id: str | UUID, requester_id: str) -> CharacterRecord:
        record = self._load_active(_parse_id(character_id))
        if not self._permissions(record, requester_id).can_view:
            raise UnauthorizedAccessError(str(record.id), requester_id, operation="view")
        return record

    def _require_owner(self, record: CharacterRecord, requester_id: str, operation: str) -> None:
        if not self._permissions(record, requester_id).can_edit:
            raise UnauthorizedAccessError(str(record.id), requester_id, operation=operation)

    def _visible(self, records: list[CharacterRecord], requester_id: str) -> list[CharacterRecord]:
        return [r for r in records if self._permissions(r, requester_id).can_view]

    def _finalize(self, record: CharacterRecord) -> CharacterRecord:
        """Stamp the write time and recompute the cached proficiency bonus."""
        return record.model_copy(
            update={
                "proficiency_bonus": progression.proficiency_bonus_for_classes(record.classes),
                "updated_at": self._now(),
            }
        )

    def _check_capacity(self, owner_id: str) -> None:
        current = self.store.count_by_owner(owner_id)
        maximum = self.settings.max_characters_per_owner
        if current >= maximum:
            raise CharacterLimitExceededError(current, maximum)

    def _mutate(
        self,
        character_id: str | UUID,
        requester_id: str,
        operation: str,
        transform: Callable[[CharacterRecord], CharacterRecord],
    ) -> CharacterRecord:
        """Apply an owner-only change as a conditional write.

        The record is re-read and ``transform`` re-applied on every attempt.
        A transform that changes nothing skips the write.

        Raises:
            CharacterNotFoundError: If the record is missing or pending deletion.
            UnauthorizedAccessError: If the requester does not own the record.
            RevisionConflictError: If every attempt hit a newer revision.
        """
        record_id = _parse_id(character_id)

        @retry(
            retry=retry_if_exception_type(RevisionConflictError),
            stop=stop_after_attempt(self.settings.update_retry_attempts),
            reraise=True,
        )
        def _attempt() -> CharacterRecord:
            record = self._load_active(record_id)
            self._require_owner(record, requester_id, operation)

            updated = transform(record)
            if updated == record:
                return record

            stored = self.store.update_by_id(record_id, self._finalize(updated), record.revision)
            if stored is None:
                raise CharacterNotFoundError(str(record_id))
            return stored

        return _attempt()

    def _create(self, owner_id: str, data: Mapping[str, Any] | CharacterCreate) -> CharacterRecord:
        command = parse_character_data(data)
        self._check_capacity(owner_id)

        now = self._now()
        try:
            record = CharacterRecord.model_validate(
                {
                    **command.record_fields(),
                    "owner_id": owner_id,
                    "proficiency_bonus": progression.proficiency_bonus_for_classes(command.classes),
                    "created_at": now,
                    "updated_at": now,
                }
            )
        except ValidationError as exc:
            raise InvalidCharacterDataError(validation_errors=format_violations(exc)) from exc

        stored = self.store.create(record)
        logger.info(
            "Character created",
            character_id=str(stored.id),
            owner_id=owner_id,
            name=stored.name,
            total_level=stored.total_level,
        )
        return stored

    # =========================================================================
    # CRUD
    # =========================================================================

    @service_operation("create character")
    def create_character(
        self,
        owner_id: str,
        data: Mapping[str, Any] | CharacterCreate,
    ) -> CharacterRecord:
        """Validate and store a new character for an owner.

        Raises:
            InvalidCharacterDataError: If the payload fails the schema.
            InvalidMulticlassCombinationError: If a class repeats.
            InvalidCharacterLevelError: If the total level is out of range.
            CharacterLimitExceededError: If the owner is at the cap.
        """
        return self._create(owner_id, data)

    @service_operation("get character")
    def get_character(self, character_id: str | UUID, requester_id: str) -> CharacterRecord:
        """Read a character the requester may view."""
        return self._load_viewable(character_id, requester_id)

    @service_operation("update character")
    def update_character(
        self,
        character_id: str | UUID,
        requester_id: str,
        data: Mapping[str, Any] | CharacterUpdate,
    ) -> CharacterRecord:
        """Apply a validated partial update. Owner only.

        The update is validated before storage is touched. Supplied fields
        replace the stored values and the merged record is validated again.
        """
        command = parse_update_data(data)
        changes = command.changes()

        def merge(record: CharacterRecord) -> CharacterRecord:
            try:
                return CharacterRecord.model_validate({**record.model_dump(), **changes})
            except ValidationError as exc:
                raise InvalidCharacterDataError(validation_errors=format_violations(exc)) from exc

        updated = self._mutate(character_id, requester_id, "update", merge)
        logger.info(
            "Character updated",
            character_id=str(updated.id),
            fields=sorted(changes),
            revision=updated.revision,
        )
        return updated

    @service_operation("delete character")
    def delete_character(self, character_id: str | UUID, requester_id: str) -> DeletionReceipt:
        """Soft-delete a character. Owner only.

        The record moves to pending deletion and stops counting toward the
        owner's cap. The returned token restores it until ``expires_at``.
        """
        expires_at = self._now() + timedelta(seconds=self.settings.restore_window_seconds)
        token = secrets.token_urlsafe(RESTORE_TOKEN_BYTES)

        def mark_pending(record: CharacterRecord) -> CharacterRecord:
            return record.model_copy(
                update={"lifecycle": PendingDeletion(expires_at=expires_at, restore_token=token)}
            )

        deleted = self._mutate(character_id, requester_id, "delete", mark_pending)
        logger.info(
            "Character pending deletion",
            character_id=str(deleted.id),
            expires_at=expires_at.isoformat(),
        )
        return DeletionReceipt(character_id=deleted.id, restore_token=token, expires_at=expires_at)

    @service_operation("restore character")
    def restore_character(
        self,
        character_id: str | UUID,
        requester_id: str,
        restore_token: str,
    ) -> CharacterRecord:
        """Undo a soft delete with its token. Owner only.

        The token is single-use. Once the window has closed the record is
        treated as gone. Restoring counts toward the owner's cap again.

        Raises:
            CharacterNotFoundError: If there is no record or its window expired.
            UnauthorizedAccessError: If the requester does not own the record.
            InvalidRestoreTokenError: If the record is not pending deletion or
                the token does not match.
            CharacterLimitExceededError: If the owner is at the cap.
        """
        record_id = _parse_id(character_id)

        @retry(
            retry=retry_if_exception_type(RevisionConflictError),
            stop=stop_after_attempt(self.settings.update_retry_attempts),
            reraise=True,
        )
        def _attempt() -> CharacterRecord:
            record = self.store.find_by_id(record_id)
            if record is None:
                raise CharacterNotFoundError(str(record_id))

            lifecycle = record.lifecycle
            if isinstance(lifecycle, PendingDeletion) and lifecycle.is_expired(self._now()):
                raise CharacterNotFoundError(str(record_id))

            self._require_owner(record, requester_id, "restore")

            if not isinstance(lifecycle, PendingDeletion) or not secrets.compare_digest(
                lifecycle.restore_token, restore_token
            ):
                raise InvalidRestoreTokenError(str(record_id))

            self._check_capacity(record.owner_id)

            restored = record.model_copy(update={"lifecycle": ActiveLifecycle()})
            stored = self.store.update_by_id(record_id, self._finalize(restored), record.revision)
            if stored is None:
                raise CharacterNotFoundError(str(record_id))
            return stored

        restored = _attempt()
        logger.info("Character restored", character_id=str(restored.id))
        return restored

    @service_operation("purge expired deletions")
    def purge_expired_deletions(self) -> int:
        """Permanently remove records whose restore window has closed.

        Returns:
            Number of records removed.
        """
        now = self._now()
        pending = self.store.find_by_filter(
            CharacterQuery(lifecycle_state=LifecycleState.PENDING_DELETION)
        )

        purged = 0
        for record in pending:
            lifecycle = record.lifecycle
            if isinstance(lifecycle, PendingDeletion) and lifecycle.is_expired(now):
                if self.store.delete_by_id(record.id):
                    purged += 1

        if purged:
            logger.info("Purged expired deletions", count=purged)
        return purged

    # =========================================================================
    # Hit Points and Experience
    # =========================================================================

    @service_operation("take damage")
    def take_damage(self, character_id: str | UUID, requester_id: str, amount: int) -> CharacterRecord:
        """Apply damage (temporary HP first). Non-positive amounts change nothing."""
        record = self._mutate(
            character_id,
            requester_id,
            "take_damage",
            lambda current: damage.apply_damage(current, amount),
        )
        logger.info(
            "Damage applied",
            character_id=str(record.id),
            amount=amount,
            current_hp=record.hit_points.current,
            status=damage.vitality_status(record.hit_points).value,
        )
        return record

    @service_operation("heal")
    def heal(self, character_id: str | UUID, requester_id: str, amount: int) -> CharacterRecord:
        """Restore hit points up to maximum. Non-positive amounts change nothing."""
        record = self._mutate(
            character_id,
            requester_id,
            "heal",
            lambda current: damage.apply_healing(current, amount),
        )
        logger.info(
            "Healing applied",
            character_id=str(record.id),
            amount=amount,
            current_hp=record.hit_points.current,
        )
        return record

    @service_operation("add temporary hit points")
    def add_temporary_hp(
        self,
        character_id: str | UUID,
        requester_id: str,
        amount: int,
    ) -> CharacterRecord:
        """Grant temporary HP; the larger of the old and new pools is kept."""
        record = self._mutate(
            character_id,
            requester_id,
            "add_temporary_hp",
            lambda current: damage.apply_temporary_hp(current, amount),
        )
        logger.info(
            "Temporary hit points granted",
            character_id=str(record.id),
            amount=amount,
            temporary_hp=record.hit_points.temporary,
        )
        return record

    @service_operation("award experience")
    def award_experience(
        self,
        character_id: str | UUID,
        requester_id: str,
        amount: int,
    ) -> CharacterRecord:
        """Add experience points. Class levels are not changed.

        Raises:
            InvalidCharacterDataError: If ``amount`` is negative.
        """
        if amount < 0:
            raise InvalidCharacterDataError(
                "Experience award cannot be negative",
                validation_errors=[
                    {
                        "field": "amount",
                        "message": "Input should be greater than or equal to 0",
                        "type": "greater_than_equal",
                    }
                ],
            )

        record = self._mutate(
            character_id,
            requester_id,
            "award_experience",
            lambda current: current.model_copy(
                update={"experience_points": current.experience_points + amount}
            ),
        )
        logger.info(
            "Experience awarded",
            character_id=str(record.id),
            amount=amount,
            experience_points=record.experience_points,
        )
        return record

    # =========================================================================
    # Sharing
    # =========================================================================

    @service_operation("set visibility")
    def set_visibility(
        self,
        character_id: str | UUID,
        requester_id: str,
        is_public: bool,
    ) -> CharacterRecord:
        """Make a character public or private. Owner only."""
        record = self._mutate(
            character_id,
            requester_id,
            "share",
            lambda current: current.model_copy(update={"is_public": is_public}),
        )
        logger.info("Visibility changed", character_id=str(record.id), is_public=is_public)
        return record

    @service_operation("get permissions")
    def get_permissions(self, character_id: str | UUID, requester_id: str) -> CharacterPermissions:
        """Report what the requester may do with a character."""
        record = self._load_active(_parse_id(character_id))
        return self._permissions(record, requester_id)

    # =========================================================================
    # Derived Statistics
    # =========================================================================

    @service_operation("calculate character stats")
    def calculate_character_stats(self, character_id: str | UUID, requester_id: str) -> CharacterStats:
        record = self._load_viewable(character_id, requester_id)
        return stats.calculate_character_stats(record)

    @service_operation("get character summary")
    def get_character_summary(self, character_id: str | UUID, requester_id: str) -> CharacterSummary:
        record = self._load_viewable(character_id, requester_id)
        return stats.character_summary(record)

    @service_operation("calculate spellcasting stats")
    def calculate_spellcasting_stats(
        self,
        character_id: str | UUID,
        requester_id: str,
    ) -> SpellcastingStats:
        record = self._load_viewable(character_id, requester_id)
        return spellcasting.calculate_spellcasting_stats(record, self.spellcasting_rules)

    @service_operation("calculate carrying capacity")
    def calculate_carrying_capacity(
        self,
        character_id: str | UUID,
        requester_id: str,
    ) -> CarryingCapacity:
        record = self._load_viewable(character_id, requester_id)
        return encumbrance.calculate_carrying_capacity(record, self.encumbrance_settings)

    @service_operation("calculate equipment weight")
    def calculate_equipment_weight(
        self,
        character_id: str | UUID,
        requester_id: str,
    ) -> EquipmentWeight:
        record = self._load_viewable(character_id, requester_id)
        return encumbrance.equipment_weight(record)

    @service_operation("calculate experience info")
    def calculate_experience_info(
        self,
        character_id: str | UUID,
        requester_id: str,
    ) -> ExperienceInfo:
        record = self._load_viewable(character_id, requester_id)
        return progression.experience_info(record.experience_points)

    # =========================================================================
    # Listing and Search
    # =========================================================================

    @service_operation("get characters by owner")
    def get_characters_by_owner(
        self,
        owner_id: str,
        requester_id: str,
        page: int = 1,
        limit: int | None = None,
    ) -> Page[CharacterRecord]:
        """Page through an owner's active characters that the requester may view.

        ``page`` is clamped to at least 1 and ``limit`` to 1..max_page_size.
        A requester other than the owner only sees public characters.
        """
        page = max(1, page)
        if limit is None:
            limit = self.settings.default_page_size
        limit = min(max(1, limit), self.settings.max_page_size)

        records = self._visible(
            self.store.find_by_filter(CharacterQuery(owner_id=owner_id)),
            requester_id,
        )
        skip = (page - 1) * limit
        return Page[CharacterRecord](
            items=records[skip : skip + limit],
            page=page,
            limit=limit,
            total=len(records),
            total_pages=math.ceil(len(records) / limit),
        )

    @service_operation("search characters")
    def search_characters(self, term: str, requester_id: str) -> list[CharacterRecord]:
        """Find viewable characters whose name contains ``term``.

        Raises:
            InvalidSearchCriteriaError: If the term is empty or blank.
        """
        cleaned = (term or "").strip()
        if not cleaned:
            raise InvalidSearchCriteriaError({"term": term})
        records = self.store.find_by_filter(CharacterQuery(name_contains=cleaned))
        return self._visible(records, requester_id)

    @service_operation("get characters by class")
    def get_characters_by_class(
        self,
        class_name: CharacterClass | str,
        requester_id: str,
    ) -> list[CharacterRecord]:
        wanted = _parse_enum(CharacterClass, class_name, "class_name")
        records = self.store.find_by_filter(CharacterQuery(class_name=wanted))
        return self._visible(records, requester_id)

    @service_operation("get characters by race")
    def get_characters_by_race(self, race: Race | str, requester_id: str) -> list[CharacterRecord]:
        wanted = _parse_enum(Race, race, "race")
        records = self.store.find_by_filter(CharacterQuery(race=wanted))
        return self._visible(records, requester_id)

    @service_operation("get characters by type")
    def get_characters_by_type(
        self,
        kind: CharacterKind | str,
        requester_id: str,
    ) -> list[CharacterRecord]:
        wanted = _parse_enum(CharacterKind, kind, "type")
        records = self.store.find_by_filter(CharacterQuery(kind=wanted))
        return self._visible(records, requester_id)

    @service_operation("get public characters")
    def get_public_characters(self) -> list[CharacterRecord]:
        return self.store.find_by_filter(CharacterQuery(is_public=True))

    @service_operation("find characters")
    def find_characters(
        self,
        criteria: CharacterFilter | Mapping[str, Any],
        requester_id: str,
    ) -> list[CharacterRecord]:
        """Find viewable characters matching every supplied criterion.

        Raises:
            InvalidSearchCriteriaError: If the criteria fail validation.
        """
        if isinstance(criteria, CharacterFilter):
            character_filter = criteria
        else:
            try:
                character_filter = CharacterFilter.model_validate(criteria)
            except ValidationError as exc:
                raise InvalidSearchCriteriaError(
                    dict(criteria) if isinstance(criteria, Mapping) else {"criteria": criteria},
                    details={"validation_errors": format_violations(exc)},
                ) from exc

        query = CharacterQuery(
            kind=character_filter.kind,
            race=character_filter.race,
            class_name=character_filter.class_name,
            party_id=character_filter.party_id,
            is_public=character_filter.is_public,
            name_contains=character_filter.name,
            min_level=character_filter.min_level,
            max_level=character_filter.max_level,
        )
        return self._visible(self.store.find_by_filter(query), requester_id)

    # =========================================================================
    # Import and Export
    # =========================================================================

    @service_operation("import character")
    def import_character(self, owner_id: str, payload: Any, format_tag: str = "json") -> CharacterRecord:
        """Parse an external document and create a character from it.

        Raises:
            UnsupportedImportFormatError: If no parser handles ``format_tag``.
            InvalidCharacterDataError: If the document cannot be parsed or validated.
            CharacterLimitExceededError: If the owner is at the cap.
        """
        command = self.importers.parse(format_tag, payload)
        record = self._create(owner_id, command)
        logger.info("Character imported", character_id=str(record.id), format=format_tag)
        return record

    @service_operation("export character")
    def export_character(self, character_id: str | UUID, requester_id: str) -> dict[str, Any]:
        """Export a viewable character in the ``json`` import format."""
        return export_character(self._load_viewable(character_id, requester_id))


# =============================================================================
# Factory
# =============================================================================


def create_character_service(settings: Settings | None = None) -> CharacterService:
    """Build a service over the SQLite store with logging configured.

    This is the entry point for running the roster as an application:
    logging, storage and character rules all come from one ``Settings``.

    Args:
        settings: Application settings; defaults to the cached singleton.
    """
    settings = settings or get_settings()
    configure_logging_from_settings(settings)

    store = SqliteCharacterStore(settings.storage.database_path)
    return CharacterService(
        store,
        settings=settings.characters,
        encumbrance_settings=settings.encumbrance,
    )


__all__ = [
    "CharacterService",
    "create_character_service",
    "service_operation",
]
