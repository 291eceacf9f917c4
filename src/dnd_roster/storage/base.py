"""Storage port for character records.

The character service depends only on the ``CharacterStore`` protocol, so
any backend that implements these six methods can be injected. Adapters
raise ``StorageError`` on backend failures and ``RevisionConflictError``
when a conditional write finds a newer revision.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from dnd_roster.models.character import CharacterRecord
from dnd_roster.models.enums import CharacterClass, CharacterKind, LifecycleState, Race


class CharacterQuery(BaseModel):
    """Filter understood by ``CharacterStore.find_by_filter``.

    Every criterion left as None matches everything. ``lifecycle_state``
    defaults to active records only; set it to None to include records
    pending deletion.

    Attributes:
        owner_id: Only records owned by this user.
        kind: Only player characters or only NPCs.
        race: Only this race.
        class_name: Only records with levels in this class.
        is_public: Only public (True) or private (False) records.
        party_id: Only records in this party.
        name_contains: Case-insensitive substring of the name.
        min_level: Lowest total level, inclusive.
        max_level: Highest total level, inclusive.
        lifecycle_state: Only records in this lifecycle state.
    """

    model_config = ConfigDict(frozen=True)

    owner_id: str | None = None
    kind: CharacterKind | None = None
    race: Race | None = None
    class_name: CharacterClass | None = None
    is_public: bool | None = None
    party_id: str | None = None
    name_contains: str | None = None
    min_level: int | None = None
    max_level: int | None = None
    lifecycle_state: LifecycleState | None = LifecycleState.ACTIVE

    def matches(self, record: CharacterRecord) -> bool:
        """Check a record against every criterion."""
        if self.owner_id is not None and record.owner_id != self.owner_id:
            return False
        if self.kind is not None and record.kind != self.kind:
            return False
        if self.race is not None and record.race != self.race:
            return False
        if self.class_name is not None and record.class_entry(self.class_name) is None:
            return False
        if self.is_public is not None and record.is_public != self.is_public:
            return False
        if self.party_id is not None and record.party_id != self.party_id:
            return False
        if self.name_contains is not None and self.name_contains.lower() not in record.name.lower():
            return False
        if self.min_level is not None and record.total_level < self.min_level:
            return False
        if self.max_level is not None and record.total_level > self.max_level:
            return False
        if self.lifecycle_state is not None and record.lifecycle.state != self.lifecycle_state:
            return False
        return True


def sort_key(record: CharacterRecord) -> tuple[str, str]:
    """Listing order: name (case-insensitive), then id for stability."""
    return (record.name.lower(), str(record.id))


@runtime_checkable
class CharacterStore(Protocol):
    """Persistence operations the character service relies on."""

    def find_by_id(self, character_id: UUID) -> CharacterRecord | None:
        """Load a record in any lifecycle state, or None."""
        ...

    def create(self, record: CharacterRecord) -> CharacterRecord:
        """Insert a new record and return it as stored."""
        ...

    def update_by_id(
        self,
        character_id: UUID,
        record: CharacterRecord,
        expected_revision: int,
    ) -> CharacterRecord | None:
        """Replace a record if its stored revision is ``expected_revision``.

        Returns the stored record with its revision incremented, or None if
        no record has this id.

        Raises:
            RevisionConflictError: If the stored revision has moved on.
        """
        ...

    def delete_by_id(self, character_id: UUID) -> bool:
        """Permanently remove a record. Returns False if it did not exist."""
        ...

    def count_by_owner(self, owner_id: str) -> int:
        """Count an owner's active records."""
        ...

    def find_by_filter(self, query: CharacterQuery) -> list[CharacterRecord]:
        """Find matching records, sorted by name."""
        ...


__all__ = [
    "CharacterQuery",
    "CharacterStore",
    "sort_key",
]
