"""In-process character store.

Records are frozen snapshots, so the store keeps them as-is and hands the
same objects back. A lock serializes writes so that the revision check
and the replace happen as one step.
"""

from __future__ import annotations

import threading
from uuid import UUID

from dnd_roster.core.exceptions import RevisionConflictError, StorageError
from dnd_roster.core.logging import get_logger
from dnd_roster.models.character import CharacterRecord
from dnd_roster.storage.base import CharacterQuery, sort_key

logger = get_logger(__name__)


class InMemoryCharacterStore:
    """Dictionary-backed ``CharacterStore``.

    Suitable for tests and single-process use. Nothing survives the
    process.
    """

    def __init__(self) -> None:
        self._records: dict[UUID, CharacterRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def find_by_id(self, character_id: UUID) -> CharacterRecord | None:
        with self._lock:
            return self._records.get(character_id)

    def create(self, record: CharacterRecord) -> CharacterRecord:
        with self._lock:
            if record.id in self._records:
                raise StorageError(
                    f"Character {record.id} already exists",
                    operation="create",
                )
            self._records[record.id] = record
        logger.debug("Stored character", character_id=str(record.id))
        return record

    def update_by_id(
        self,
        character_id: UUID,
        record: CharacterRecord,
        expected_revision: int,
    ) -> CharacterRecord | None:
        with self._lock:
            current = self._records.get(character_id)
            if current is None:
                return None
            if current.revision != expected_revision:
                raise RevisionConflictError(
                    str(character_id),
                    expected_revision=expected_revision,
                    actual_revision=current.revision,
                )
            stored = record.model_copy(
                update={"id": character_id, "revision": expected_revision + 1}
            )
            self._records[character_id] = stored
        return stored

    def delete_by_id(self, character_id: UUID) -> bool:
        with self._lock:
            return self._records.pop(character_id, None) is not None

    def count_by_owner(self, owner_id: str) -> int:
        with self._lock:
            return sum(
                1
                for record in self._records.values()
                if record.owner_id == owner_id and record.is_active
            )

    def find_by_filter(self, query: CharacterQuery) -> list[CharacterRecord]:
        with self._lock:
            matches = [record for record in self._records.values() if query.matches(record)]
        return sorted(matches, key=sort_key)


__all__ = ["InMemoryCharacterStore"]
