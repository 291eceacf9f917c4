"""Tests for the in-memory character store."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import pytest

from dnd_roster.core.exceptions import RevisionConflictError, StorageError
from dnd_roster.models import CharacterClass, PendingDeletion
from dnd_roster.storage import CharacterQuery, CharacterStore, InMemoryCharacterStore


class TestInMemoryCharacterStore:
    """Tests for InMemoryCharacterStore."""

    @pytest.fixture
    def store(self) -> InMemoryCharacterStore:
        return InMemoryCharacterStore()

    def test_implements_port(self, store: InMemoryCharacterStore) -> None:
        """Test the store satisfies the storage protocol."""
        assert isinstance(store, CharacterStore)

    def test_create_and_find(self, store: InMemoryCharacterStore, record_factory: Any) -> None:
        """Test a created record can be read back."""
        record = store.create(record_factory())

        assert store.find_by_id(record.id) == record
        assert store.find_by_id(uuid4()) is None
        assert len(store) == 1

    def test_duplicate_id(self, store: InMemoryCharacterStore, record_factory: Any) -> None:
        """Test creating the same id twice fails."""
        record = store.create(record_factory())
        with pytest.raises(StorageError):
            store.create(record)

    def test_update_increments_revision(
        self, store: InMemoryCharacterStore, record_factory: Any
    ) -> None:
        """Test a conditional update bumps the revision."""
        record = store.create(record_factory())
        stored = store.update_by_id(record.id, record.model_copy(update={"name": "New"}), 1)

        assert stored is not None
        assert stored.revision == 2
        assert store.find_by_id(record.id).name == "New"

    def test_stale_revision_conflicts(
        self, store: InMemoryCharacterStore, record_factory: Any
    ) -> None:
        """Test a write against an old revision is rejected."""
        record = store.create(record_factory())
        store.update_by_id(record.id, record, 1)

        with pytest.raises(RevisionConflictError) as exc_info:
            store.update_by_id(record.id, record, 1)
        assert exc_info.value.details["actual_revision"] == 2

    def test_update_missing(self, store: InMemoryCharacterStore, record_factory: Any) -> None:
        """Test updating an unknown id returns None."""
        record = record_factory()
        assert store.update_by_id(record.id, record, 1) is None

    def test_delete(self, store: InMemoryCharacterStore, record_factory: Any) -> None:
        """Test permanent deletion."""
        record = store.create(record_factory())

        assert store.delete_by_id(record.id) is True
        assert store.delete_by_id(record.id) is False
        assert store.find_by_id(record.id) is None

    def test_count_by_owner_active_only(
        self, store: InMemoryCharacterStore, record_factory: Any
    ) -> None:
        """Test pending deletions do not count."""
        store.create(record_factory())
        pending = record_factory().model_copy(
            update={
                "lifecycle": PendingDeletion(
                    expires_at=datetime(2030, 1, 1, tzinfo=UTC),
                    restore_token="t" * 32,
                )
            }
        )
        store.create(pending)
        store.create(record_factory(owner_id="someone-else"))

        assert store.count_by_owner("user-owner") == 1

    def test_find_by_filter_sorted(
        self, store: InMemoryCharacterStore, record_factory: Any
    ) -> None:
        """Test results are sorted by name, case-insensitively."""
        for name in ["zed", "Alpha", "mira"]:
            store.create(record_factory(name=name))

        names = [r.name for r in store.find_by_filter(CharacterQuery())]
        assert names == ["Alpha", "mira", "zed"]

    def test_find_by_filter_criteria(
        self, store: InMemoryCharacterStore, record_factory: Any
    ) -> None:
        """Test class, level and name criteria combine."""
        store.create(
            record_factory(
                name="Gandalf",
                classes=[{"class_name": "wizard", "level": 9}],
            )
        )
        store.create(record_factory(name="Gimli"))

        wizards = store.find_by_filter(CharacterQuery(class_name=CharacterClass.WIZARD))
        high = store.find_by_filter(CharacterQuery(min_level=5))
        named = store.find_by_filter(CharacterQuery(name_contains="GIM"))

        assert [r.name for r in wizards] == ["Gandalf"]
        assert [r.name for r in high] == ["Gandalf"]
        assert [r.name for r in named] == ["Gimli"]
