"""SQLite persistence for character records.

Each record is stored as a JSON document next to the columns used for
filtering and for the conditional update:

- id, owner_id, name, kind, race, is_public, party_id
- lifecycle_state, revision
- created_at, updated_at

Storage location defaults to ``StorageSettings.database_path``.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator
from uuid import UUID

from dnd_roster.core.config import get_settings
from dnd_roster.core.exceptions import RevisionConflictError, StorageError
from dnd_roster.core.logging import get_logger
from dnd_roster.models.character import CharacterRecord
from dnd_roster.storage.base import CharacterQuery, sort_key

logger = get_logger(__name__)


_SELECT_DOCUMENT = "SELECT document FROM characters"


class SqliteCharacterStore:
    """SQLite-backed ``CharacterStore``.

    Every call opens its own connection, so an instance can be shared
    across threads. Conditional updates run as a single
    ``UPDATE ... WHERE revision = ?`` statement.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the store and create the schema if needed.

        Args:
            db_path: Path to database file. If None, uses the configured path.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

        logger.info("Character store initialized", db_path=str(self.db_path))

    @contextmanager
    def _get_connection(self, operation: str) -> Generator[sqlite3.Connection, None, None]:
        """Get a connection that commits on success and rolls back on error.

        ``sqlite3`` failures are re-raised as ``StorageError`` tagged with
        the operation name.
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(f"Could not open database: {exc}", operation=operation) from exc

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(f"Database failure: {exc}", operation=operation) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection("init_schema") as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    kind TEXT NOT NULL,
                    race TEXT NOT NULL,
                    is_public INTEGER NOT NULL DEFAULT 0,
                    party_id TEXT,
                    lifecycle_state TEXT NOT NULL,
                    revision INTEGER NOT NULL,
                    document TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_owner
                ON characters(owner_id, lifecycle_state)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_public
                ON characters(is_public)
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    @staticmethod
    def _row_values(record: CharacterRecord) -> tuple[object, ...]:
        return (
            record.owner_id,
            record.name,
            record.kind.value,
            record.race.value,
            int(record.is_public),
            record.party_id,
            record.lifecycle.state,
            record.revision,
            record.model_dump_json(),
            record.created_at.isoformat(),
            record.updated_at.isoformat(),
        )

    @staticmethod
    def _load(row: sqlite3.Row) -> CharacterRecord:
        return CharacterRecord.model_validate_json(row["document"])

    # =========================================================================
    # CharacterStore Operations
    # =========================================================================

    def find_by_id(self, character_id: UUID) -> CharacterRecord | None:
        with self._get_connection("find_by_id") as conn:
            cursor = conn.cursor()
            cursor.execute(f"{_SELECT_DOCUMENT} WHERE id = ?", (str(character_id),))
            row = cursor.fetchone()

        if row:
            return self._load(row)
        return None

    def create(self, record: CharacterRecord) -> CharacterRecord:
        with self._get_connection("create") as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO characters
                (id, owner_id, name, kind, race, is_public, party_id,
                 lifecycle_state, revision, document, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (str(record.id), *self._row_values(record)))

        logger.debug("Stored character", character_id=str(record.id))
        return record

    def update_by_id(
        self,
        character_id: UUID,
        record: CharacterRecord,
        expected_revision: int,
    ) -> CharacterRecord | None:
        stored = record.model_copy(
            update={"id": character_id, "revision": expected_revision + 1}
        )

        with self._get_connection("update_by_id") as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE characters
                SET owner_id = ?, name = ?, kind = ?, race = ?, is_public = ?,
                    party_id = ?, lifecycle_state = ?, revision = ?, document = ?,
                    created_at = ?, updated_at = ?
                WHERE id = ? AND revision = ?
            """, (*self._row_values(stored), str(character_id), expected_revision))

            if cursor.rowcount == 0:
                cursor.execute(
                    "SELECT revision FROM characters WHERE id = ?", (str(character_id),)
                )
                row = cursor.fetchone()
                if row is None:
                    return None
                raise RevisionConflictError(
                    str(character_id),
                    expected_revision=expected_revision,
                    actual_revision=row["revision"],
                )

        return stored

    def delete_by_id(self, character_id: UUID) -> bool:
        with self._get_connection("delete_by_id") as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM characters WHERE id = ?", (str(character_id),))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted character", character_id=str(character_id))

        return deleted

    def count_by_owner(self, owner_id: str) -> int:
        with self._get_connection("count_by_owner") as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT COUNT(*) FROM characters
                WHERE owner_id = ? AND lifecycle_state = 'active'
            """, (owner_id,))
            return cursor.fetchone()[0]

    def find_by_filter(self, query: CharacterQuery) -> list[CharacterRecord]:
        # Indexed columns narrow the scan; the rest is matched on the document
        clauses: list[str] = []
        params: list[object] = []
        if query.owner_id is not None:
            clauses.append("owner_id = ?")
            params.append(query.owner_id)
        if query.kind is not None:
            clauses.append("kind = ?")
            params.append(query.kind.value)
        if query.race is not None:
            clauses.append("race = ?")
            params.append(query.race.value)
        if query.is_public is not None:
            clauses.append("is_public = ?")
            params.append(int(query.is_public))
        if query.party_id is not None:
            clauses.append("party_id = ?")
            params.append(query.party_id)
        if query.lifecycle_state is not None:
            clauses.append("lifecycle_state = ?")
            params.append(query.lifecycle_state.value)

        sql = _SELECT_DOCUMENT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        with self._get_connection("find_by_filter") as conn:
            cursor = conn.cursor()
            cursor.execute(sql, params)
            rows = cursor.fetchall()

        records = [self._load(row) for row in rows]
        return sorted((r for r in records if query.matches(r)), key=sort_key)

    def count(self) -> int:
        """Total number of stored records in any state."""
        with self._get_connection("count") as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM characters")
            return cursor.fetchone()[0]


# =============================================================================
# Singleton Instance
# =============================================================================


_store_instance: SqliteCharacterStore | None = None


def get_store() -> SqliteCharacterStore:
    """Get the global SQLite store at the configured path.

    Returns:
        SqliteCharacterStore singleton instance.
    """
    global _store_instance

    if _store_instance is None:
        _store_instance = SqliteCharacterStore()

    return _store_instance


__all__ = [
    "SqliteCharacterStore",
    "get_store",
]
