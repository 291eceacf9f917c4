"""Storage adapters for character records.

Provides the ``CharacterStore`` port and two implementations:
- InMemoryCharacterStore (tests, single process)
- SqliteCharacterStore (persistent, one JSON document per record)
"""

from dnd_roster.storage.base import CharacterQuery, CharacterStore, sort_key
from dnd_roster.storage.database import SqliteCharacterStore, get_store
from dnd_roster.storage.memory import InMemoryCharacterStore

__all__ = [
    "CharacterQuery",
    "CharacterStore",
    "sort_key",
    "InMemoryCharacterStore",
    "SqliteCharacterStore",
    "get_store",
]
