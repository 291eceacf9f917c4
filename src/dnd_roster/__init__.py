"""dnd_roster - D&D 5E character roster and rule engine.

A service layer for creating, storing and querying D&D 5E characters,
with pure rule engines for derived statistics.

ARCHITECTURE:
- Records are frozen snapshots; every change produces a new revision
- Rule engines are pure functions of a record
- Services return results; exceptions never cross the service boundary

Example:
    >>> from dnd_roster import CharacterService, InMemoryCharacterStore
    >>>
    >>> service = CharacterService(InMemoryCharacterStore())
    >>> created = service.create_character("user-1", payload)
    >>> stats = service.calculate_character_stats(created.data.id, "user-1")
    >>> stats.data.proficiency_bonus
    3

Modules:
    core: Configuration, logging, results and exceptions.
    models: Pydantic V2 records, commands and derived contracts.
    rules: Validation, stats, progression, damage, spellcasting, encumbrance.
    storage: Storage port with in-memory and SQLite adapters.
    services: Character, template and bulk services.
"""

from __future__ import annotations

# Core
from dnd_roster.core.config import Settings, get_settings
from dnd_roster.core.exceptions import CharacterServiceError, DndRosterError
from dnd_roster.core.logging import configure_logging, get_logger
from dnd_roster.core.result import Failure, ServiceError, ServiceResult, Success

# Models
from dnd_roster.models import (
    CharacterClass,
    CharacterCreate,
    CharacterFilter,
    CharacterKind,
    CharacterRecord,
    CharacterUpdate,
    Race,
)

# Storage
from dnd_roster.storage import (
    CharacterStore,
    InMemoryCharacterStore,
    SqliteCharacterStore,
)

# Services
from dnd_roster.services import (
    CharacterService,
    CharacterTemplateService,
    ImportRegistry,
    create_character_service,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DndRosterError",
    "CharacterServiceError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "Success",
    "Failure",
    "ServiceError",
    "ServiceResult",
    # Models
    "CharacterRecord",
    "CharacterCreate",
    "CharacterUpdate",
    "CharacterFilter",
    "CharacterClass",
    "CharacterKind",
    "Race",
    # Storage
    "CharacterStore",
    "InMemoryCharacterStore",
    "SqliteCharacterStore",
    # Services
    "CharacterService",
    "CharacterTemplateService",
    "ImportRegistry",
    "create_character_service",
]
