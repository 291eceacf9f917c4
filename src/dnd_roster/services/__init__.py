"""Service layer for the character roster.

The services are the only entry points callers need. Every public
operation returns a ``ServiceResult`` instead of raising.

Submodules:
    characters: CharacterService (CRUD, lifecycle, HP, stats, search)
    templates: CharacterTemplateService (templates, cloning, bulk operations)
    access: Ownership and visibility permissions
    importers: Import format registry and export
"""

from __future__ import annotations

from dnd_roster.services.access import (
    AccessControl,
    OwnerAccessControl,
    permissions_for,
    record_permissions,
)
from dnd_roster.services.characters import (
    CharacterService,
    create_character_service,
    service_operation,
)
from dnd_roster.services.importers import (
    EXPORT_EXCLUDED_FIELDS,
    ImportParser,
    ImportRegistry,
    default_registry,
    export_character,
    parse_dndbeyond,
    parse_json,
)
from dnd_roster.services.templates import CharacterTemplateService


__all__ = [
    # Access
    "AccessControl",
    "OwnerAccessControl",
    "permissions_for",
    "record_permissions",
    # Services
    "CharacterService",
    "CharacterTemplateService",
    "create_character_service",
    "service_operation",
    # Import/Export
    "ImportParser",
    "ImportRegistry",
    "EXPORT_EXCLUDED_FIELDS",
    "default_registry",
    "export_character",
    "parse_dndbeyond",
    "parse_json",
]
