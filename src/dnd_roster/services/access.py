"""Access control for character records.

Permissions are a pure function of two facts: whether the requester owns
the record and whether the record is public.

    view               owner or public
    edit/delete/share  owner only
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dnd_roster.models.character import CharacterRecord
from dnd_roster.models.stats import CharacterPermissions


@runtime_checkable
class AccessControl(Protocol):
    """Decides whether a requester owns a record."""

    def is_owner(self, record: CharacterRecord, requester_id: str) -> bool:
        ...


class OwnerAccessControl:
    """Ownership is an exact match on ``owner_id``."""

    def is_owner(self, record: CharacterRecord, requester_id: str) -> bool:
        return bool(requester_id) and record.owner_id == requester_id


def permissions_for(is_owner: bool, is_public: bool) -> CharacterPermissions:
    """Build the permission set for an ownership/visibility pair.

    Example:
        >>> permissions_for(is_owner=False, is_public=True).can_view
        True
    """
    return CharacterPermissions(
        can_view=is_owner or is_public,
        can_edit=is_owner,
        can_delete=is_owner,
        can_share=is_owner,
        is_owner=is_owner,
        is_public=is_public,
    )


def record_permissions(
    access: AccessControl,
    record: CharacterRecord,
    requester_id: str,
) -> CharacterPermissions:
    """Permissions of a requester on a specific record."""
    return permissions_for(access.is_owner(record, requester_id), record.is_public)


__all__ = [
    "AccessControl",
    "OwnerAccessControl",
    "permissions_for",
    "record_permissions",
]
