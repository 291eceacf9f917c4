"""Custom exception hierarchy for the D&D 5E character roster.

All exceptions inherit from DndRosterError, enabling unified error handling
at the service boundary while preserving domain-specific context. Character
service errors carry a stable ``code`` so that outer layers can map each one
to a transport status without string matching.

Example:
    >>> from dnd_roster.core.exceptions import CharacterNotFoundError
    >>> raise CharacterNotFoundError(character_id="3f2a...")
"""

from __future__ import annotations

from typing import Any


class DndRosterError(Exception):
    """Base exception for all character roster errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(DndRosterError):
    """Raised when application configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Character Service Exceptions
# =============================================================================


class CharacterServiceError(DndRosterError):
    """Base exception for every failure the character service reports.

    Subclasses set ``code`` to a stable identifier. The service boundary
    converts these exceptions into ``Failure`` results.
    """

    code: str = "OPERATION_FAILED"


class InvalidCharacterDataError(CharacterServiceError):
    """Raised when character data fails schema or range validation.

    The ``validation_errors`` detail holds one entry per field violation.
    """

    code = "INVALID_CHARACTER_DATA"

    def __init__(
        self,
        message: str = "Character data validation failed",
        *,
        validation_errors: list[dict[str, Any]] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the list of field violations.

        Args:
            message: Human-readable error description.
            validation_errors: Field-level violations ({field, message, type}).
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["validation_errors"] = list(validation_errors or [])
        super().__init__(message, details=combined_details)

    @property
    def validation_errors(self) -> list[dict[str, Any]]:
        """Field-level violations reported by the validation gate."""
        return self.details["validation_errors"]


class InvalidCharacterLevelError(CharacterServiceError):
    """Raised when a total character level falls outside 1-20."""

    code = "INVALID_CHARACTER_LEVEL"

    def __init__(self, level: int, *, details: dict[str, Any] | None = None) -> None:
        """Initialize with the offending level.

        Args:
            level: The rejected total level.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["level"] = level
        super().__init__(
            f"Invalid character level: {level}. Must be between 1 and 20",
            details=combined_details,
        )


class InvalidMulticlassCombinationError(CharacterServiceError):
    """Raised when a class list repeats a class name."""

    code = "INVALID_MULTICLASS_COMBINATION"

    def __init__(self, classes: list[str], *, details: dict[str, Any] | None = None) -> None:
        """Initialize with the submitted class names.

        Args:
            classes: Class names in submission order.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["classes"] = list(classes)
        super().__init__(
            f"Invalid multiclass combination: {', '.join(classes)}",
            details=combined_details,
        )


class CharacterNotFoundError(CharacterServiceError):
    """Raised when a character does not exist or is no longer readable."""

    code = "CHARACTER_NOT_FOUND"

    def __init__(self, character_id: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize with the missing character's ID.

        Args:
            character_id: The ID that was looked up.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["character_id"] = str(character_id)
        super().__init__(
            f'Character with ID "{character_id}" not found',
            details=combined_details,
        )


class UnauthorizedAccessError(CharacterServiceError):
    """Raised when a requester lacks permission for an operation."""

    code = "UNAUTHORIZED_ACCESS"

    def __init__(
        self,
        character_id: str,
        user_id: str,
        *,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the character and requester involved.

        Args:
            character_id: The character being accessed.
            user_id: The requester identity.
            operation: Optional name of the denied operation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["character_id"] = str(character_id)
        combined_details["user_id"] = user_id
        if operation:
            combined_details["operation"] = operation
        super().__init__(
            f'User "{user_id}" is not authorized to access character "{character_id}"',
            details=combined_details,
        )


class CharacterLimitExceededError(CharacterServiceError):
    """Raised when an owner already holds the maximum number of characters."""

    code = "CHARACTER_LIMIT_EXCEEDED"

    def __init__(
        self,
        current_count: int,
        max_allowed: int,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the current count and the cap.

        Args:
            current_count: Characters the owner currently holds.
            max_allowed: The configured per-owner cap.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["current_count"] = current_count
        combined_details["max_allowed"] = max_allowed
        super().__init__(
            f"Character limit exceeded. Current: {current_count}, Maximum: {max_allowed}",
            details=combined_details,
        )


class DatabaseError(CharacterServiceError):
    """Raised when the storage collaborator fails during an operation."""

    code = "DATABASE_ERROR"

    def __init__(
        self,
        operation: str,
        *,
        original_error: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the failing operation name.

        Args:
            operation: Name of the operation that was running.
            original_error: Message of the underlying storage failure.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["operation"] = operation
        if original_error:
            combined_details["original_error"] = original_error
        super().__init__(f"Database error during {operation}", details=combined_details)


class InvalidSearchCriteriaError(CharacterServiceError):
    """Raised when a search term or filter is empty or malformed."""

    code = "INVALID_SEARCH_CRITERIA"

    def __init__(self, criteria: dict[str, Any], *, details: dict[str, Any] | None = None) -> None:
        """Initialize with the rejected criteria.

        Args:
            criteria: The criteria as submitted.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["criteria"] = criteria
        super().__init__("Invalid search criteria provided", details=combined_details)


class InvalidRestoreTokenError(CharacterServiceError):
    """Raised when a restore token does not match a pending deletion."""

    code = "INVALID_RESTORE_TOKEN"

    def __init__(self, character_id: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize with the character whose restore was attempted.

        Args:
            character_id: The character being restored.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["character_id"] = str(character_id)
        super().__init__(
            f'Restore token is not valid for character "{character_id}"',
            details=combined_details,
        )


class UnsupportedImportFormatError(CharacterServiceError):
    """Raised when no parser is registered for an import format tag."""

    code = "UNSUPPORTED_IMPORT_FORMAT"

    def __init__(
        self,
        format_tag: str,
        *,
        supported: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the unknown tag.

        Args:
            format_tag: The tag that was requested.
            supported: Tags that are registered.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["format"] = format_tag
        if supported is not None:
            combined_details["supported"] = supported
        super().__init__(f"Unsupported import format: {format_tag}", details=combined_details)


class InternalServiceError(CharacterServiceError):
    """Reported when an unexpected exception reaches the service boundary."""

    code = "INTERNAL_ERROR"

    def __init__(
        self,
        operation: str,
        *,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the operation that failed.

        Args:
            operation: Name of the operation that was running.
            reason: Description of the unexpected failure.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["operation"] = operation
        if reason:
            combined_details["reason"] = reason
        super().__init__(f"Internal error during {operation}", details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(DndRosterError):
    """Raised by storage adapters when the backing store fails.

    The character service wraps these into ``DatabaseError`` results.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with operation context.

        Args:
            message: Human-readable error description.
            operation: The storage operation that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if operation:
            combined_details["operation"] = operation
        super().__init__(message, details=combined_details)


class RevisionConflictError(StorageError):
    """Raised when a conditional write finds a newer revision in the store."""

    def __init__(
        self,
        character_id: str,
        *,
        expected_revision: int,
        actual_revision: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the revisions involved.

        Args:
            character_id: The record that was being written.
            expected_revision: Revision the writer read.
            actual_revision: Revision currently stored, when known.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["character_id"] = str(character_id)
        combined_details["expected_revision"] = expected_revision
        if actual_revision is not None:
            combined_details["actual_revision"] = actual_revision
        super().__init__(
            f"Revision conflict while writing character {character_id}",
            operation="update_by_id",
            details=combined_details,
        )


__all__ = [
    # Base
    "DndRosterError",
    "ConfigurationError",
    # Character service
    "CharacterServiceError",
    "InvalidCharacterDataError",
    "InvalidCharacterLevelError",
    "InvalidMulticlassCombinationError",
    "CharacterNotFoundError",
    "UnauthorizedAccessError",
    "CharacterLimitExceededError",
    "DatabaseError",
    "InvalidSearchCriteriaError",
    "InvalidRestoreTokenError",
    "UnsupportedImportFormatError",
    "InternalServiceError",
    # Storage
    "StorageError",
    "RevisionConflictError",
]
