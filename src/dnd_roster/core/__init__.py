"""Core module providing configuration, logging, results, and base exceptions.

This module serves as the foundation for the D&D 5E character roster,
providing infrastructure shared by the models, rule engines, storage
adapters and services.

Exports:
    Exceptions:
        DndRosterError: Base exception for all application errors.
        CharacterServiceError: Base of every coded service failure.
        StorageError: Failures raised by storage adapters.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_logging_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        operation_context: Bind log context for a block.

    Results:
        Success, Failure, ServiceResult, ServiceError.
"""

from __future__ import annotations

from dnd_roster.core.config import (
    CharacterSettings,
    EncumbranceSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dnd_roster.core.exceptions import (
    CharacterLimitExceededError,
    CharacterNotFoundError,
    CharacterServiceError,
    ConfigurationError,
    DatabaseError,
    DndRosterError,
    InternalServiceError,
    InvalidCharacterDataError,
    InvalidCharacterLevelError,
    InvalidMulticlassCombinationError,
    InvalidRestoreTokenError,
    InvalidSearchCriteriaError,
    RevisionConflictError,
    StorageError,
    UnauthorizedAccessError,
    UnsupportedImportFormatError,
)
from dnd_roster.core.logging import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    operation_context,
)
from dnd_roster.core.result import (
    Failure,
    ServiceError,
    ServiceResult,
    Success,
    failure_result,
    success_result,
)


__all__ = [
    # Base exception
    "DndRosterError",
    "ConfigurationError",
    # Character service exceptions
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
    # Storage exceptions
    "StorageError",
    "RevisionConflictError",
    # Configuration
    "Settings",
    "CharacterSettings",
    "EncumbranceSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "operation_context",
    # Results
    "ServiceError",
    "Success",
    "Failure",
    "ServiceResult",
    "success_result",
    "failure_result",
]
