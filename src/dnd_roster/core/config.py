"""Configuration management for the D&D 5E character roster.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from dnd_roster.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.characters.max_characters_per_owner
    10

Environment Variables:
    DND_ROSTER_MAX_CHARACTERS_PER_OWNER: Per-owner character cap
    DND_ROSTER_RESTORE_WINDOW_SECONDS: Lifetime of a restore token
    DND_ROSTER_UPDATE_RETRY_ATTEMPTS: Attempts on revision conflicts
    DND_ROSTER_DATABASE_PATH: Path to the SQLite database file
    DND_ROSTER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_ROSTER_LOG_FILE: Optional log file (stdout when unset)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_roster.core.constants import CARRYING_CAPACITY_MULTIPLIER
from dnd_roster.core.exceptions import ConfigurationError


class CharacterSettings(BaseSettings):
    """Configuration for character lifecycle rules.

    Attributes:
        max_characters_per_owner: Active characters an owner may hold.
        restore_window_seconds: How long a soft-deleted character can be restored.
        update_retry_attempts: Attempts for a write that hits a revision conflict.
        default_page_size: Page size used when a listing does not ask for one.
        max_page_size: Upper bound applied to requested page sizes.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_ROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_characters_per_owner: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Maximum active characters per owner",
    )
    restore_window_seconds: int = Field(
        default=30,
        ge=1,
        le=86400,
        description="Restore token lifetime in seconds",
    )
    update_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for conflicting writes",
    )
    default_page_size: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Default listing page size",
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Maximum listing page size",
    )

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "CharacterSettings":
        """Ensure the default page size fits under the maximum.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If default_page_size > max_page_size.
        """
        if self.default_page_size > self.max_page_size:
            raise ConfigurationError(
                f"default_page_size ({self.default_page_size}) must not exceed "
                f"max_page_size ({self.max_page_size})",
                config_key="default_page_size",
            )
        return self


class EncumbranceSettings(BaseSettings):
    """Multipliers of the Strength score that bound each encumbrance tier.

    Carried weight up to ``light_multiplier * STR`` is unencumbered, up to
    ``heavy_multiplier * STR`` is lightly encumbered, and up to
    ``capacity_multiplier * STR`` (the carrying capacity) is heavily
    encumbered. Anything above capacity is overloaded.

    Attributes:
        light_multiplier: Upper bound of the unencumbered tier.
        heavy_multiplier: Upper bound of the lightly encumbered tier.
        capacity_multiplier: Carrying capacity multiplier.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_ROSTER_ENCUMBRANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    light_multiplier: int = Field(default=5, ge=1, description="Unencumbered limit per STR point")
    heavy_multiplier: int = Field(default=10, ge=1, description="Light tier limit per STR point")
    capacity_multiplier: int = Field(
        default=CARRYING_CAPACITY_MULTIPLIER,
        ge=1,
        description="Capacity per STR point",
    )

    @model_validator(mode="after")
    def validate_ordering(self) -> "EncumbranceSettings":
        """Ensure tier multipliers are strictly increasing.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the multipliers are not ordered.
        """
        if not self.light_multiplier < self.heavy_multiplier < self.capacity_multiplier:
            raise ConfigurationError(
                "Encumbrance multipliers must satisfy light < heavy < capacity",
                config_key="heavy_multiplier",
            )
        return self


class StorageSettings(BaseSettings):
    """Configuration for persistent storage.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_ROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/dnd_roster.db"),
        description="Path to SQLite database",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_file: Optional file that receives log entries instead of stdout.
        characters: Character lifecycle settings.
        encumbrance: Encumbrance tier settings.
        storage: Storage settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_ROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D 5E Character Roster",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_file: Path | None = Field(
        default=None,
        description="Log file path; stdout when unset",
    )

    characters: CharacterSettings = Field(default_factory=CharacterSettings)
    encumbrance: EncumbranceSettings = Field(default_factory=EncumbranceSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.

    Example:
        >>> settings = get_settings()
        >>> settings.app_name
        'D&D 5E Character Roster'
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "CharacterSettings",
    "EncumbranceSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
