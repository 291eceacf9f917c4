"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the character roster test suite.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest

from dnd_roster.core.config import CharacterSettings, EncumbranceSettings
from dnd_roster.models.character import CharacterRecord
from dnd_roster.services.characters import CharacterService
from dnd_roster.storage.memory import InMemoryCharacterStore


if TYPE_CHECKING:
    from collections.abc import Generator


OWNER_ID = "user-owner"
OTHER_USER_ID = "user-other"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_roster.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults after a test that configures logging."""
    import structlog

    from dnd_roster.core.logging import configure_logging

    yield
    configure_logging()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DND_ROSTER_MAX_CHARACTERS_PER_OWNER": "3",
        "DND_ROSTER_RESTORE_WINDOW_SECONDS": "60",
        "DND_ROSTER_DEBUG": "true",
        "DND_ROSTER_LOG_LEVEL": "DEBUG",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def character_settings() -> CharacterSettings:
    """Character settings with the documented defaults, independent of env."""
    return CharacterSettings(
        max_characters_per_owner=10,
        restore_window_seconds=30,
        update_retry_attempts=3,
        default_page_size=20,
        max_page_size=100,
    )


# =============================================================================
# Clock
# =============================================================================


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at a known instant."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def sample_ability_scores() -> dict[str, int]:
    """Provide sample character ability scores.

    Returns:
        Dictionary of ability scores.
    """
    return {
        "strength": 16,
        "dexterity": 14,
        "constitution": 15,
        "intelligence": 10,
        "wisdom": 12,
        "charisma": 8,
    }


@pytest.fixture
def fighter_payload(sample_ability_scores: dict[str, int]) -> dict[str, Any]:
    """Creation payload for a level 5 fighter.

    Returns:
        Dictionary accepted by ``CharacterService.create_character``.
    """
    return {
        "name": "Thorin",
        "kind": "pc",
        "race": "dwarf",
        "classes": [{"class_name": "fighter", "level": 5, "subclass": "Champion"}],
        "ability_scores": sample_ability_scores,
        "hit_points": {"maximum": 44, "current": 44},
        "armor_class": 18,
        "saving_throws": {"strength": True, "constitution": True},
        "skills": ["athletics", "perception"],
        "equipment": [
            {"name": "Chain Mail", "weight": 55, "equipped": True},
            {"name": "Javelin", "weight": 2, "quantity": 5},
        ],
    }


@pytest.fixture
def multiclass_payload() -> dict[str, Any]:
    """Creation payload for a fighter 3 / wizard 2.

    Returns:
        Dictionary accepted by ``CharacterService.create_character``.
    """
    return {
        "name": "Elaria",
        "kind": "pc",
        "race": "half-elf",
        "classes": [
            {"class_name": "fighter", "level": 3},
            {"class_name": "wizard", "level": 2},
        ],
        "ability_scores": {
            "strength": 14,
            "dexterity": 12,
            "constitution": 14,
            "intelligence": 16,
            "wisdom": 10,
            "charisma": 8,
        },
        "hit_points": {"maximum": 38, "current": 38},
        "armor_class": 16,
    }


def make_payload(name: str, **overrides: Any) -> dict[str, Any]:
    """Build a minimal valid creation payload."""
    payload: dict[str, Any] = {
        "name": name,
        "kind": "pc",
        "race": "human",
        "classes": [{"class_name": "fighter", "level": 1}],
        "ability_scores": {
            "strength": 10,
            "dexterity": 10,
            "constitution": 10,
            "intelligence": 10,
            "wisdom": 10,
            "charisma": 10,
        },
        "hit_points": {"maximum": 10, "current": 10},
        "armor_class": 12,
    }
    payload.update(overrides)
    return payload


def make_record(**overrides: Any) -> CharacterRecord:
    """Build a record directly, bypassing the service."""
    data = make_payload("Record", owner_id=OWNER_ID)
    data.update(overrides)
    return CharacterRecord.model_validate(data)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryCharacterStore:
    """Empty in-memory store."""
    return InMemoryCharacterStore()


@pytest.fixture
def service(
    store: InMemoryCharacterStore,
    character_settings: CharacterSettings,
    clock: FakeClock,
) -> CharacterService:
    """Character service over the in-memory store with a fake clock."""
    return CharacterService(
        store,
        settings=character_settings,
        encumbrance_settings=EncumbranceSettings(),
        clock=clock,
    )


@pytest.fixture
def fighter(service: CharacterService, fighter_payload: dict[str, Any]) -> CharacterRecord:
    """A stored private fighter owned by ``OWNER_ID``."""
    result = service.create_character(OWNER_ID, fighter_payload)
    assert result.success
    return result.data


@pytest.fixture
def payload_factory() -> Any:
    """Factory for minimal valid creation payloads."""
    return make_payload


@pytest.fixture
def record_factory() -> Any:
    """Factory for records built without the service."""
    return make_record
