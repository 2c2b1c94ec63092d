"""User preference storage service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from campus_dining.domain.preferences import SimplePreferences, UserPreferences

_logger = logging.getLogger(__name__)


class PreferenceRepository(Protocol):
    """Persistence interface for user preferences."""

    def get_preferences(self, user_id: UUID) -> UserPreferences | None:
        """Return the user's free-text preferences, if saved."""

    def save_preferences(self, user_id: UUID, preferences: UserPreferences) -> None:
        """Upsert the user's free-text preferences."""

    def get_simple_preferences(self, user_id: UUID) -> SimplePreferences | None:
        """Return the user's checkbox preferences, if saved."""

    def save_simple_preferences(
        self, user_id: UUID, preferences: SimplePreferences
    ) -> None:
        """Upsert the user's checkbox preferences."""


@dataclass
class PreferenceService:
    """Loads and saves preferences, converting store failures to defaults."""

    repository: PreferenceRepository

    def get_preferences(self, user_id: UUID) -> UserPreferences | None:
        """Return saved preferences or None when missing or unreadable."""
        try:
            return self.repository.get_preferences(user_id)
        except Exception:
            _logger.exception("Failed to load preferences", extra={"user_id": user_id})
            return None

    def save_preferences(self, user_id: UUID, preferences: UserPreferences) -> bool:
        """Persist preferences wholesale and report success."""
        try:
            self.repository.save_preferences(user_id, preferences)
        except Exception:
            _logger.exception("Failed to save preferences", extra={"user_id": user_id})
            return False
        _logger.info("Saved preferences for user %s", user_id)
        return True

    def get_simple_preferences(self, user_id: UUID) -> SimplePreferences:
        """Return checkbox preferences, falling back to defaults."""
        try:
            stored = self.repository.get_simple_preferences(user_id)
        except Exception:
            _logger.exception(
                "Failed to load simple preferences", extra={"user_id": user_id}
            )
            return SimplePreferences()
        return stored or SimplePreferences()

    def save_simple_preferences(
        self, user_id: UUID, preferences: SimplePreferences
    ) -> bool:
        """Persist checkbox preferences and report success."""
        try:
            self.repository.save_simple_preferences(user_id, preferences)
        except Exception:
            _logger.exception(
                "Failed to save simple preferences", extra={"user_id": user_id}
            )
            return False
        return True
