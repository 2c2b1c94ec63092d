"""Supabase repository for user preferences."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from campus_dining.domain.preferences import (
    SimplePreferences,
    UserPreferences,
    simple_preferences_from_dict,
)
from campus_dining.services.preferences import PreferenceRepository


@dataclass
class SupabasePreferenceRepository(PreferenceRepository):
    """Supabase implementation for the user_preferences table."""

    client: Client

    def get_preferences(self, user_id: UUID) -> UserPreferences | None:
        """Return the free-text preferences row for a user."""
        response = (
            self.client.table("user_preferences")
            .select(
                "dietary_restrictions, favorite_dining_halls, preferred_cuisines, "
                "campus_location, nutritional_preferences, cuisine_preferences, "
                "meal_preferences"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserPreferences(
            dietary_restrictions=_string_list(row.get("dietary_restrictions")),
            favorite_dining_halls=_string_list(row.get("favorite_dining_halls")),
            preferred_cuisines=_string_list(row.get("preferred_cuisines")),
            campus_location=str(row.get("campus_location") or ""),
            nutritional_preferences=_weights(row.get("nutritional_preferences")),
            cuisine_preferences=_weights(row.get("cuisine_preferences")),
            meal_preferences=_weights(row.get("meal_preferences")),
        )

    def save_preferences(self, user_id: UUID, preferences: UserPreferences) -> None:
        """Upsert free-text preferences on user_id."""
        self.client.table("user_preferences").upsert(
            {
                "user_id": str(user_id),
                "dietary_restrictions": preferences.dietary_restrictions,
                "favorite_dining_halls": preferences.favorite_dining_halls,
                "preferred_cuisines": preferences.preferred_cuisines,
                "campus_location": preferences.campus_location,
                "nutritional_preferences": preferences.nutritional_preferences,
                "cuisine_preferences": preferences.cuisine_preferences,
                "meal_preferences": preferences.meal_preferences,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    def get_simple_preferences(self, user_id: UUID) -> SimplePreferences | None:
        """Return the checkbox preferences stored for a user."""
        response = (
            self.client.table("user_preferences")
            .select("simple_preferences, favorite_dining_halls, campus_location")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        stored = row.get("simple_preferences")
        merged = dict(stored) if isinstance(stored, dict) else {}
        merged["favorite_dining_halls"] = row.get("favorite_dining_halls") or []
        merged["campus_location"] = row.get("campus_location") or ""
        return simple_preferences_from_dict(merged)

    def save_simple_preferences(
        self, user_id: UUID, preferences: SimplePreferences
    ) -> None:
        """Upsert checkbox preferences on user_id."""
        self.client.table("user_preferences").upsert(
            {
                "user_id": str(user_id),
                "simple_preferences": preferences.to_dict(),
                "favorite_dining_halls": preferences.favorite_dining_halls,
                "campus_location": preferences.campus_location,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()


def _string_list(raw: object) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [str(value) for value in raw]


def _weights(raw: object) -> dict[str, float]:
    if not isinstance(raw, dict):
        return {}
    weights = {}
    for key, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int | float):
            continue
        weights[str(key)] = float(value)
    return weights
