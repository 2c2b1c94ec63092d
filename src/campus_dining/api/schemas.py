"""Request bodies for the HTTP API."""

from pydantic import BaseModel, Field

from campus_dining.domain.preferences import (
    SimplePreferences,
    UserPreferences,
    simple_preferences_from_dict,
)


class PreferencesBody(BaseModel):
    """Free-text preferences submitted by the client."""

    dietary_restrictions: list[str] = Field(default_factory=list)
    favorite_dining_halls: list[str] = Field(default_factory=list)
    preferred_cuisines: list[str] = Field(default_factory=list)
    campus_location: str = ""
    nutritional_preferences: dict[str, float] = Field(default_factory=dict)
    cuisine_preferences: dict[str, float] = Field(default_factory=dict)
    meal_preferences: dict[str, float] = Field(default_factory=dict)

    def to_domain(self) -> UserPreferences:
        """Convert to the domain record."""
        return UserPreferences(**self.model_dump())


class SimplePreferencesBody(BaseModel):
    """Checkbox preferences submitted by the client."""

    proteins: dict[str, bool] = Field(default_factory=dict)
    main_meals: dict[str, bool] = Field(default_factory=dict)
    sides: dict[str, bool] = Field(default_factory=dict)
    focus: dict[str, bool] = Field(default_factory=dict)
    favorite_dining_halls: list[str] = Field(default_factory=list)
    campus_location: str = ""

    def to_domain(self) -> SimplePreferences:
        """Convert to the domain record, dropping unknown flags."""
        return simple_preferences_from_dict(self.model_dump())
