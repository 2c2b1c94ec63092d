"""Domain models for user preferences."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserPreferences:
    """Free-text preferences used by the recommendation scorer."""

    dietary_restrictions: list[str] = field(default_factory=list)
    favorite_dining_halls: list[str] = field(default_factory=list)
    preferred_cuisines: list[str] = field(default_factory=list)
    campus_location: str = ""
    nutritional_preferences: dict[str, float] = field(default_factory=dict)
    cuisine_preferences: dict[str, float] = field(default_factory=dict)
    meal_preferences: dict[str, float] = field(default_factory=dict)


PROTEIN_FLAGS = ("chicken", "beef", "pork", "seafood", "vegetarian", "vegan")
MAIN_MEAL_FLAGS = (
    "pizza",
    "pasta",
    "burgers",
    "sandwiches",
    "salads",
    "stir_fry",
    "soup",
    "rice_bowls",
    "desserts",
)
SIDE_FLAGS = ("fries", "vegetables", "rice", "bread", "fruit", "chips")
FOCUS_FLAGS = (
    "protein_heavy",
    "low_carb",
    "vegan",
    "vegetarian",
    "cheat_meal",
    "healthy",
    "comfort_food",
    "pre_workout",
    "post_workout",
)

FLAG_GROUPS: dict[str, tuple[str, ...]] = {
    "proteins": PROTEIN_FLAGS,
    "main_meals": MAIN_MEAL_FLAGS,
    "sides": SIDE_FLAGS,
    "focus": FOCUS_FLAGS,
}

# Keys written by earlier clients of the same column.
LEGACY_GROUP_KEYS: dict[str, str] = {"main_meals": "mainMeals"}


@dataclass(frozen=True)
class SimplePreferences:
    """Checkbox preferences used by the meal suggestion pathway."""

    proteins: dict[str, bool] = field(
        default_factory=lambda: dict.fromkeys(PROTEIN_FLAGS, False)
    )
    main_meals: dict[str, bool] = field(
        default_factory=lambda: dict.fromkeys(MAIN_MEAL_FLAGS, False)
    )
    sides: dict[str, bool] = field(
        default_factory=lambda: dict.fromkeys(SIDE_FLAGS, False)
    )
    focus: dict[str, bool] = field(
        default_factory=lambda: dict.fromkeys(FOCUS_FLAGS, False)
    )
    favorite_dining_halls: list[str] = field(default_factory=list)
    campus_location: str = ""

    def selected(self, group: str) -> list[str]:
        """Return the flags selected in a group, in table order."""
        flags = getattr(self, group)
        return [name for name in FLAG_GROUPS[group] if flags.get(name)]

    def has_selection(self) -> bool:
        """Return True when at least one flag is selected."""
        return any(self.selected(group) for group in FLAG_GROUPS)

    def to_dict(self) -> dict[str, object]:
        """Return the JSON-compatible representation stored in the backend."""
        return {
            "proteins": dict(self.proteins),
            "main_meals": dict(self.main_meals),
            "sides": dict(self.sides),
            "focus": dict(self.focus),
            "favorite_dining_halls": list(self.favorite_dining_halls),
            "campus_location": self.campus_location,
        }


def simple_preferences_from_dict(raw: dict[str, object] | None) -> SimplePreferences:
    """Build simple preferences from stored JSON, defaulting unknown shapes."""
    raw = raw or {}
    groups: dict[str, dict[str, bool]] = {}
    for group, names in FLAG_GROUPS.items():
        stored = raw.get(group)
        if stored is None and group in LEGACY_GROUP_KEYS:
            stored = raw.get(LEGACY_GROUP_KEYS[group])
        if not isinstance(stored, dict):
            stored = {}
        groups[group] = {name: stored.get(name) is True for name in names}
    halls = raw.get("favorite_dining_halls")
    location = raw.get("campus_location")
    return SimplePreferences(
        **groups,
        favorite_dining_halls=[str(hall) for hall in halls]
        if isinstance(halls, list)
        else [],
        campus_location=location if isinstance(location, str) else "",
    )
