"""Domain models for recommendation output."""

from dataclasses import dataclass, field

from campus_dining.domain.menus import MenuItem, OperatingHours


@dataclass(frozen=True)
class Recommendation:
    """Ranked eatery menu for a user."""

    eatery_name: str
    meal_type: str
    menu_date: str
    score: float
    distance_score: float
    preference_score: float
    top_items: list[MenuItem] = field(default_factory=list)
    campus_area: str = ""
    location: str = ""
    operating_hours: OperatingHours | None = None

    @property
    def match_percentage(self) -> int:
        """Score rounded for display."""
        return round(self.score)


@dataclass(frozen=True)
class MealSuggestion:
    """Main and side dish picked for one dining hall."""

    dining_hall: str
    main_dish: str
    side_dish: str | None
    message: str
    meal_type: str
    date: str
    source: str
