"""Domain models for dining hall menus."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class MenuItem:
    """Single dish offered on a menu."""

    id: str
    name: str
    category: str
    ingredients: list[str] = field(default_factory=list)
    allergens: list[str] = field(default_factory=list)
    healthy: bool = False
    sort_idx: int = 0


@dataclass(frozen=True)
class OperatingHours:
    """Serving window of a menu event."""

    start: str
    end: str
    start_timestamp: int | None = None
    end_timestamp: int | None = None


@dataclass(frozen=True)
class Menu:
    """Items served by one eatery for one date and meal type."""

    eatery_id: str
    eatery_name: str
    menu_date: str
    meal_type: str
    items: list[MenuItem]
    campus_area: str = ""
    location: str = ""
    operating_hours: OperatingHours | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class MenuStats:
    """Row counts of the menu store."""

    total: int
    today_and_future: int
