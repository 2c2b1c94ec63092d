"""Preference-weighted ranking of dining hall menus."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from campus_dining.domain.menus import Menu, MenuItem
from campus_dining.domain.preferences import UserPreferences
from campus_dining.domain.recommendations import Recommendation
from campus_dining.services.preferences import PreferenceService

FAVORITE_HALL_BONUS = 30.0
SAME_AREA_SCORE = 25.0
NEARBY_EATERY_SCORE = 20.0
DISTANT_EATERY_SCORE = 5.0
CUISINE_MATCH_POINTS = 10.0
MAX_TOP_ITEMS = 5

CAMPUS_EATERIES: dict[str, tuple[str, ...]] = {
    "North Campus": ("Robert Purcell", "North Star", "RPCC", "Morrison"),
    "Central Campus": ("Okenshields", "Mattin", "Ivy Room", "Trillium", "Kennedy"),
    "West Campus": ("Becker", "Cook", "Keeton", "Rose", "Flora Rose", "104West"),
    "Collegetown": ("Collegetown", "CTB"),
}

_logger = logging.getLogger(__name__)


class MenuReader(Protocol):
    """Read interface of the menu store used for ranking."""

    def list_menus(
        self,
        menu_dates: list[str],
        meal_type: str | None = None,
        eatery_names: list[str] | None = None,
    ) -> list[Menu]:
        """Return menus for the given dates, ordered by date."""


def _today() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class RecommendationService:
    """Scores menus against a user's stored preferences."""

    menu_reader: MenuReader
    preference_service: PreferenceService
    days_ahead: int = 7
    today: Callable[[], date] = field(default=_today)

    def generate_recommendations(
        self,
        user_id: UUID,
        meal_type: str | None = None,
        menu_date: str | None = None,
    ) -> list[Recommendation]:
        """Return ranked recommendations for a user."""
        preferences = self.preference_service.get_preferences(user_id)
        if preferences is None:
            _logger.info("No preferences for user %s", user_id)
            return []

        if menu_date:
            dates = [menu_date]
        else:
            start = self.today()
            dates = [
                (start + timedelta(days=offset)).isoformat()
                for offset in range(self.days_ahead)
            ]
        try:
            menus = self.menu_reader.list_menus(dates, meal_type=meal_type)
        except Exception:
            _logger.exception("Failed to query menus", extra={"dates": dates})
            return []
        if not menus:
            _logger.info("No menus found for %s (meal=%s)", dates, meal_type)
            return []

        recommendations = rank_menus(menus, preferences)
        _logger.info(
            "Ranked %s of %s menus for user %s",
            len(recommendations),
            len(menus),
            user_id,
        )
        return recommendations


def rank_menus(menus: list[Menu], preferences: UserPreferences) -> list[Recommendation]:
    """Score menus independently and return the positive ones, best first."""
    recommendations: list[Recommendation] = []
    for menu in menus:
        distance = location_score(menu, preferences.campus_location)
        preference = preference_score(menu.items, preferences)
        score = favorite_bonus(menu, preferences) + distance + preference
        if score <= 0:
            continue
        eligible = filter_items(menu.items, preferences)
        if not eligible:
            continue
        recommendations.append(
            Recommendation(
                eatery_name=menu.eatery_name,
                meal_type=menu.meal_type,
                menu_date=menu.menu_date,
                score=score,
                distance_score=distance,
                preference_score=preference,
                top_items=eligible[:MAX_TOP_ITEMS],
                campus_area=menu.campus_area,
                location=menu.location,
                operating_hours=menu.operating_hours,
            )
        )
    return sorted(recommendations, key=lambda rec: rec.score, reverse=True)


def score_menu(menu: Menu, preferences: UserPreferences) -> float:
    """Return the total score of a menu for a user."""
    return (
        favorite_bonus(menu, preferences)
        + location_score(menu, preferences.campus_location)
        + preference_score(menu.items, preferences)
    )


def favorite_bonus(menu: Menu, preferences: UserPreferences) -> float:
    """Flat bonus when the eatery is one of the user's favorites."""
    if menu.eatery_name in preferences.favorite_dining_halls:
        return FAVORITE_HALL_BONUS
    return 0.0


def location_score(menu: Menu, campus_location: str) -> float:
    """Proximity heuristic between a menu's eatery and the user's campus area."""
    area = (menu.campus_area or "").lower()
    wanted = (campus_location or "").lower()
    if area and (wanted in area or area in wanted):
        return SAME_AREA_SCORE

    nearby = CAMPUS_EATERIES.get(campus_location, ())
    name = menu.eatery_name
    if any(candidate in name or name in candidate for candidate in nearby):
        return NEARBY_EATERY_SCORE
    return DISTANT_EATERY_SCORE


def preference_score(items: list[MenuItem], preferences: UserPreferences) -> float:
    """Average cuisine-match points over items the user can eat."""
    total = 0.0
    eligible = 0
    for item in items:
        if is_restricted(item, preferences.dietary_restrictions):
            continue
        eligible += 1
        total += CUISINE_MATCH_POINTS * cuisine_matches(
            item, preferences.preferred_cuisines
        )
    if eligible == 0:
        return 0.0
    return total / eligible


def filter_items(items: list[MenuItem], preferences: UserPreferences) -> list[MenuItem]:
    """Drop restricted items and order the rest by cuisine relevance."""
    eligible = [
        item
        for item in items
        if not is_restricted(item, preferences.dietary_restrictions)
    ]
    return sorted(
        eligible,
        key=lambda item: cuisine_matches(item, preferences.preferred_cuisines),
        reverse=True,
    )


def cuisine_matches(item: MenuItem, cuisines: list[str]) -> int:
    """Count preferred cuisines found in an item's name or category."""
    name = (item.name or "").lower()
    category = (item.category or "").lower()
    count = 0
    for cuisine in cuisines:
        needle = cuisine.lower()
        if needle in name or needle in category:
            count += 1
    return count


def is_restricted(item: MenuItem, restrictions: list[str]) -> bool:
    """Return True when any restriction keyword appears in the item text."""
    if not restrictions:
        return False
    text = " ".join(
        [
            item.name or "",
            item.category or "",
            " ".join(item.ingredients),
            " ".join(item.allergens),
        ]
    ).lower()
    return any(restriction.lower() in text for restriction in restrictions)
