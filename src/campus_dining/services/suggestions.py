"""Meal suggestions from checkbox preferences with a rule-based fallback."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pydantic import ValidationError

from campus_dining.domain.menus import Menu, MenuItem
from campus_dining.domain.preferences import SimplePreferences
from campus_dining.domain.recommendations import MealSuggestion
from campus_dining.domain.suggestions import SuggestionPick
from campus_dining.services.preferences import PreferenceService
from campus_dining.services.recommendations import MenuReader

PROMPT_ITEM_LIMIT = 15
DEFAULT_MODEL_MESSAGE = "Great choice! Enjoy your meal!"

SUGGESTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "mainDish": {"anyOf": [{"type": "string"}, {"type": "null"}]},
        "sideDish": {"anyOf": [{"type": "string"}, {"type": "null"}]},
        "message": {"type": "string"},
    },
    "required": ["mainDish", "sideDish", "message"],
    "additionalProperties": False,
}

DINING_HALL_ALIASES: dict[str, str] = {
    "Becker House Dining": "Becker House Dining Room",
    "Cook House Dining": "Cook House Dining Room",
    "Rose House Dining": "Rose House Dining Room",
    "Keeton House Dining": "Keeton House Dining Room",
    "Flora Rose House": "Flora Rose House Dining Room",
    "Carl Becker House": "Carl Becker House Dining Room",
    "Hans Bethe House": "Jansen's Dining Room at Bethe House",
    "Morison Dining": "Morrison Dining",
}

# Patterns deciding whether an item matches any selected flag.
MATCH_PATTERNS: dict[str, dict[str, str]] = {
    "proteins": {
        "chicken": r"chicken|poultry",
        "beef": r"beef|steak",
        "pork": r"pork|bacon|ham|sausage",
        "seafood": r"fish|salmon|tuna|shrimp|seafood|crab",
        "vegetarian": r"vegetarian|veggie",
        "vegan": r"vegan",
    },
    "main_meals": {
        "pizza": r"pizza",
        "pasta": r"pasta|spaghetti|penne|ravioli",
        "burgers": r"burger|sandwich",
        "sandwiches": r"sandwich|wrap|sub",
        "salads": r"salad",
        "stir_fry": r"stir.?fry|wok",
        "soup": r"soup|broth|chowder",
        "rice_bowls": r"rice.*bowl|bowl.*rice",
        "desserts": r"dessert|cake|cookie|ice.*cream|chocolate|brownie|pie|pudding"
        r"|pastry",
    },
    "sides": {
        "fries": r"fries|chips",
        "vegetables": r"vegetable|broccoli|carrot|green",
        "rice": r"rice",
        "bread": r"bread|roll|biscuit",
        "fruit": r"fruit|apple|banana|berry",
    },
    "focus": {
        "healthy": r"healthy|fresh|grilled|steamed",
        "cheat_meal": r"fried|cheese|bacon|creamy",
        "comfort_food": r"comfort|hearty|home.?style",
        "pre_workout": r"protein|energy|banana|oats|smoothie|light",
        "post_workout": r"protein|recovery|chicken|quinoa|sweet.*potato",
    },
}

MAIN_DISH_PATTERNS: dict[str, str] = {
    "pizza": r"pizza",
    "pasta": r"pasta|spaghetti|penne",
    "burgers": r"burger",
    "sandwiches": r"sandwich|wrap",
    "salads": r"salad",
    "stir_fry": r"stir.?fry",
    "soup": r"soup",
    "rice_bowls": r"rice.*bowl",
}

SIDE_DISH_PATTERNS: dict[str, str] = {
    "fries": r"fries|chips",
    "vegetables": r"vegetable|broccoli|carrot",
    "rice": r"rice",
    "bread": r"bread|roll",
    "fruit": r"fruit|apple|banana",
}

FOCUS_PHRASES: dict[str, str] = {
    "protein_heavy": "high in protein",
    "healthy": "nutritious",
    "cheat_meal": "indulgent",
    "comfort_food": "comforting",
    "low_carb": "low-carb",
}

_logger = logging.getLogger(__name__)


class SuggestionClient(Protocol):
    """Interface for the text generation service."""

    async def suggest(self, *, prompt: str, schema: dict[str, object]) -> str:
        """Return raw model output for a suggestion prompt."""


@dataclass(frozen=True)
class _Pick:
    main: MenuItem
    side: MenuItem | None
    message: str


@dataclass
class MealSuggestionService:
    """Picks a main and side dish per favorite dining hall."""

    menu_reader: MenuReader
    preference_service: PreferenceService
    client: SuggestionClient | None = None

    async def generate_suggestions(
        self, user_id: UUID, meal_type: str, menu_date: str
    ) -> list[MealSuggestion]:
        """Return one suggestion per favorite dining hall with a match."""
        preferences = self.preference_service.get_simple_preferences(user_id)
        if not preferences.has_selection():
            _logger.info("No simple preferences selected for user %s", user_id)
            return []

        halls = map_dining_hall_names(preferences.favorite_dining_halls)
        try:
            menus = self.menu_reader.list_menus(
                [menu_date], meal_type=meal_type, eatery_names=halls
            )
        except Exception:
            _logger.exception("Failed to query menus for suggestions")
            return []
        if not menus:
            _logger.info("No favorite hall menus for %s %s", menu_date, meal_type)
            return []

        suggestions = []
        for menu in menus:
            if not menu.items:
                continue
            suggestion = await self.suggest_for_menu(menu, preferences)
            if suggestion is not None:
                suggestions.append(suggestion)
        return suggestions

    async def suggest_for_menu(
        self, menu: Menu, preferences: SimplePreferences
    ) -> MealSuggestion | None:
        """Ask the model for a pick, falling back to local rules."""
        source = "model"
        pick = await self._model_pick(menu, preferences)
        if pick is None:
            source = "fallback"
            pick = fallback_pick(menu.items, preferences)
        if pick is None:
            return None
        return MealSuggestion(
            dining_hall=menu.eatery_name,
            main_dish=pick.main.name,
            side_dish=pick.side.name if pick.side else None,
            message=pick.message,
            meal_type=menu.meal_type,
            date=menu.menu_date,
            source=source,
        )

    async def _model_pick(
        self, menu: Menu, preferences: SimplePreferences
    ) -> _Pick | None:
        if self.client is None:
            return None
        prompt = build_prompt(menu, preferences)
        try:
            raw = await self.client.suggest(prompt=prompt, schema=SUGGESTION_SCHEMA)
        except Exception:
            _logger.exception("Suggestion model failed for %s", menu.eatery_name)
            return None
        return parse_model_pick(raw, menu.items)


def map_dining_hall_names(names: list[str]) -> list[str]:
    """Translate preference hall names to stored eatery names."""
    return [DINING_HALL_ALIASES.get(name, name) for name in names]


def build_prompt(menu: Menu, preferences: SimplePreferences) -> str:
    """Build the suggestion prompt for one dining hall."""

    def _selected(group: str, empty: str) -> str:
        names = [name.replace("_", " ") for name in preferences.selected(group)]
        return ", ".join(names) if names else empty

    lines = [
        f"- {item.name}" + (f" ({item.category})" if item.category else "")
        for item in menu.items[:PROMPT_ITEM_LIMIT]
    ]
    return (
        "You recommend dining hall meals to university students.\n"
        f"Dining hall: {menu.eatery_name}\n"
        f"Meal type: {menu.meal_type}\n"
        "User preferences:\n"
        f"- Proteins: {_selected('proteins', 'Open to anything')}\n"
        f"- Main meals: {_selected('main_meals', 'Open to anything')}\n"
        f"- Sides: {_selected('sides', 'Open to anything')}\n"
        f"- Focus: {_selected('focus', 'Just hungry')}\n"
        "Available menu items:\n"
        + "\n".join(lines)
        + "\n"
        "Pick ONE main dish and optionally ONE side dish using exact item names "
        "from the list. Write a short upbeat message (max 120 characters) that "
        "references the preferences. Use null for mainDish when nothing fits."
    )


def parse_model_pick(raw: str, items: list[MenuItem]) -> _Pick | None:
    """Decode model output strictly; any mismatch yields None."""
    try:
        parsed = SuggestionPick.model_validate_json(raw)
    except ValidationError as exc:
        _logger.warning("Discarding malformed suggestion output: %s", exc)
        return None
    if not parsed.main_dish:
        return None
    main = find_item(items, parsed.main_dish)
    if main is None:
        _logger.warning("Suggested main dish not on menu: %s", parsed.main_dish)
        return None
    side = None
    side_name = parsed.side_dish
    if side_name and side_name.lower() != "null":
        side = find_item(items, side_name)
        if side is None:
            _logger.warning("Suggested side dish not on menu: %s", side_name)
            return None
    return _Pick(main=main, side=side, message=parsed.message or DEFAULT_MODEL_MESSAGE)


def find_item(items: list[MenuItem], name: str) -> MenuItem | None:
    """Find a menu item whose name contains, or is contained in, name."""
    needle = name.lower()
    for item in items:
        candidate = item.name.lower()
        if candidate and (needle in candidate or candidate in needle):
            return item
    return None


def fallback_pick(
    items: list[MenuItem], preferences: SimplePreferences
) -> _Pick | None:
    """Rule-based main and side dish selection."""
    matching = [item for item in items if matches_preferences(item, preferences)]
    if not matching:
        return None
    main = select_main_dish(matching, preferences)
    side = select_side_dish(items, preferences, main)
    if side is None:
        side = next((item for item in matching if item.name != main.name), None)
    message = fallback_message(main, side, preferences)
    return _Pick(main=main, side=side, message=message)


def matches_preferences(item: MenuItem, preferences: SimplePreferences) -> bool:
    """Return True when the item matches any selected flag."""
    text = _text(item)
    for group, patterns in MATCH_PATTERNS.items():
        for flag in preferences.selected(group):
            pattern = patterns.get(flag)
            if pattern and re.search(pattern, text):
                return True
    return False


def select_main_dish(
    candidates: list[MenuItem], preferences: SimplePreferences
) -> MenuItem:
    """Prefer the first item matching a selected main meal, in flag order."""
    for flag in preferences.selected("main_meals"):
        pattern = MAIN_DISH_PATTERNS.get(flag)
        if pattern is None:
            continue
        for item in candidates:
            if re.search(pattern, _text(item)):
                return item
    return candidates[0]


def select_side_dish(
    items: list[MenuItem], preferences: SimplePreferences, main: MenuItem
) -> MenuItem | None:
    """Return the first non-main item matching a selected side, if any."""
    sides = [item for item in items if item.name != main.name]
    for flag in preferences.selected("sides"):
        pattern = SIDE_DISH_PATTERNS.get(flag)
        if pattern is None:
            continue
        for item in sides:
            if re.search(pattern, _text(item)):
                return item
    return None


def fallback_message(
    main: MenuItem, side: MenuItem | None, preferences: SimplePreferences
) -> str:
    """Compose a deterministic message from the focus flags."""
    phrases = [
        phrase
        for flag, phrase in FOCUS_PHRASES.items()
        if preferences.focus.get(flag)
    ]
    focus_text = f" This combo is {' and '.join(phrases)}." if phrases else ""
    if side is not None:
        return f"Perfect match! Try the {main.name} with {side.name}.{focus_text}"
    return f"Great choice! The {main.name} looks delicious.{focus_text}"


def _text(item: MenuItem) -> str:
    return f"{item.name} {item.category}".lower()
