"""Tests for preference storage."""

from uuid import uuid4

from campus_dining.domain.preferences import (
    SimplePreferences,
    UserPreferences,
    simple_preferences_from_dict,
)
from campus_dining.services.preferences import PreferenceService
from tests.conftest import InMemoryPreferenceRepository


def test_save_and_load_preferences() -> None:
    service = PreferenceService(InMemoryPreferenceRepository())
    user_id = uuid4()
    preferences = UserPreferences(preferred_cuisines=["Thai"])

    assert service.save_preferences(user_id, preferences) is True
    assert service.get_preferences(user_id) == preferences


def test_save_failure_reports_false() -> None:
    service = PreferenceService(InMemoryPreferenceRepository(fail=True))

    assert service.save_preferences(uuid4(), UserPreferences()) is False
    assert service.save_simple_preferences(uuid4(), SimplePreferences()) is False


def test_load_failure_returns_none() -> None:
    service = PreferenceService(InMemoryPreferenceRepository(fail=True))

    assert service.get_preferences(uuid4()) is None


def test_missing_simple_preferences_default_to_unselected() -> None:
    service = PreferenceService(InMemoryPreferenceRepository())

    preferences = service.get_simple_preferences(uuid4())

    assert preferences == SimplePreferences()
    assert not preferences.has_selection()


def test_simple_preferences_from_dict_ignores_unknown_shapes() -> None:
    preferences = simple_preferences_from_dict(
        {
            "proteins": {"chicken": True, "dragon": True},
            "sides": "not-a-dict",
            "focus": {"healthy": "yes"},
            "favorite_dining_halls": ["Okenshields"],
            "campus_location": 42,
        }
    )

    assert preferences.selected("proteins") == ["chicken"]
    assert preferences.selected("sides") == []
    assert preferences.selected("focus") == []
    assert preferences.favorite_dining_halls == ["Okenshields"]
    assert preferences.campus_location == ""
    assert "dragon" not in preferences.proteins


def test_simple_preferences_from_dict_reads_camel_case_main_meals() -> None:
    preferences = simple_preferences_from_dict(
        {"mainMeals": {"pizza": True, "soup": True}}
    )

    assert preferences.selected("main_meals") == ["pizza", "soup"]
    assert preferences.to_dict()["main_meals"]["pizza"] is True
