"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from campus_dining.adapters.dining_api_client import HttpxDiningApiClient
from campus_dining.adapters.openai_suggestion_client import OpenAISuggestionClient
from campus_dining.adapters.supabase_menu_repository import SupabaseMenuRepository
from campus_dining.adapters.supabase_preference_repository import (
    SupabasePreferenceRepository,
)
from campus_dining.config import Settings
from campus_dining.services.ingestion import MenuIngestionService
from campus_dining.services.preferences import PreferenceService
from campus_dining.services.recommendations import RecommendationService
from campus_dining.services.suggestions import MealSuggestionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    preference_service: PreferenceService
    ingestion_service: MenuIngestionService
    recommendation_service: RecommendationService
    suggestion_service: MealSuggestionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    menu_repository = SupabaseMenuRepository(supabase_client)
    preference_service = PreferenceService(
        SupabasePreferenceRepository(supabase_client)
    )
    dining_client = HttpxDiningApiClient.create(resolved_settings.dining_api_url)
    suggestion_client = None
    if resolved_settings.openai_api_key:
        suggestion_client = OpenAISuggestionClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            store=resolved_settings.openai_store,
        )
    ingestion_service = MenuIngestionService(
        api_client=dining_client,
        repository=menu_repository,
        freshness_hours=resolved_settings.menu_freshness_hours,
    )
    recommendation_service = RecommendationService(
        menu_reader=menu_repository,
        preference_service=preference_service,
        days_ahead=resolved_settings.recommendation_days,
    )
    suggestion_service = MealSuggestionService(
        menu_reader=menu_repository,
        preference_service=preference_service,
        client=suggestion_client,
    )

    async def close_resources() -> None:
        await dining_client.close()
        if suggestion_client is not None:
            await suggestion_client.close()

    return AppContainer(
        settings=resolved_settings,
        preference_service=preference_service,
        ingestion_service=ingestion_service,
        recommendation_service=recommendation_service,
        suggestion_service=suggestion_service,
        close_resources=close_resources,
    )
