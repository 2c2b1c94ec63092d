"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import UTC, datetime
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from campus_dining.api.admin import router as admin_router
from campus_dining.api.schemas import PreferencesBody, SimplePreferencesBody
from campus_dining.app_logging import configure_logging
from campus_dining.containers import AppContainer
from campus_dining.domain.menus import Menu
from campus_dining.domain.recommendations import Recommendation
from campus_dining.services.classifier import classify_item, top_categories

SAVE_FAILED_DETAIL = "Something went wrong. Please try again."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/menus")
    async def list_menus(
        request: Request, menu_date: str | None = None, meal_type: str | None = None
    ) -> dict[str, object]:
        """Return stored menus for a date with classified items."""
        state_container: AppContainer = request.app.state.container
        resolved_date = menu_date or datetime.now(tz=UTC).date().isoformat()
        menus = state_container.ingestion_service.list_menus(resolved_date, meal_type)
        return {
            "menu_date": resolved_date,
            "menus": [_menu_payload(menu) for menu in menus],
        }

    @app.post("/menus/refresh")
    async def refresh_menus(request: Request) -> dict[str, object]:
        """Sync menus from the dining API when stored data is stale."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.ingestion_service.refresh_menus()
        return asdict(result)

    @app.get("/users/{user_id}/preferences")
    async def get_preferences(user_id: UUID, request: Request) -> dict[str, object]:
        """Return saved free-text preferences."""
        state_container: AppContainer = request.app.state.container
        preferences = state_container.preference_service.get_preferences(user_id)
        return {"preferences": asdict(preferences) if preferences else None}

    @app.put("/users/{user_id}/preferences")
    async def save_preferences(
        user_id: UUID, body: PreferencesBody, request: Request
    ) -> dict[str, str]:
        """Replace a user's free-text preferences."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.preference_service.save_preferences(
            user_id, body.to_domain()
        )
        if not saved:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail=SAVE_FAILED_DETAIL
            )
        return {"status": "ok"}

    @app.get("/users/{user_id}/recommendations")
    async def recommendations(
        user_id: UUID,
        request: Request,
        meal_type: str | None = None,
        menu_date: str | None = None,
    ) -> dict[str, object]:
        """Return ranked dining hall recommendations."""
        state_container: AppContainer = request.app.state.container
        ranked = state_container.recommendation_service.generate_recommendations(
            user_id, meal_type=meal_type, menu_date=menu_date
        )
        logger.info("Returning %s recommendations", len(ranked))
        return {"recommendations": [_recommendation_payload(rec) for rec in ranked]}

    @app.get("/users/{user_id}/simple-preferences")
    async def get_simple_preferences(
        user_id: UUID, request: Request
    ) -> dict[str, object]:
        """Return checkbox preferences, defaults when unset."""
        state_container: AppContainer = request.app.state.container
        preferences = state_container.preference_service.get_simple_preferences(
            user_id
        )
        return {"preferences": preferences.to_dict()}

    @app.put("/users/{user_id}/simple-preferences")
    async def save_simple_preferences(
        user_id: UUID, body: SimplePreferencesBody, request: Request
    ) -> dict[str, str]:
        """Replace a user's checkbox preferences."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.preference_service.save_simple_preferences(
            user_id, body.to_domain()
        )
        if not saved:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail=SAVE_FAILED_DETAIL
            )
        return {"status": "ok"}

    @app.get("/users/{user_id}/suggestions")
    async def suggestions(
        user_id: UUID, meal_type: str, menu_date: str, request: Request
    ) -> dict[str, object]:
        """Return a main and side dish pick per favorite dining hall."""
        state_container: AppContainer = request.app.state.container
        picks = await state_container.suggestion_service.generate_suggestions(
            user_id, meal_type, menu_date
        )
        return {"suggestions": [asdict(pick) for pick in picks]}

    return app


def _menu_payload(menu: Menu) -> dict[str, object]:
    """Serialize a menu, tagging each item with its strongest categories."""
    payload = asdict(menu)
    payload["items"] = [
        {**asdict(item), "tags": top_categories(classify_item(item))}
        for item in menu.items
    ]
    return payload


def _recommendation_payload(recommendation: Recommendation) -> dict[str, object]:
    payload = asdict(recommendation)
    payload["match_percentage"] = recommendation.match_percentage
    return payload
