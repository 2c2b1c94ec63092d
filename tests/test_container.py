"""Tests for container wiring."""

import asyncio

from campus_dining.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.suggestion_service.client is None
    assert container.ingestion_service.freshness_hours == 6
    asyncio.run(container.close_resources())


def test_build_container_wires_suggestion_model(settings) -> None:
    configured = settings.model_copy(update={"openai_api_key": "sk-test"})

    container = build_container(configured)

    assert container.suggestion_service.client is not None
    asyncio.run(container.close_resources())
