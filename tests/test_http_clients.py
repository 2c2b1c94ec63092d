"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from campus_dining.adapters.dining_api_client import HttpxDiningApiClient
from campus_dining.adapters.openai_suggestion_client import OpenAISuggestionClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_suggestion_client_returns_output_text() -> None:
    output = json.dumps(
        {"mainDish": "Pizza", "sideDish": None, "message": "Yum"}
    )
    fake = _FakeOpenAI(output)
    client = OpenAISuggestionClient(client=fake, model="gpt-4.1-mini")

    result = asyncio.run(
        client.suggest(prompt="Pick a meal", schema={"type": "object"})
    )

    assert result == output
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4.1-mini"
    assert payload["store"] is False
    assert payload["text"]["format"]["name"] == "meal_suggestion"
    assert payload["input"][0]["content"][0]["text"] == "Pick a meal"


def test_openai_suggestion_client_rejects_empty_output() -> None:
    client = OpenAISuggestionClient(client=_FakeOpenAI(""), model="gpt-4.1-mini")

    with pytest.raises(RuntimeError):
        asyncio.run(client.suggest(prompt="Pick a meal", schema={"type": "object"}))


def test_dining_api_client_fetches_eateries() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/dining/eateries.json"
        return httpx.Response(200, json={"data": {"eateries": []}})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxDiningApiClient(
        url="https://api.test/dining/eateries.json", http_client=async_client
    )

    payload = asyncio.run(client.fetch_eateries())

    assert payload == {"data": {"eateries": []}}


def test_dining_api_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "down"})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxDiningApiClient(
        url="https://api.test/eateries", http_client=async_client
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.fetch_eateries())
