"""OpenAI Responses API client for meal suggestions."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from campus_dining.services.suggestions import SuggestionClient


@dataclass
class OpenAISuggestionClient(SuggestionClient):
    """Suggestion client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, model: str, store: bool = False
    ) -> "OpenAISuggestionClient":
        """Create an OpenAI suggestion client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model, store=store)

    async def suggest(self, *, prompt: str, schema: dict[str, object]) -> str:
        """Return the raw text of a structured suggestion response."""
        response = await self.client.responses.create(
            model=self.model,
            input=[
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "meal_suggestion",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=self.store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP session."""
        await self.client.close()
