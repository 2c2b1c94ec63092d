"""Models for generative meal suggestion output."""

from pydantic import BaseModel, ConfigDict, Field


class SuggestionPick(BaseModel):
    """Structured output expected from the text generation service."""

    model_config = ConfigDict(populate_by_name=True)

    main_dish: str | None = Field(alias="mainDish")
    side_dish: str | None = Field(default=None, alias="sideDish")
    message: str = ""
