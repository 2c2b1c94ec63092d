"""Models for the third-party dining API payload."""

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ApiMenuItem(_ApiModel):
    """Dish listed under a menu category."""

    item: str | None = None
    healthy: bool | None = False
    sort_idx: int | None = Field(default=0, alias="sortIdx")


class ApiMenuCategory(_ApiModel):
    """Named group of dishes within an event."""

    category: str | None = None
    sort_idx: int | None = Field(default=0, alias="sortIdx")
    items: list[ApiMenuItem] = Field(default_factory=list)


class ApiEvent(_ApiModel):
    """Meal period within a day of operation."""

    descr: str | None = None
    start: str | None = None
    end: str | None = None
    start_timestamp: int | None = Field(default=None, alias="startTimestamp")
    end_timestamp: int | None = Field(default=None, alias="endTimestamp")
    menu: list[ApiMenuCategory] = Field(default_factory=list)


class ApiOperatingHours(_ApiModel):
    """Events served on one date."""

    date: str
    status: str | None = None
    events: list[ApiEvent] = Field(default_factory=list)


class ApiDescription(_ApiModel):
    """Long and short description pair used for areas and types."""

    descr: str | None = None
    descrshort: str | None = None


class ApiEatery(_ApiModel):
    """Dining venue with its schedule and menus."""

    id: int | str
    name: str
    location: str | None = None
    campus_area: ApiDescription | None = Field(default=None, alias="campusArea")
    eatery_types: list[ApiDescription] = Field(
        default_factory=list, alias="eateryTypes"
    )
    operating_hours: list[ApiOperatingHours] = Field(
        default_factory=list, alias="operatingHours"
    )
