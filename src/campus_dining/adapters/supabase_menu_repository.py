"""Supabase repository for dining menus."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from campus_dining.domain.menus import Menu, MenuItem, OperatingHours
from campus_dining.services.ingestion import MenuRepository

_MENU_COLUMNS = (
    "eatery_id, eatery_name, menu_date, meal_type, items, campus_area, location, "
    "operating_hours, updated_at"
)


@dataclass
class SupabaseMenuRepository(MenuRepository):
    """Supabase implementation for the menus table."""

    client: Client

    def upsert_menu(self, menu: Menu) -> None:
        """Upsert a menu keyed by eatery, date and meal type."""
        self.client.table("menus").upsert(
            {
                "eatery_id": menu.eatery_id,
                "eatery_name": menu.eatery_name,
                "menu_date": menu.menu_date,
                "meal_type": menu.meal_type,
                "items": [_dump_item(item) for item in menu.items],
                "campus_area": menu.campus_area,
                "location": menu.location,
                "operating_hours": _dump_hours(menu.operating_hours),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="eatery_id,menu_date,meal_type",
        ).execute()

    def list_menus(
        self,
        menu_dates: list[str],
        meal_type: str | None = None,
        eatery_names: list[str] | None = None,
    ) -> list[Menu]:
        """Return menus for the dates, optionally by meal type and eatery."""
        query = (
            self.client.table("menus")
            .select(_MENU_COLUMNS)
            .in_("menu_date", menu_dates)
        )
        if meal_type:
            query = query.eq("meal_type", meal_type)
        if eatery_names is not None:
            query = query.in_("eatery_name", eatery_names)
        response = query.order("menu_date", desc=False).execute()
        return [_parse_menu(row) for row in response.data or []]

    def latest_updated_at(self) -> datetime | None:
        """Return the newest updated_at across all menus."""
        response = (
            self.client.table("menus")
            .select("updated_at")
            .order("updated_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_timestamp(response.data[0].get("updated_at"))

    def delete_menus_before(self, menu_date: str) -> None:
        """Delete menus dated strictly before menu_date."""
        self.client.table("menus").delete().lt("menu_date", menu_date).execute()

    def count_menus(self, from_date: str | None = None) -> int:
        """Count menus, optionally from a date onward."""
        query = self.client.table("menus").select("id", count="exact", head=True)
        if from_date is not None:
            query = query.gte("menu_date", from_date)
        response = query.execute()
        return response.count or 0


def _dump_item(item: MenuItem) -> dict[str, object]:
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category,
        "ingredients": list(item.ingredients),
        "allergens": list(item.allergens),
        "healthy": item.healthy,
        "sortIdx": item.sort_idx,
    }


def _dump_hours(hours: OperatingHours | None) -> dict[str, object]:
    if hours is None:
        return {}
    return {
        "start": hours.start,
        "end": hours.end,
        "startTimestamp": hours.start_timestamp,
        "endTimestamp": hours.end_timestamp,
    }


def _parse_menu(row: dict[str, object]) -> Menu:
    raw_items = row.get("items")
    items = [
        _parse_item(raw)
        for raw in (raw_items if isinstance(raw_items, list) else [])
        if isinstance(raw, dict)
    ]
    return Menu(
        eatery_id=str(row.get("eatery_id", "")),
        eatery_name=str(row.get("eatery_name") or ""),
        menu_date=str(row.get("menu_date") or ""),
        meal_type=str(row.get("meal_type") or ""),
        items=items,
        campus_area=str(row.get("campus_area") or ""),
        location=str(row.get("location") or ""),
        operating_hours=_parse_hours(row.get("operating_hours")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_item(raw: dict[str, object]) -> MenuItem:
    return MenuItem(
        id=str(raw.get("id") or ""),
        name=str(raw.get("name") or ""),
        category=str(raw.get("category") or ""),
        ingredients=_string_list(raw.get("ingredients")),
        allergens=_string_list(raw.get("allergens")),
        healthy=raw.get("healthy") is True,
        sort_idx=_int_or_zero(raw.get("sortIdx")),
    )


def _parse_hours(raw: object) -> OperatingHours | None:
    if not isinstance(raw, dict) or not raw:
        return None
    start_ts = raw.get("startTimestamp")
    end_ts = raw.get("endTimestamp")
    return OperatingHours(
        start=str(raw.get("start") or ""),
        end=str(raw.get("end") or ""),
        start_timestamp=start_ts if isinstance(start_ts, int) else None,
        end_timestamp=end_ts if isinstance(end_ts, int) else None,
    )


def _parse_timestamp(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _string_list(raw: object) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [str(value) for value in raw]


def _int_or_zero(raw: object) -> int:
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    return 0
