"""Ingestion of third-party dining data into the menu store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

from pydantic import ValidationError

from campus_dining.adapters.dining_api_client import DiningApiClient
from campus_dining.domain.eateries import ApiEatery, ApiEvent
from campus_dining.domain.menus import Menu, MenuItem, MenuStats, OperatingHours

DINING_TYPE_KEYWORDS = ("dining", "marketplace", "all you care to eat")
DINING_NAME_KEYWORDS = ("dining", "marketplace", "house", "104west", "okenshields")

_logger = logging.getLogger(__name__)


class MenuRepository(Protocol):
    """Persistence interface for menus."""

    def upsert_menu(self, menu: Menu) -> None:
        """Insert or overwrite the menu for its eatery, date and meal type."""

    def list_menus(
        self,
        menu_dates: list[str],
        meal_type: str | None = None,
        eatery_names: list[str] | None = None,
    ) -> list[Menu]:
        """Return menus matching the filters, ordered by date."""

    def latest_updated_at(self) -> datetime | None:
        """Return the most recent menu update timestamp."""

    def delete_menus_before(self, menu_date: str) -> None:
        """Delete menus dated strictly before the given date."""

    def count_menus(self, from_date: str | None = None) -> int:
        """Count menus, optionally only those dated on or after a date."""


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of a menu refresh."""

    fetched: bool
    eateries: int = 0
    dining_halls: int = 0
    menus_stored: int = 0
    menus_failed: int = 0


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MenuIngestionService:
    """Keeps the menu store in sync with the dining API."""

    api_client: DiningApiClient
    repository: MenuRepository
    freshness_hours: float = 6
    clock: Callable[[], datetime] = field(default=_utc_now)

    async def refresh_menus(self) -> IngestionResult:
        """Clean old menus, then fetch and store menus when data is stale."""
        self.run_maintenance()
        if not self.should_fetch():
            _logger.info("Menu data is fresh, skipping dining API fetch")
            return IngestionResult(fetched=False)

        eateries = await self.fetch_eateries()
        halls = [eatery for eatery in eateries if is_dining_hall(eatery)]
        _logger.info(
            "Fetched %s eateries, %s dining halls", len(eateries), len(halls)
        )
        stored = 0
        failed = 0
        for eatery in halls:
            for menu in flatten_eatery(eatery):
                try:
                    self.repository.upsert_menu(menu)
                except Exception:
                    failed += 1
                    _logger.exception(
                        "Failed to store menu for %s (%s, %s)",
                        menu.eatery_name,
                        menu.menu_date,
                        menu.meal_type,
                    )
                    continue
                stored += 1
        _logger.info("Stored %s menus from %s dining halls", stored, len(halls))
        return IngestionResult(
            fetched=True,
            eateries=len(eateries),
            dining_halls=len(halls),
            menus_stored=stored,
            menus_failed=failed,
        )

    async def fetch_eateries(self) -> list[ApiEatery]:
        """Fetch and decode eateries, skipping entries that fail validation."""
        try:
            payload = await self.api_client.fetch_eateries()
        except Exception:
            _logger.exception("Failed to fetch dining API eateries")
            return []
        data = payload.get("data") if isinstance(payload, dict) else None
        raw_eateries = data.get("eateries") if isinstance(data, dict) else None
        if not isinstance(raw_eateries, list):
            _logger.warning("Dining API response has no eateries list")
            return []
        eateries = []
        for raw in raw_eateries:
            try:
                eateries.append(ApiEatery.model_validate(raw))
            except ValidationError as exc:
                _logger.warning("Skipping malformed eatery: %s", exc)
        return eateries

    def run_maintenance(self) -> MenuStats:
        """Delete past menus and log store statistics."""
        self.cleanup_old_menus()
        stats = self.get_menu_stats()
        _logger.info(
            "Menu store: %s total, %s current or future",
            stats.total,
            stats.today_and_future,
        )
        return stats

    def cleanup_old_menus(self) -> None:
        """Delete every menu dated before today."""
        today = self.clock().date().isoformat()
        try:
            self.repository.delete_menus_before(today)
        except Exception:
            _logger.exception("Failed to clean up menus before %s", today)
            return
        _logger.info("Cleaned up menus older than %s", today)

    def should_fetch(self) -> bool:
        """Return True when stored menus are missing or stale."""
        try:
            latest = self.repository.latest_updated_at()
        except Exception:
            _logger.exception("Failed to read menu timestamps")
            return True
        if latest is None:
            return True
        age = self.clock() - latest
        return age >= timedelta(hours=self.freshness_hours)

    def get_menu_stats(self) -> MenuStats:
        """Return total and current menu counts, zero on failure."""
        today = self.clock().date().isoformat()
        try:
            return MenuStats(
                total=self.repository.count_menus(),
                today_and_future=self.repository.count_menus(from_date=today),
            )
        except Exception:
            _logger.exception("Failed to count menus")
            return MenuStats(total=0, today_and_future=0)

    def list_menus(self, menu_date: str, meal_type: str | None = None) -> list[Menu]:
        """Return stored menus for one date."""
        try:
            return self.repository.list_menus([menu_date], meal_type=meal_type)
        except Exception:
            _logger.exception("Failed to list menus for %s", menu_date)
            return []


def is_dining_hall(eatery: ApiEatery) -> bool:
    """Return True for dining halls, by eatery type or by name."""
    for eatery_type in eatery.eatery_types:
        descr = (eatery_type.descr or "").lower()
        if any(keyword in descr for keyword in DINING_TYPE_KEYWORDS):
            return True
    name = eatery.name.lower()
    return any(keyword in name for keyword in DINING_NAME_KEYWORDS)


def flatten_eatery(eatery: ApiEatery) -> list[Menu]:
    """Turn an eatery's nested schedule into one menu per date and event."""
    menus = []
    eatery_id = str(eatery.id)
    campus_area = eatery.campus_area.descr if eatery.campus_area else None
    for hours in eatery.operating_hours:
        for event in hours.events:
            items = _event_items(eatery_id, hours.date, event)
            if not items:
                _logger.debug(
                    "No menu items for %s - %s (%s)",
                    eatery.name,
                    event.descr,
                    hours.date,
                )
                continue
            menus.append(
                Menu(
                    eatery_id=eatery_id,
                    eatery_name=eatery.name,
                    menu_date=hours.date,
                    meal_type=event.descr or "Unknown",
                    items=items,
                    campus_area=campus_area or "Unknown",
                    location=eatery.location or "",
                    operating_hours=OperatingHours(
                        start=event.start or "",
                        end=event.end or "",
                        start_timestamp=event.start_timestamp,
                        end_timestamp=event.end_timestamp,
                    ),
                )
            )
    return menus


def _event_items(eatery_id: str, menu_date: str, event: ApiEvent) -> list[MenuItem]:
    items = []
    for category in event.menu:
        for api_item in category.items:
            if not api_item.item:
                continue
            items.append(
                MenuItem(
                    id=f"{eatery_id}-{api_item.item}-{menu_date}",
                    name=api_item.item,
                    category=category.category or "Unknown",
                    healthy=bool(api_item.healthy),
                    sort_idx=api_item.sort_idx or 0,
                )
            )
    return items
