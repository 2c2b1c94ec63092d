"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from campus_dining.api.app import create_app
from tests.conftest import make_item, make_menu

ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


def _seed_past_and_future(menu_repository) -> None:  # type: ignore[no-untyped-def]
    for menu_date in ("2000-01-01", "2999-01-01"):
        menu_repository.add(
            make_menu("Okenshields", [make_item("Pizza")], menu_date=menu_date)
        )


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    missing = client.get("/admin/health")
    wrong = client.get("/admin/health", headers={"X-Admin-Token": "nope"})
    ok = client.get("/admin/health", headers=ADMIN_HEADERS)

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert ok.json() == {"status": "ok"}


def test_admin_menu_stats(container, menu_repository) -> None:
    client = TestClient(create_app(container))
    _seed_past_and_future(menu_repository)

    response = client.get("/admin/menus/stats", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"total": 2, "today_and_future": 1}


def test_admin_cleanup_deletes_past_menus(container, menu_repository) -> None:
    client = TestClient(create_app(container))
    _seed_past_and_future(menu_repository)

    response = client.post("/admin/menus/cleanup", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"total": 1, "today_and_future": 1}
