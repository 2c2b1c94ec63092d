"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from campus_dining.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/menus/stats", dependencies=[Depends(require_admin)])
async def menu_stats(request: Request) -> dict[str, object]:
    """Return menu store counts."""
    container: AppContainer = request.app.state.container
    return asdict(container.ingestion_service.get_menu_stats())


@router.post("/menus/cleanup", dependencies=[Depends(require_admin)])
async def force_cleanup(request: Request) -> dict[str, object]:
    """Delete past menus immediately and return the resulting counts."""
    container: AppContainer = request.app.state.container
    stats = container.ingestion_service.run_maintenance()
    return asdict(stats)
