"""Admin token dependency for mutating endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, Request

from photo_diary.domain.errors import UnauthorizedError
from photo_diary.services.access import AccessGuard

if TYPE_CHECKING:
    from photo_diary.containers import AppContainer


def _get_access_guard(request: Request) -> AccessGuard:
    container: AppContainer = request.app.state.container
    return container.access_guard


async def require_admin(
    authorization: str | None = Header(default=None),
    guard: AccessGuard = Depends(_get_access_guard),
) -> None:
    """Ensure requests present the configured admin token."""
    if not guard.authorize(authorization):
        raise UnauthorizedError()
