"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import Depends, Header

from cookboxd.core.deps import get_repositories
from cookboxd.core.errors import Unauthenticated
from cookboxd.core.ports import Repositories

from . import permissions, service


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise Unauthenticated("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise Unauthenticated("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise Unauthenticated("Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(
    authorization: str | None = Header(default=None),
    authentication: str | None = Header(default=None),
) -> str:
    # The browser client sends the raw token in an `Authentication` header.
    if not (authorization or "").strip() and (authentication or "").strip():
        legacy = authentication.strip()
        if legacy.lower().startswith("bearer "):
            legacy = legacy[7:].strip()
        return legacy
    return _extract_bearer_token(authorization)


async def get_current_user(
    access_token: str = Depends(get_bearer_token),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    return await service.get_user_from_access_token(repos, access_token)


def require_roles(*roles: str) -> Callable[..., Awaitable[dict]]:
    """
    Dependency factory: authenticated caller whose role is one of `roles`.
    """

    async def _role_dependency(current_user: dict = Depends(get_current_user)) -> dict:
        return permissions.authorize_roles(current_user, roles)

    return _role_dependency


require_admin = require_roles(permissions.Role.ADMIN)
require_member = require_roles(permissions.Role.USER, permissions.Role.ADMIN)
