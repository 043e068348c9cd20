"""
Role and ownership predicates.

`actor` is the sanitized user row of the authenticated caller, or None
when the request carried no valid token. Missing identity is a 401;
an identity without the right role or ownership is a 403.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any

from cookboxd.core.errors import Forbidden, Unauthenticated
from cookboxd.core.validation import parse_id


class Role(StrEnum):
    USER = "user"
    ADMIN = "admin"


ALL_ROLES = frozenset(Role)


def _require_actor(actor: dict | None) -> dict:
    if not actor:
        raise Unauthenticated("Unauthorized: user not authenticated")
    return actor


def actor_id(actor: dict | None) -> int | None:
    if not actor:
        return None
    return parse_id(actor.get("id"))


def is_admin(actor: dict | None) -> bool:
    return bool(actor) and actor.get("role") == Role.ADMIN


def authorize_role(actor: dict | None, required_role: str) -> dict:
    """
    Exact role match.
    """
    actor = _require_actor(actor)
    if actor.get("role") != required_role:
        raise Forbidden("Access denied: insufficient privileges")
    return actor


def authorize_roles(actor: dict | None, roles: Iterable[str]) -> dict:
    """
    Role must be one of `roles`.
    """
    actor = _require_actor(actor)
    if actor.get("role") not in set(roles):
        raise Forbidden("Forbidden: role not allowed")
    return actor


def is_owner(actor: dict | None, owner_id: Any) -> bool:
    acting = actor_id(actor)
    owner = parse_id(owner_id)
    return acting is not None and owner is not None and acting == owner


def authorize_owner_or_admin(actor: dict | None, owner_id: Any, *, message: str) -> dict:
    actor = _require_actor(actor)
    if is_admin(actor) or is_owner(actor, owner_id):
        return actor
    raise Forbidden(message)
