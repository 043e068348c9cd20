"""
User business logic: validation, uniqueness and password changes.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from cookboxd.auth import permissions, security
from cookboxd.core.errors import Conflict, NotFound, PersistenceError, ValidationFailed
from cookboxd.core.ports import Repositories
from cookboxd.core.validation import parse_id, text

from . import validation

logger = logging.getLogger(__name__)


def _require_id(user_id: Any) -> int:
    parsed = parse_id(user_id)
    if parsed is None:
        raise ValidationFailed("Invalid user ID")
    return parsed


async def create_account(repos: Repositories, payload: Mapping[str, Any], *, role: str) -> dict:
    """
    Validate, check uniqueness, hash and insert. Callers decide the role.
    """
    data = dict(payload)
    data["role"] = role
    error = validation.validate_user(data, is_new=True)
    if error:
        raise ValidationFailed(error)

    username = text(data["username"])
    email = text(data["email"])
    if await repos.users.email_exists(email):
        raise Conflict("Email address is already registered")
    if await repos.users.username_exists(username):
        raise Conflict("Username is already taken")

    row = await repos.users.create_user(
        username=username,
        email=email,
        password_hash=security.hash_password(text(data["password"])),
        role=role,
    )
    if not row:
        raise PersistenceError("Failed to register user")

    logger.info("user_created id=%s role=%s", row["id"], role)
    return security.public_user(row)


async def create_user(repos: Repositories, payload: Mapping[str, Any]) -> dict:
    """
    Admin-side creation; the role may be chosen and defaults to `user`.
    """
    role = payload.get("role")
    if role is None:
        role = permissions.Role.USER.value
    return await create_account(repos, payload, role=role)


async def list_users(repos: Repositories) -> list[dict]:
    return [security.public_user(row) for row in await repos.users.list_users()]


async def get_user(repos: Repositories, user_id: Any) -> dict:
    parsed = parse_id(user_id)
    row = await repos.users.get_user_by_id(parsed) if parsed is not None else None
    if row is None:
        raise NotFound("User not found")
    return security.public_user(row)


async def update_user(repos: Repositories, user_id: Any, payload: Mapping[str, Any]) -> dict:
    """
    Partial update of username, email and role.
    """
    user_id = _require_id(user_id)
    existing = await repos.users.get_user_by_id(user_id)
    if existing is None:
        raise NotFound("User not found")

    # Passwords only change through change_password.
    data = {key: payload[key] for key in ("username", "email", "role") if payload.get(key) is not None}
    error = validation.validate_user(data, is_new=False)
    if error:
        raise ValidationFailed(error)

    if "email" in data and data["email"] != existing["email"]:
        if await repos.users.email_exists(data["email"], exclude_id=user_id):
            raise Conflict("Email address is already in use")
    if "username" in data and data["username"] != existing["username"]:
        if await repos.users.username_exists(data["username"], exclude_id=user_id):
            raise Conflict("Username is already taken")

    row = await repos.users.update_user(user_id, data)
    if row is None:
        raise PersistenceError("Failed to update user")

    logger.info("user_updated id=%s fields=%s", user_id, ",".join(sorted(data)))
    return security.public_user(row)


async def change_password(
    repos: Repositories,
    user_id: Any,
    *,
    current_password: Any,
    new_password: Any,
    actor: dict | None,
) -> None:
    user_id = _require_id(user_id)
    permissions.authorize_owner_or_admin(
        actor,
        user_id,
        message="You do not have permission to change this password",
    )

    credentials = await repos.users.get_user_credentials(user_id)
    if credentials is None:
        raise NotFound("User not found")

    if not security.verify_password(text(current_password), str(credentials.get("password_hash") or "")):
        raise ValidationFailed("Current password is incorrect")

    error = validation.validate_password(new_password)
    if error:
        raise ValidationFailed(error)

    if not await repos.users.update_password(user_id, security.hash_password(text(new_password))):
        raise PersistenceError("Failed to change password")
    logger.info("user_password_changed id=%s", user_id)


async def delete_user(repos: Repositories, user_id: Any, *, actor: dict | None) -> None:
    """
    Delete a user together with their recipes and comments.
    """
    user_id = _require_id(user_id)
    if permissions.actor_id(actor) == user_id:
        raise ValidationFailed("Cannot delete your own account")

    if await repos.users.get_user_by_id(user_id) is None:
        raise NotFound("User not found")

    if not await repos.users.delete_user(user_id):
        raise PersistenceError("Failed to delete user")
    logger.info("user_deleted id=%s", user_id)
