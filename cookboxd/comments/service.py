"""
Comment business logic.

The author of a new comment is the authenticated caller. Authors edit and
delete their own comments; admins may edit or delete any comment and clear
a recipe's or a user's comments in bulk.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from cookboxd.auth import permissions
from cookboxd.core.errors import NotFound, PersistenceError, ValidationFailed
from cookboxd.core.pagination import clamp_page
from cookboxd.core.ports import Repositories
from cookboxd.core.validation import parse_id, text
from cookboxd.recipes.service import require_recipe

from . import validation

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 20


def _require_id(value: Any, message: str) -> int:
    parsed = parse_id(value)
    if parsed is None:
        raise ValidationFailed(message)
    return parsed


async def _require_comment(repos: Repositories, comment_id: int) -> dict:
    row = await repos.comments.get_comment_by_id(comment_id)
    if row is None:
        raise NotFound("Comment not found")
    return row


async def create_comment(repos: Repositories, payload: Mapping[str, Any], *, actor: dict | None) -> dict:
    actor = permissions.authorize_roles(actor, permissions.ALL_ROLES)

    data = dict(payload)
    data["user_id"] = actor.get("id")
    error = validation.validate_comment(data)
    if error:
        raise ValidationFailed(error)

    recipe_id = _require_id(data["recipe_id"], "Invalid recipe ID")
    await require_recipe(repos, recipe_id)
    user_id = parse_id(data["user_id"])
    if user_id is None or await repos.users.get_user_by_id(user_id) is None:
        raise NotFound("User not found")

    row = await repos.comments.create_comment(
        recipe_id=recipe_id,
        user_id=user_id,
        content=text(data["content"]).strip(),
    )
    if not row:
        raise PersistenceError("Failed to post comment")

    logger.info("comment_created id=%s recipe_id=%s user_id=%s", row["id"], recipe_id, user_id)
    return await repos.comments.get_comment_by_id(row["id"]) or row


async def list_comments(repos: Repositories) -> list[dict]:
    return await repos.comments.list_comments()


async def list_recent_comments(repos: Repositories, page: Any, per_page: Any) -> dict:
    window = clamp_page(page, per_page, default_per_page=DEFAULT_PER_PAGE)
    comments = await repos.comments.list_recent_comments(limit=window.limit, offset=window.offset)
    return {"comments": comments, "pagination": window.summary()}


async def get_comment(repos: Repositories, comment_id: Any) -> dict:
    parsed = parse_id(comment_id)
    if parsed is None:
        raise NotFound("Comment not found")
    return await _require_comment(repos, parsed)


async def list_comments_by_recipe(repos: Repositories, recipe_id: Any) -> list[dict]:
    parsed = parse_id(recipe_id)
    if parsed is None:
        return []
    return await repos.comments.list_comments_by_recipe(parsed)


async def list_comments_by_user(repos: Repositories, user_id: Any) -> list[dict]:
    parsed = parse_id(user_id)
    if parsed is None:
        return []
    return await repos.comments.list_comments_by_user(parsed)


async def count_recipe_comments(repos: Repositories, recipe_id: Any) -> int:
    recipe_id = _require_id(recipe_id, "Invalid recipe ID")
    await require_recipe(repos, recipe_id)
    return await repos.comments.count_comments_by_recipe(recipe_id)


async def update_comment(
    repos: Repositories,
    comment_id: Any,
    payload: Mapping[str, Any],
    *,
    actor: dict | None,
) -> dict:
    comment_id = _require_id(comment_id, "Invalid comment ID")
    existing = await _require_comment(repos, comment_id)
    permissions.authorize_owner_or_admin(
        actor,
        existing["user_id"],
        message="You do not have permission to edit this comment",
    )

    error = validation.validate_content(payload.get("content"))
    if error:
        raise ValidationFailed(error)

    row = await repos.comments.update_comment(comment_id, content=text(payload["content"]).strip())
    if row is None:
        raise PersistenceError("Failed to update comment")
    logger.info("comment_updated id=%s", comment_id)
    return row


async def delete_comment(repos: Repositories, comment_id: Any, *, actor: dict | None) -> None:
    comment_id = _require_id(comment_id, "Invalid comment ID")
    existing = await _require_comment(repos, comment_id)
    permissions.authorize_owner_or_admin(
        actor,
        existing["user_id"],
        message="You do not have permission to delete this comment",
    )

    if not await repos.comments.delete_comment(comment_id):
        raise PersistenceError("Failed to delete comment")
    logger.info("comment_deleted id=%s", comment_id)


async def delete_recipe_comments(repos: Repositories, recipe_id: Any) -> int:
    recipe_id = _require_id(recipe_id, "Invalid recipe ID")
    await require_recipe(repos, recipe_id)

    deleted = await repos.comments.delete_comments_by_recipe(recipe_id)
    logger.info("comments_deleted recipe_id=%s count=%s", recipe_id, deleted)
    return deleted


async def delete_user_comments(repos: Repositories, user_id: Any) -> int:
    user_id = _require_id(user_id, "Invalid user ID")
    if await repos.users.get_user_by_id(user_id) is None:
        raise NotFound("User not found")

    deleted = await repos.comments.delete_comments_by_user(user_id)
    logger.info("comments_deleted user_id=%s count=%s", user_id, deleted)
    return deleted
