"""
Recipe business logic.

The acting user always comes from the verified token; a `user_id` in the
request body is never trusted for ownership.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from cookboxd.auth import permissions
from cookboxd.core.errors import NotFound, PersistenceError, ValidationFailed
from cookboxd.core.pagination import clamp_page
from cookboxd.core.ports import Repositories
from cookboxd.core.validation import is_blank, parse_id, text

from . import validation

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10
SEARCH_MIN_CHARS = 2


def _require_id(recipe_id: Any) -> int:
    parsed = parse_id(recipe_id)
    if parsed is None:
        raise ValidationFailed("Invalid recipe ID")
    return parsed


def _optional_text(value: Any) -> str | None:
    return None if is_blank(value) else text(value)


async def _resolve_category(repos: Repositories, category_id: Any) -> int | None:
    if category_id is None:
        return None
    parsed = parse_id(category_id)
    if parsed is None:
        raise ValidationFailed("Invalid category ID")
    if await repos.categories.get_category_by_id(parsed) is None:
        raise NotFound("Category not found")
    return parsed


async def require_recipe(repos: Repositories, recipe_id: int) -> dict:
    row = await repos.recipes.get_recipe_by_id(recipe_id)
    if row is None:
        raise NotFound("Recipe not found")
    return row


async def create_recipe(repos: Repositories, payload: Mapping[str, Any], *, actor: dict | None) -> dict:
    actor = permissions.authorize_roles(actor, permissions.ALL_ROLES)

    data = dict(payload)
    data["user_id"] = actor.get("id")
    error = validation.validate_recipe(data, is_new=True)
    if error:
        raise ValidationFailed(error)

    user_id = parse_id(data["user_id"])
    if user_id is None or await repos.users.get_user_by_id(user_id) is None:
        raise NotFound("User not found")
    category_id = await _resolve_category(repos, data.get("category_id"))

    row = await repos.recipes.create_recipe(
        user_id=user_id,
        category_id=category_id,
        title=text(data["title"]),
        description=_optional_text(data.get("description")),
        image_url=_optional_text(data.get("image_url")),
    )
    if not row:
        raise PersistenceError("Failed to create recipe")

    logger.info("recipe_created id=%s user_id=%s", row["id"], user_id)
    return await repos.recipes.get_recipe_by_id(row["id"]) or row


async def list_recipes(repos: Repositories) -> list[dict]:
    return await repos.recipes.list_recipes()


async def list_recipes_page(repos: Repositories, page: Any, per_page: Any) -> dict:
    window = clamp_page(page, per_page, default_per_page=DEFAULT_PER_PAGE)
    recipes = await repos.recipes.list_recipes_page(limit=window.limit, offset=window.offset)
    total = await repos.recipes.count_recipes()
    return {"recipes": recipes, "pagination": window.summary(total_items=total)}


async def get_recipe(repos: Repositories, recipe_id: Any) -> dict:
    parsed = parse_id(recipe_id)
    if parsed is None:
        raise NotFound("Recipe not found")
    return await require_recipe(repos, parsed)


async def list_recipes_by_user(repos: Repositories, user_id: Any) -> list[dict]:
    parsed = parse_id(user_id)
    if parsed is None:
        return []
    return await repos.recipes.list_recipes_by_user(parsed)


async def list_recipes_by_category(repos: Repositories, category_id: Any) -> list[dict]:
    parsed = parse_id(category_id)
    if parsed is None:
        return []
    return await repos.recipes.list_recipes_by_category(parsed)


async def search_recipes(repos: Repositories, query: str | None) -> list[dict]:
    term = (query or "").strip()
    if len(term) < SEARCH_MIN_CHARS:
        return []
    return await repos.recipes.search_recipes(term)


async def update_recipe(
    repos: Repositories,
    recipe_id: Any,
    payload: Mapping[str, Any],
    *,
    actor: dict | None,
) -> dict:
    recipe_id = _require_id(recipe_id)
    existing = await require_recipe(repos, recipe_id)
    permissions.authorize_owner_or_admin(
        actor,
        existing["user_id"],
        message="You do not have permission to edit this recipe",
    )

    # Ownership cannot be moved through an update.
    data = {key: payload[key] for key in validation.UPDATABLE_COLUMNS if key in payload}
    if data.get("title") is None:
        data.pop("title", None)
    error = validation.validate_recipe(data, is_new=False)
    if error:
        raise ValidationFailed(error)

    if "category_id" in data:
        data["category_id"] = await _resolve_category(repos, data["category_id"])
    for key in ("description", "image_url"):
        if key in data:
            data[key] = _optional_text(data[key])

    row = await repos.recipes.update_recipe(recipe_id, data)
    if row is None:
        raise PersistenceError("Failed to update recipe")
    logger.info("recipe_updated id=%s fields=%s", recipe_id, ",".join(sorted(data)))
    return row


async def delete_recipe(repos: Repositories, recipe_id: Any, *, actor: dict | None) -> None:
    """
    Ingredients and comments of the recipe are removed with it.
    """
    recipe_id = _require_id(recipe_id)
    existing = await require_recipe(repos, recipe_id)
    permissions.authorize_owner_or_admin(
        actor,
        existing["user_id"],
        message="You do not have permission to delete this recipe",
    )

    if not await repos.recipes.delete_recipe(recipe_id):
        raise PersistenceError("Failed to delete recipe")
    logger.info("recipe_deleted id=%s", recipe_id)
