"""
Ingredient business logic.

Every write requires the user or admin role; non-admins may only touch the
ingredients of recipes they own.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from cookboxd.auth import permissions
from cookboxd.core.errors import NotFound, PersistenceError, ValidationFailed
from cookboxd.core.ports import Repositories
from cookboxd.core.validation import parse_id, text
from cookboxd.recipes.service import require_recipe

from . import validation

logger = logging.getLogger(__name__)

_FORBIDDEN_MESSAGE = "You do not have permission to modify ingredients of this recipe"


def _require_id(value: Any, message: str) -> int:
    parsed = parse_id(value)
    if parsed is None:
        raise ValidationFailed(message)
    return parsed


async def _authorize_recipe_owner(repos: Repositories, recipe_id: int, actor: dict | None) -> dict:
    actor = permissions.authorize_roles(actor, permissions.ALL_ROLES)
    recipe = await require_recipe(repos, recipe_id)
    permissions.authorize_owner_or_admin(actor, recipe["user_id"], message=_FORBIDDEN_MESSAGE)
    return recipe


def _clean_items(items: list[Mapping[str, Any]]) -> list[dict[str, str]]:
    return [{"name": text(item["name"]), "quantity": text(item["quantity"])} for item in items]


async def _require_ingredient(repos: Repositories, ingredient_id: int) -> dict:
    row = await repos.ingredients.get_ingredient_by_id(ingredient_id)
    if row is None:
        raise NotFound("Ingredient not found")
    return row


async def create_ingredient(repos: Repositories, payload: Mapping[str, Any], *, actor: dict | None) -> dict:
    permissions.authorize_roles(actor, permissions.ALL_ROLES)
    error = validation.validate_ingredient(payload)
    if error:
        raise ValidationFailed(error)

    recipe_id = _require_id(payload["recipe_id"], "Invalid recipe ID")
    await _authorize_recipe_owner(repos, recipe_id, actor)

    row = await repos.ingredients.create_ingredient(
        recipe_id=recipe_id,
        name=text(payload["name"]),
        quantity=text(payload["quantity"]),
    )
    if not row:
        raise PersistenceError("Failed to add ingredient")
    logger.info("ingredient_created id=%s recipe_id=%s", row["id"], recipe_id)
    return row


async def create_ingredients(
    repos: Repositories,
    recipe_id: Any,
    items: Any,
    *,
    actor: dict | None,
) -> list[dict]:
    """
    All items are validated before any write, and the write itself is
    all-or-nothing.
    """
    recipe_id = _require_id(recipe_id, "Invalid recipe ID")
    await _authorize_recipe_owner(repos, recipe_id, actor)

    error = validation.validate_ingredient_list(recipe_id, items)
    if error:
        raise ValidationFailed(error)

    rows = await repos.ingredients.create_ingredients(recipe_id, _clean_items(items))
    logger.info("ingredients_created recipe_id=%s count=%s", recipe_id, len(rows))
    return rows


async def replace_ingredients(
    repos: Repositories,
    recipe_id: Any,
    items: Any,
    *,
    actor: dict | None,
) -> list[dict]:
    recipe_id = _require_id(recipe_id, "Invalid recipe ID")
    await _authorize_recipe_owner(repos, recipe_id, actor)

    error = validation.validate_ingredient_list(recipe_id, items)
    if error:
        raise ValidationFailed(error)

    rows = await repos.ingredients.replace_ingredients(recipe_id, _clean_items(items))
    logger.info("ingredients_replaced recipe_id=%s count=%s", recipe_id, len(rows))
    return rows


async def list_ingredients(repos: Repositories) -> list[dict]:
    return await repos.ingredients.list_ingredients()


async def get_ingredient(repos: Repositories, ingredient_id: Any) -> dict:
    parsed = parse_id(ingredient_id)
    if parsed is None:
        raise NotFound("Ingredient not found")
    return await _require_ingredient(repos, parsed)


async def list_ingredients_by_recipe(repos: Repositories, recipe_id: Any) -> list[dict]:
    parsed = parse_id(recipe_id)
    if parsed is None:
        return []
    return await repos.ingredients.list_ingredients_by_recipe(parsed)


async def count_recipe_ingredients(repos: Repositories, recipe_id: Any) -> int:
    recipe_id = _require_id(recipe_id, "Invalid recipe ID")
    await require_recipe(repos, recipe_id)
    return await repos.ingredients.count_ingredients_by_recipe(recipe_id)


async def update_ingredient(
    repos: Repositories,
    ingredient_id: Any,
    payload: Mapping[str, Any],
    *,
    actor: dict | None,
) -> dict:
    ingredient_id = _require_id(ingredient_id, "Invalid ingredient ID")
    existing = await _require_ingredient(repos, ingredient_id)
    await _authorize_recipe_owner(repos, existing["recipe_id"], actor)

    data = {key: payload[key] for key in ("name", "quantity") if key in payload}
    error = validation.validate_ingredient_update(data)
    if error:
        raise ValidationFailed(error)

    row = await repos.ingredients.update_ingredient(ingredient_id, {k: text(v) for k, v in data.items()})
    if row is None:
        raise PersistenceError("Failed to update ingredient")
    logger.info("ingredient_updated id=%s", ingredient_id)
    return row


async def delete_ingredient(repos: Repositories, ingredient_id: Any, *, actor: dict | None) -> None:
    ingredient_id = _require_id(ingredient_id, "Invalid ingredient ID")
    existing = await _require_ingredient(repos, ingredient_id)
    await _authorize_recipe_owner(repos, existing["recipe_id"], actor)

    if not await repos.ingredients.delete_ingredient(ingredient_id):
        raise PersistenceError("Failed to delete ingredient")
    logger.info("ingredient_deleted id=%s", ingredient_id)


async def delete_recipe_ingredients(repos: Repositories, recipe_id: Any, *, actor: dict | None) -> int:
    recipe_id = _require_id(recipe_id, "Invalid recipe ID")
    await _authorize_recipe_owner(repos, recipe_id, actor)

    deleted = await repos.ingredients.delete_ingredients_by_recipe(recipe_id)
    logger.info("ingredients_deleted recipe_id=%s count=%s", recipe_id, deleted)
    return deleted
