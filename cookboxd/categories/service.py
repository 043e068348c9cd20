"""
Category business logic.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from cookboxd.core.errors import Conflict, NotFound, PersistenceError, ValidationFailed
from cookboxd.core.ports import Repositories
from cookboxd.core.validation import parse_id, text

from . import validation

logger = logging.getLogger(__name__)


def _require_id(category_id: Any) -> int:
    parsed = parse_id(category_id)
    if parsed is None:
        raise ValidationFailed("Invalid category ID")
    return parsed


async def _require_category(repos: Repositories, category_id: int) -> dict:
    row = await repos.categories.get_category_by_id(category_id)
    if row is None:
        raise NotFound("Category not found")
    return row


async def create_category(repos: Repositories, payload: Mapping[str, Any]) -> dict:
    error = validation.validate_category(payload)
    if error:
        raise ValidationFailed(error)

    name = text(payload["name"])
    if await repos.categories.name_exists(name):
        raise Conflict("Category name already exists")

    row = await repos.categories.create_category(name=name)
    if not row:
        raise PersistenceError("Failed to create category")
    logger.info("category_created id=%s", row["id"])
    return row


async def list_categories(repos: Repositories) -> list[dict]:
    return await repos.categories.list_categories()


async def get_category(repos: Repositories, category_id: Any) -> dict:
    parsed = parse_id(category_id)
    if parsed is None:
        raise NotFound("Category not found")
    return await _require_category(repos, parsed)


async def get_category_by_name(repos: Repositories, name: str) -> dict:
    row = await repos.categories.get_category_by_name(name) if name else None
    if row is None:
        raise NotFound("Category not found")
    return row


async def update_category(repos: Repositories, category_id: Any, payload: Mapping[str, Any]) -> dict:
    category_id = _require_id(category_id)
    existing = await _require_category(repos, category_id)

    error = validation.validate_category(payload)
    if error:
        raise ValidationFailed(error)

    name = text(payload["name"])
    if name != existing["name"] and await repos.categories.name_exists(name, exclude_id=category_id):
        raise Conflict("Category name already exists")

    row = await repos.categories.update_category(category_id, name=name)
    if row is None:
        raise PersistenceError("Failed to update category")
    logger.info("category_updated id=%s", category_id)
    return row


async def delete_category(repos: Repositories, category_id: Any) -> None:
    """
    Refused while any recipe still points at the category.
    """
    category_id = _require_id(category_id)
    await _require_category(repos, category_id)

    recipe_count = await repos.categories.count_recipes(category_id)
    if recipe_count > 0:
        raise ValidationFailed(f"Cannot delete category. It is being used by {recipe_count} recipe(s)")

    if not await repos.categories.delete_category(category_id):
        raise PersistenceError("Failed to delete category")
    logger.info("category_deleted id=%s", category_id)


async def count_category_recipes(repos: Repositories, category_id: Any) -> int:
    category_id = _require_id(category_id)
    await _require_category(repos, category_id)
    return await repos.categories.count_recipes(category_id)
