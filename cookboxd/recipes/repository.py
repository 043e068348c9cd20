"""
Recipe persistence (raw SQL).

Reads join the author's username and the category name for display.
"""

from __future__ import annotations

from typing import Any

from cookboxd.core import db

from .validation import UPDATABLE_COLUMNS

_SELECT_RECIPE = """
    SELECT
      r.id,
      r.user_id,
      r.category_id,
      r.title,
      r.description,
      r.image_url,
      r.created_at,
      r.updated_at,
      u.username,
      c.name AS category_name
    FROM recipes r
    LEFT JOIN users u ON u.id = r.user_id
    LEFT JOIN categories c ON c.id = r.category_id
"""


async def create_recipe(
    *,
    user_id: int,
    category_id: int | None,
    title: str,
    description: str | None,
    image_url: str | None,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO recipes (user_id, category_id, title, description, image_url)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id, user_id, category_id, title, description, image_url, created_at, updated_at
        """,
        user_id,
        category_id,
        title,
        description,
        image_url,
    )
    if row is None:
        raise RuntimeError("Failed to create recipe.")
    return row


async def list_recipes() -> list[dict]:
    return await db.fetch_all(_SELECT_RECIPE + " ORDER BY r.created_at DESC, r.id DESC")


async def list_recipes_page(*, limit: int, offset: int) -> list[dict]:
    return await db.fetch_all(
        _SELECT_RECIPE
        + """
        ORDER BY r.created_at DESC, r.id DESC
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )


async def count_recipes() -> int:
    count = await db.fetch_val("SELECT count(*) FROM recipes")
    return int(count or 0)


async def get_recipe_by_id(recipe_id: int) -> dict | None:
    return await db.fetch_one(_SELECT_RECIPE + " WHERE r.id = $1", recipe_id)


async def list_recipes_by_user(user_id: int) -> list[dict]:
    return await db.fetch_all(
        _SELECT_RECIPE + " WHERE r.user_id = $1 ORDER BY r.created_at DESC, r.id DESC",
        user_id,
    )


async def list_recipes_by_category(category_id: int) -> list[dict]:
    return await db.fetch_all(
        _SELECT_RECIPE + " WHERE r.category_id = $1 ORDER BY r.created_at DESC, r.id DESC",
        category_id,
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def search_recipes(term: str) -> list[dict]:
    """
    Case-insensitive substring match on the title. Wildcards in the term match literally.
    """
    return await db.fetch_all(
        _SELECT_RECIPE
        + r"""
        WHERE r.title ILIKE ('%' || $1 || '%') ESCAPE '\'
        ORDER BY r.created_at DESC, r.id DESC
        """,
        _escape_like(term),
    )


async def update_recipe(recipe_id: int, fields: dict[str, Any]) -> dict | None:
    columns = [name for name in UPDATABLE_COLUMNS if name in fields]
    if not columns:
        return await get_recipe_by_id(recipe_id)

    assignments = ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))
    row = await db.fetch_one(
        f"""
        UPDATE recipes
        SET {assignments},
            updated_at = now()
        WHERE id = $1
        RETURNING id
        """,
        recipe_id,
        *[fields[name] for name in columns],
    )
    if row is None:
        return None
    return await get_recipe_by_id(recipe_id)


async def delete_recipe(recipe_id: int) -> bool:
    """
    Ingredients and comments go with the recipe (ON DELETE CASCADE).
    """
    row = await db.fetch_one("DELETE FROM recipes WHERE id = $1 RETURNING id", recipe_id)
    return row is not None
