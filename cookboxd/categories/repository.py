"""
Category persistence (raw SQL).
"""

from __future__ import annotations

from cookboxd.core import db


async def create_category(*, name: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO categories (name)
        VALUES ($1)
        RETURNING id, name
        """,
        name,
    )
    if row is None:
        raise RuntimeError("Failed to create category.")
    return row


async def list_categories() -> list[dict]:
    return await db.fetch_all("SELECT id, name FROM categories ORDER BY name ASC")


async def get_category_by_id(category_id: int) -> dict | None:
    return await db.fetch_one("SELECT id, name FROM categories WHERE id = $1", category_id)


async def get_category_by_name(name: str) -> dict | None:
    return await db.fetch_one("SELECT id, name FROM categories WHERE name = $1", name)


async def update_category(category_id: int, *, name: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE categories
        SET name = $2
        WHERE id = $1
        RETURNING id, name
        """,
        category_id,
        name,
    )


async def delete_category(category_id: int) -> bool:
    row = await db.fetch_one("DELETE FROM categories WHERE id = $1 RETURNING id", category_id)
    return row is not None


async def count_recipes(category_id: int) -> int:
    count = await db.fetch_val("SELECT count(*) FROM recipes WHERE category_id = $1", category_id)
    return int(count or 0)


async def name_exists(name: str, *, exclude_id: int | None = None) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM categories
        WHERE name = $1
          AND ($2::bigint IS NULL OR id <> $2)
        LIMIT 1
        """,
        name,
        exclude_id,
    )
    return row is not None
