"""
Ingredient persistence (raw SQL).

Batch inserts and list replacement run inside one transaction so a recipe
never ends up with half of a submitted ingredient list.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from cookboxd.core import db

UPDATABLE_COLUMNS = ("name", "quantity")

_INSERT_INGREDIENT = """
    INSERT INTO ingredients (recipe_id, name, quantity)
    VALUES ($1, $2, $3)
    RETURNING id, recipe_id, name, quantity
"""


async def create_ingredient(*, recipe_id: int, name: str, quantity: str) -> dict:
    row = await db.fetch_one(_INSERT_INGREDIENT, recipe_id, name, quantity)
    if row is None:
        raise RuntimeError("Failed to create ingredient.")
    return row


async def _insert_all(conn: asyncpg.Connection, recipe_id: int, items: list[dict[str, Any]]) -> list[dict]:
    created: list[dict] = []
    for item in items:
        row = await conn.fetchrow(_INSERT_INGREDIENT, recipe_id, item["name"], item["quantity"])
        if row is None:
            # Raising inside the transaction block rolls back earlier rows.
            raise RuntimeError("Failed to insert ingredient.")
        created.append(dict(row))
    return created


async def create_ingredients(recipe_id: int, items: list[dict[str, Any]]) -> list[dict]:
    """
    Insert every item or none of them.
    """
    async with db.transaction() as conn:
        return await _insert_all(conn, recipe_id, items)


async def replace_ingredients(recipe_id: int, items: list[dict[str, Any]]) -> list[dict]:
    """
    Delete the recipe's ingredients and insert the new list in one transaction.
    """
    async with db.transaction() as conn:
        await conn.execute("DELETE FROM ingredients WHERE recipe_id = $1", recipe_id)
        return await _insert_all(conn, recipe_id, items)


async def list_ingredients() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT i.id, i.recipe_id, i.name, i.quantity, r.title AS recipe_title
        FROM ingredients i
        LEFT JOIN recipes r ON r.id = i.recipe_id
        ORDER BY i.recipe_id, i.id
        """
    )


async def get_ingredient_by_id(ingredient_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT i.id, i.recipe_id, i.name, i.quantity, r.title AS recipe_title
        FROM ingredients i
        LEFT JOIN recipes r ON r.id = i.recipe_id
        WHERE i.id = $1
        """,
        ingredient_id,
    )


async def list_ingredients_by_recipe(recipe_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, recipe_id, name, quantity
        FROM ingredients
        WHERE recipe_id = $1
        ORDER BY id
        """,
        recipe_id,
    )


async def count_ingredients_by_recipe(recipe_id: int) -> int:
    count = await db.fetch_val("SELECT count(*) FROM ingredients WHERE recipe_id = $1", recipe_id)
    return int(count or 0)


async def update_ingredient(ingredient_id: int, fields: dict[str, Any]) -> dict | None:
    columns = [name for name in UPDATABLE_COLUMNS if name in fields]
    if not columns:
        return await get_ingredient_by_id(ingredient_id)

    assignments = ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))
    return await db.fetch_one(
        f"""
        UPDATE ingredients
        SET {assignments}
        WHERE id = $1
        RETURNING id, recipe_id, name, quantity
        """,
        ingredient_id,
        *[fields[name] for name in columns],
    )


async def delete_ingredient(ingredient_id: int) -> bool:
    row = await db.fetch_one("DELETE FROM ingredients WHERE id = $1 RETURNING id", ingredient_id)
    return row is not None


async def delete_ingredients_by_recipe(recipe_id: int) -> int:
    status = await db.execute("DELETE FROM ingredients WHERE recipe_id = $1", recipe_id)
    return db.affected_rows(status)
