"""
Comment persistence (raw SQL).
"""

from __future__ import annotations

from cookboxd.core import db

_SELECT_COMMENT = """
    SELECT
      c.id,
      c.recipe_id,
      c.user_id,
      c.content,
      c.created_at,
      c.updated_at,
      u.username,
      r.title AS recipe_title
    FROM comments c
    LEFT JOIN users u ON u.id = c.user_id
    LEFT JOIN recipes r ON r.id = c.recipe_id
"""


async def create_comment(*, recipe_id: int, user_id: int, content: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO comments (recipe_id, user_id, content)
        VALUES ($1, $2, $3)
        RETURNING id, recipe_id, user_id, content, created_at, updated_at
        """,
        recipe_id,
        user_id,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to create comment.")
    return row


async def list_comments() -> list[dict]:
    return await db.fetch_all(_SELECT_COMMENT + " ORDER BY c.created_at DESC, c.id DESC")


async def list_recent_comments(*, limit: int, offset: int) -> list[dict]:
    return await db.fetch_all(
        _SELECT_COMMENT
        + """
        ORDER BY c.created_at DESC, c.id DESC
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )


async def get_comment_by_id(comment_id: int) -> dict | None:
    return await db.fetch_one(_SELECT_COMMENT + " WHERE c.id = $1", comment_id)


async def list_comments_by_recipe(recipe_id: int) -> list[dict]:
    return await db.fetch_all(
        _SELECT_COMMENT + " WHERE c.recipe_id = $1 ORDER BY c.created_at DESC, c.id DESC",
        recipe_id,
    )


async def list_comments_by_user(user_id: int) -> list[dict]:
    return await db.fetch_all(
        _SELECT_COMMENT + " WHERE c.user_id = $1 ORDER BY c.created_at DESC, c.id DESC",
        user_id,
    )


async def count_comments_by_recipe(recipe_id: int) -> int:
    count = await db.fetch_val("SELECT count(*) FROM comments WHERE recipe_id = $1", recipe_id)
    return int(count or 0)


async def update_comment(comment_id: int, *, content: str) -> dict | None:
    row = await db.fetch_one(
        """
        UPDATE comments
        SET content = $2,
            updated_at = now()
        WHERE id = $1
        RETURNING id
        """,
        comment_id,
        content,
    )
    if row is None:
        return None
    return await get_comment_by_id(comment_id)


async def delete_comment(comment_id: int) -> bool:
    row = await db.fetch_one("DELETE FROM comments WHERE id = $1 RETURNING id", comment_id)
    return row is not None


async def delete_comments_by_recipe(recipe_id: int) -> int:
    status = await db.execute("DELETE FROM comments WHERE recipe_id = $1", recipe_id)
    return db.affected_rows(status)


async def delete_comments_by_user(user_id: int) -> int:
    status = await db.execute("DELETE FROM comments WHERE user_id = $1", user_id)
    return db.affected_rows(status)
