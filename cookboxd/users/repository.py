"""
User persistence (raw SQL).

Only the credential lookups select `password_hash`.
"""

from __future__ import annotations

from typing import Any

from cookboxd.core import db

UPDATABLE_COLUMNS = ("username", "email", "role")


async def create_user(*, username: str, email: str, password_hash: str, role: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (username, email, password_hash, role)
        VALUES ($1, $2, $3, $4)
        RETURNING id, username, email, role, created_at
        """,
        username,
        email,
        password_hash,
        role,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def list_users() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, username, email, role, created_at
        FROM users
        ORDER BY created_at DESC, id DESC
        """
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, email, role, created_at
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, email, password_hash, role, created_at
        FROM users
        WHERE email = $1
        """,
        email,
    )


async def get_user_by_username(username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, email, password_hash, role, created_at
        FROM users
        WHERE username = $1
        """,
        username,
    )


async def get_user_credentials(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, email, password_hash, role, created_at
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def update_user(user_id: int, fields: dict[str, Any]) -> dict | None:
    """
    Partial update. Unknown keys are ignored; no keys means a plain read.
    """
    columns = [name for name in UPDATABLE_COLUMNS if name in fields]
    if not columns:
        return await get_user_by_id(user_id)

    # Column names come from the allowlist above, values stay parameterized.
    assignments = ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))
    return await db.fetch_one(
        f"""
        UPDATE users
        SET {assignments}
        WHERE id = $1
        RETURNING id, username, email, role, created_at
        """,
        user_id,
        *[fields[name] for name in columns],
    )


async def update_password(user_id: int, password_hash: str) -> bool:
    row = await db.fetch_one(
        """
        UPDATE users
        SET password_hash = $2
        WHERE id = $1
        RETURNING id
        """,
        user_id,
        password_hash,
    )
    return row is not None


async def delete_user(user_id: int) -> bool:
    """
    Recipes and comments go with the user (ON DELETE CASCADE).
    """
    row = await db.fetch_one("DELETE FROM users WHERE id = $1 RETURNING id", user_id)
    return row is not None


async def email_exists(email: str, *, exclude_id: int | None = None) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM users
        WHERE email = $1
          AND ($2::bigint IS NULL OR id <> $2)
        LIMIT 1
        """,
        email,
        exclude_id,
    )
    return row is not None


async def username_exists(username: str, *, exclude_id: int | None = None) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM users
        WHERE username = $1
          AND ($2::bigint IS NULL OR id <> $2)
        LIMIT 1
        """,
        username,
        exclude_id,
    )
    return row is not None
