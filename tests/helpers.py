"""Test helpers shared across modules."""

from __future__ import annotations

from cookboxd.auth import security

PASSWORD = "secret123"


def auth_headers(user: dict) -> dict[str, str]:
    return {"Authorization": f"Bearer {security.build_access_token(user)}"}
