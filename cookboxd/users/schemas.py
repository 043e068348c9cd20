"""
User request bodies.
"""

from __future__ import annotations

from pydantic import BaseModel


class UserCreateRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class UserUpdateRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    role: str | None = None


class PasswordChangeRequest(BaseModel):
    current_password: str | None = None
    new_password: str | None = None
