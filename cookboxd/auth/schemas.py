"""
Auth API schemas (request bodies).

Fields are loosely typed on purpose: the service layer owns the rules and
their messages.
"""

from __future__ import annotations

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    # Email or username.
    login: str | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = None
