"""
User field rules.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from cookboxd.auth.permissions import ALL_ROLES
from cookboxd.core.validation import is_blank, is_valid_email, text

USERNAME_MIN = 3
USERNAME_MAX = 50
PASSWORD_MIN = 8
PASSWORD_MAX = 255

_USERNAME_RE = re.compile(r"[A-Za-z0-9_]+")
_LETTER_RE = re.compile(r"[A-Za-z]")
_DIGIT_RE = re.compile(r"[0-9]")


def validate_password(password: Any) -> str | None:
    value = text(password)
    if len(value) < PASSWORD_MIN:
        return f"Password must be at least {PASSWORD_MIN} characters long"
    if len(value) > PASSWORD_MAX:
        return "Password is too long"
    if not _LETTER_RE.search(value) or not _DIGIT_RE.search(value):
        return "Password must contain at least one letter and one number"
    return None


def validate_user(data: Mapping[str, Any], *, is_new: bool) -> str | None:
    """
    Create requires username, email and password. On update every field is
    optional but still checked when present.
    """
    if is_new:
        if is_blank(data.get("username")):
            return "Username is required"
        if is_blank(data.get("email")):
            return "Email is required"
        if is_blank(data.get("password")):
            return "Password is required"
        error = validate_password(data.get("password"))
        if error:
            return error

    if data.get("username") is not None:
        username = text(data["username"])
        if len(username) < USERNAME_MIN:
            return f"Username must be at least {USERNAME_MIN} characters long"
        if len(username) > USERNAME_MAX:
            return f"Username cannot exceed {USERNAME_MAX} characters"
        if not _USERNAME_RE.fullmatch(username):
            return "Username can only contain letters, numbers, and underscores"

    if data.get("email") is not None and not is_valid_email(data["email"]):
        return "Invalid email format"

    role = data.get("role")
    if role is not None and (not isinstance(role, str) or role not in ALL_ROLES):
        return 'Invalid role. Must be "user" or "admin"'

    return None
