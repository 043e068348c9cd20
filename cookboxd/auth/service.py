"""
Auth business logic.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from cookboxd.core.errors import Unauthenticated, ValidationFailed
from cookboxd.core.ports import Repositories
from cookboxd.core.validation import is_blank, is_valid_email, text
from cookboxd.users import service as user_service

from . import permissions, security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


async def register(repos: Repositories, payload: Mapping[str, Any]) -> dict:
    """
    Self-service sign-up. The role is always `user`, whatever the client sent.
    """
    return await user_service.create_account(repos, payload, role=permissions.Role.USER.value)


def _login_identifier(payload: Mapping[str, Any]) -> str:
    for key in ("login", "email", "username"):
        if not is_blank(payload.get(key)):
            return text(payload[key]).strip()
    return ""


async def login(repos: Repositories, payload: Mapping[str, Any]) -> dict:
    """
    Check credentials and issue an access token.

    Unknown user and wrong password fail the same way.
    """
    identifier = _login_identifier(payload)
    password = payload.get("password")
    if not identifier or is_blank(password):
        raise ValidationFailed("Email/username and password are required")

    if is_valid_email(identifier):
        user_row = await repos.users.get_user_by_email(identifier)
    else:
        user_row = await repos.users.get_user_by_username(identifier)

    if user_row is None or not security.verify_password(
        text(password), str(user_row.get("password_hash") or "")
    ):
        logger.warning("login_rejected")
        raise Unauthenticated(INVALID_CREDENTIALS)

    token = security.build_access_token(user_row)
    logger.info("login_succeeded user_id=%s", user_row["id"])
    return {**security.public_user(user_row), "token": token}


async def get_user_from_access_token(repos: Repositories, access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise Unauthenticated(str(exc)) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise Unauthenticated("Invalid access token subject.")

    # Role and existence come from the store, not from the token's copy.
    user_row = await repos.users.get_user_by_id(int(subject))
    if user_row is None:
        raise Unauthenticated("User not found.")
    return security.public_user(user_row)
