"""
Auth security helpers: password hashing and access tokens.
"""

from __future__ import annotations

import time
from datetime import date, datetime
from typing import Any

import bcrypt
import jwt

from cookboxd.core.settings import env_int, env_str

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating.
BCRYPT_MAX_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return env_int("ACCESS_TOKEN_EXPIRE_MIN", 24 * 60)


def now_epoch_s() -> int:
    return int(time.time())


def _password_bytes(plain_password: str) -> bytes:
    return (plain_password or "").encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    password = _password_bytes(plain_password)
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """
    Constant-time check of a password against a stored bcrypt hash.
    """
    password = _password_bytes(plain_password)
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def public_user(user_row: dict) -> dict[str, Any]:
    """
    Copy of a user row without the password hash.
    """
    return {key: value for key, value in user_row.items() if key != "password_hash"}


def _claim_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def build_access_token(user_row: dict) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    user = {key: _claim_value(value) for key, value in public_user(user_row).items()}
    payload = {
        "sub": str(user_row["id"]),
        "user": user,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload
