"""
Comment field rules. Content is measured after trimming.
"""

from __future__ import annotations

from typing import Any, Mapping

from cookboxd.core.validation import is_blank, is_valid_id, text

CONTENT_MIN = 3
CONTENT_MAX = 2000


def validate_content(content: Any) -> str | None:
    if is_blank(content):
        return "Comment content is required"
    trimmed = text(content).strip()
    if len(trimmed) < CONTENT_MIN:
        return f"Comment must be at least {CONTENT_MIN} characters long"
    if len(trimmed) > CONTENT_MAX:
        return f"Comment cannot exceed {CONTENT_MAX} characters"
    return None


def validate_comment(data: Mapping[str, Any]) -> str | None:
    if is_blank(data.get("recipe_id")):
        return "Recipe ID is required"
    if not is_valid_id(data["recipe_id"]):
        return "Invalid recipe ID"

    if is_blank(data.get("user_id")):
        return "User ID is required"
    if not is_valid_id(data["user_id"]):
        return "Invalid user ID"

    return validate_content(data.get("content"))
