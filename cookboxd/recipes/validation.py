"""
Recipe field rules.
"""

from __future__ import annotations

from typing import Any, Mapping

from cookboxd.core.validation import is_blank, is_valid_id, is_valid_url, text

TITLE_MIN = 3
TITLE_MAX = 255
DESCRIPTION_MIN = 10
IMAGE_URL_MAX = 500

# Fields an update may change; the owner is fixed at creation.
UPDATABLE_COLUMNS = ("category_id", "title", "description", "image_url")


def validate_recipe(data: Mapping[str, Any], *, is_new: bool) -> str | None:
    if is_new:
        if is_blank(data.get("user_id")):
            return "User ID is required"
        if not is_valid_id(data["user_id"]):
            return "Invalid user ID"
        if is_blank(data.get("title")):
            return "Recipe title is required"

    if data.get("title") is not None:
        title = text(data["title"])
        if len(title) < TITLE_MIN:
            return f"Recipe title must be at least {TITLE_MIN} characters long"
        if len(title) > TITLE_MAX:
            return f"Recipe title cannot exceed {TITLE_MAX} characters"

    if not is_blank(data.get("description")):
        if len(text(data["description"])) < DESCRIPTION_MIN:
            return f"Recipe description must be at least {DESCRIPTION_MIN} characters long"

    if not is_blank(data.get("image_url")):
        image_url = text(data["image_url"])
        if len(image_url) > IMAGE_URL_MAX:
            return "Image URL is too long"
        if not is_valid_url(image_url):
            return "Invalid image URL format"

    if data.get("category_id") is not None and not is_valid_id(data["category_id"]):
        return "Invalid category ID"

    return None
