"""
Ingredient field rules.
"""

from __future__ import annotations

from typing import Any, Mapping

from cookboxd.core.validation import is_blank, is_valid_id, text

NAME_MAX = 255
QUANTITY_MAX = 100


def validate_ingredient(data: Mapping[str, Any]) -> str | None:
    if is_blank(data.get("recipe_id")):
        return "Recipe ID is required"
    if not is_valid_id(data["recipe_id"]):
        return "Invalid recipe ID"

    if is_blank(data.get("name")):
        return "Ingredient name is required"
    if len(text(data["name"])) > NAME_MAX:
        return f"Ingredient name cannot exceed {NAME_MAX} characters"

    if is_blank(data.get("quantity")):
        return "Ingredient quantity is required"
    if len(text(data["quantity"])) > QUANTITY_MAX:
        return f"Ingredient quantity cannot exceed {QUANTITY_MAX} characters"
    return None


def validate_ingredient_update(data: Mapping[str, Any]) -> str | None:
    """
    Partial update: only the fields present are checked.
    """
    if "name" in data:
        if is_blank(data["name"]):
            return "Ingredient name cannot be empty"
        if len(text(data["name"])) > NAME_MAX:
            return f"Ingredient name cannot exceed {NAME_MAX} characters"

    if "quantity" in data:
        if is_blank(data["quantity"]):
            return "Ingredient quantity cannot be empty"
        if len(text(data["quantity"])) > QUANTITY_MAX:
            return f"Ingredient quantity cannot exceed {QUANTITY_MAX} characters"
    return None


def validate_ingredient_list(recipe_id: Any, items: Any) -> str | None:
    """
    Reports the first bad item by its 1-based position.
    """
    if not isinstance(items, list) or not items:
        return "Ingredients array is required and cannot be empty"

    for index, item in enumerate(items, start=1):
        if not isinstance(item, Mapping):
            return f"Ingredient #{index}: Ingredient name is required"
        error = validate_ingredient({**item, "recipe_id": recipe_id})
        if error:
            return f"Ingredient #{index}: {error}"
    return None
