"""
Ingredient request bodies.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class IngredientRequest(BaseModel):
    recipe_id: int | str | None = None
    name: str | None = None
    quantity: str | int | float | None = None


class IngredientUpdateRequest(BaseModel):
    name: str | None = None
    quantity: str | int | float | None = None


class IngredientBatchRequest(BaseModel):
    recipe_id: int | str | None = None
    # Items are checked one by one so errors can name their position.
    ingredients: Any = None


class IngredientReplaceRequest(BaseModel):
    ingredients: Any = None
