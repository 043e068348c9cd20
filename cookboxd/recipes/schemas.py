"""
Recipe request bodies.

Ids are accepted as ints or numeric strings; the validators decide.
"""

from __future__ import annotations

from pydantic import BaseModel


class RecipeRequest(BaseModel):
    category_id: int | str | None = None
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
