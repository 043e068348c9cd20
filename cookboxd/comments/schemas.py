"""
Comment request bodies.
"""

from __future__ import annotations

from pydantic import BaseModel


class CommentRequest(BaseModel):
    recipe_id: int | str | None = None
    content: str | None = None


class CommentUpdateRequest(BaseModel):
    content: str | None = None
