"""
Category request bodies.
"""

from __future__ import annotations

from pydantic import BaseModel


class CategoryRequest(BaseModel):
    name: str | None = None
