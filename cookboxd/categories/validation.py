"""
Category field rules.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from cookboxd.core.validation import is_blank, text

NAME_MIN = 2
NAME_MAX = 100

# ASCII letters, digits, spaces and hyphens.
_NAME_RE = re.compile(r"[A-Za-z0-9 \-]+", re.ASCII)


def validate_category(data: Mapping[str, Any]) -> str | None:
    if is_blank(data.get("name")):
        return "Category name is required"

    name = text(data["name"])
    if len(name) < NAME_MIN:
        return f"Category name must be at least {NAME_MIN} characters long"
    if len(name) > NAME_MAX:
        return f"Category name cannot exceed {NAME_MAX} characters"
    if not _NAME_RE.fullmatch(name):
        return "Category name can only contain letters, numbers, spaces, and hyphens"
    return None
