"""
Page/per-page clamping for list endpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

MAX_PER_PAGE = 100
# OFFSET is bound as a PostgreSQL bigint.
MAX_OFFSET = 2**63 - 1


def _to_int(value: Any, default: int) -> int:
    # Malformed query values fall back to the default rather than erroring.
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        try:
            return int(float(str(value).strip()))
        except (ValueError, OverflowError):
            return default


@dataclass(frozen=True)
class Page:
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page

    def summary(self, total_items: int | None = None) -> dict[str, Any]:
        info: dict[str, Any] = {"current_page": self.page, "per_page": self.per_page}
        if total_items is None:
            return info

        total_pages = math.ceil(total_items / self.per_page) if total_items > 0 else 0
        info.update(
            {
                "total_items": total_items,
                "total_pages": total_pages,
                "has_next": self.page < total_pages,
                "has_previous": self.page > 1,
            }
        )
        return info


def clamp_page(page: Any, per_page: Any, *, default_per_page: int) -> Page:
    """
    page >= 1, 1 <= per_page <= 100, and the offset fits a bigint.
    """
    size = max(1, min(MAX_PER_PAGE, _to_int(per_page, default_per_page)))
    return Page(
        page=max(1, min(MAX_OFFSET // size + 1, _to_int(page, 1))),
        per_page=size,
    )
