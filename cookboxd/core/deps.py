"""
FastAPI dependency that hands routes the repository bundle.

Tests replace it with `app.dependency_overrides[get_repositories]`.
"""

from __future__ import annotations

from functools import lru_cache

from .ports import Repositories


@lru_cache(maxsize=1)
def _sql_repositories() -> Repositories:
    # Imported here so `core` does not depend on feature packages at import time.
    from cookboxd.categories import repository as categories
    from cookboxd.comments import repository as comments
    from cookboxd.ingredients import repository as ingredients
    from cookboxd.recipes import repository as recipes
    from cookboxd.users import repository as users

    return Repositories(
        users=users,
        categories=categories,
        recipes=recipes,
        ingredients=ingredients,
        comments=comments,
    )


def get_repositories() -> Repositories:
    return _sql_repositories()
