"""
Repository ports.

Each feature's `repository.py` module satisfies one of these protocols with
raw SQL against Postgres. Services only talk to the `Repositories` bundle,
so tests can pass in-memory implementations instead.

Rows are plain dicts. Ids are ints. Methods returning `dict | None` give
None when the row does not exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


class UserRepository(Protocol):
    async def create_user(self, *, username: str, email: str, password_hash: str, role: str) -> dict: ...

    async def list_users(self) -> list[dict]: ...

    async def get_user_by_id(self, user_id: int) -> dict | None: ...

    # The three lookups below include `password_hash`; nothing else does.
    async def get_user_by_email(self, email: str) -> dict | None: ...

    async def get_user_by_username(self, username: str) -> dict | None: ...

    async def get_user_credentials(self, user_id: int) -> dict | None: ...

    async def update_user(self, user_id: int, fields: dict[str, Any]) -> dict | None: ...

    async def update_password(self, user_id: int, password_hash: str) -> bool: ...

    async def delete_user(self, user_id: int) -> bool: ...

    async def email_exists(self, email: str, *, exclude_id: int | None = None) -> bool: ...

    async def username_exists(self, username: str, *, exclude_id: int | None = None) -> bool: ...


class CategoryRepository(Protocol):
    async def create_category(self, *, name: str) -> dict: ...

    async def list_categories(self) -> list[dict]: ...

    async def get_category_by_id(self, category_id: int) -> dict | None: ...

    async def get_category_by_name(self, name: str) -> dict | None: ...

    async def update_category(self, category_id: int, *, name: str) -> dict | None: ...

    async def delete_category(self, category_id: int) -> bool: ...

    async def count_recipes(self, category_id: int) -> int: ...

    async def name_exists(self, name: str, *, exclude_id: int | None = None) -> bool: ...


class RecipeRepository(Protocol):
    async def create_recipe(
        self,
        *,
        user_id: int,
        category_id: int | None,
        title: str,
        description: str | None,
        image_url: str | None,
    ) -> dict: ...

    async def list_recipes(self) -> list[dict]: ...

    async def list_recipes_page(self, *, limit: int, offset: int) -> list[dict]: ...

    async def count_recipes(self) -> int: ...

    async def get_recipe_by_id(self, recipe_id: int) -> dict | None: ...

    async def list_recipes_by_user(self, user_id: int) -> list[dict]: ...

    async def list_recipes_by_category(self, category_id: int) -> list[dict]: ...

    async def search_recipes(self, term: str) -> list[dict]: ...

    async def update_recipe(self, recipe_id: int, fields: dict[str, Any]) -> dict | None: ...

    async def delete_recipe(self, recipe_id: int) -> bool: ...


class IngredientRepository(Protocol):
    async def create_ingredient(self, *, recipe_id: int, name: str, quantity: str) -> dict: ...

    # Both batch writes are all-or-nothing.
    async def create_ingredients(self, recipe_id: int, items: list[dict[str, Any]]) -> list[dict]: ...

    async def replace_ingredients(self, recipe_id: int, items: list[dict[str, Any]]) -> list[dict]: ...

    async def list_ingredients(self) -> list[dict]: ...

    async def get_ingredient_by_id(self, ingredient_id: int) -> dict | None: ...

    async def list_ingredients_by_recipe(self, recipe_id: int) -> list[dict]: ...

    async def count_ingredients_by_recipe(self, recipe_id: int) -> int: ...

    async def update_ingredient(self, ingredient_id: int, fields: dict[str, Any]) -> dict | None: ...

    async def delete_ingredient(self, ingredient_id: int) -> bool: ...

    async def delete_ingredients_by_recipe(self, recipe_id: int) -> int: ...


class CommentRepository(Protocol):
    async def create_comment(self, *, recipe_id: int, user_id: int, content: str) -> dict: ...

    async def list_comments(self) -> list[dict]: ...

    async def list_recent_comments(self, *, limit: int, offset: int) -> list[dict]: ...

    async def get_comment_by_id(self, comment_id: int) -> dict | None: ...

    async def list_comments_by_recipe(self, recipe_id: int) -> list[dict]: ...

    async def list_comments_by_user(self, user_id: int) -> list[dict]: ...

    async def count_comments_by_recipe(self, recipe_id: int) -> int: ...

    async def update_comment(self, comment_id: int, *, content: str) -> dict | None: ...

    async def delete_comment(self, comment_id: int) -> bool: ...

    async def delete_comments_by_recipe(self, recipe_id: int) -> int: ...

    async def delete_comments_by_user(self, user_id: int) -> int: ...


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    categories: CategoryRepository
    recipes: RecipeRepository
    ingredients: IngredientRepository
    comments: CommentRepository
