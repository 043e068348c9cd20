"""In-memory repositories implementing the ports in `cookboxd.core.ports`.

They share one `FakeStore` so joins (username, category_name, recipe_title)
and the cascade rules of the SQL schema behave like the real database.
"""

from __future__ import annotations

import copy
import itertools
from datetime import UTC, datetime
from typing import Any

import asyncpg

from cookboxd.core.ports import Repositories

BIGINT_MAX = 2**63 - 1


def _now() -> datetime:
    return datetime.now(UTC)


def _bigint(*values: int) -> None:
    # asyncpg refuses to encode these for int8 parameters.
    for value in values:
        if not -BIGINT_MAX - 1 <= value <= BIGINT_MAX:
            raise asyncpg.DataError(f"value out of int64 range: {value}")


class FakeStore:
    """Tables as dicts keyed by id, plus one id sequence per table."""

    def __init__(self) -> None:
        self.users: dict[int, dict] = {}
        self.categories: dict[int, dict] = {}
        self.recipes: dict[int, dict] = {}
        self.ingredients: dict[int, dict] = {}
        self.comments: dict[int, dict] = {}
        self._ids = {name: itertools.count(1) for name in ("users", "categories", "recipes", "ingredients", "comments")}
        # Insert calls fail once this many more rows have been written.
        self.fail_ingredient_insert_after: int | None = None

    def next_id(self, table: str) -> int:
        return next(self._ids[table])

    # Synchronous seeding helpers for fixtures.

    def add_user(self, username: str, *, role: str = "user", password_hash: str = "", email: str | None = None) -> dict:
        user_id = self.next_id("users")
        self.users[user_id] = {
            "id": user_id,
            "username": username,
            "email": email or f"{username}@mail.com",
            "password_hash": password_hash,
            "role": role,
            "created_at": _now(),
        }
        return {k: v for k, v in self.users[user_id].items() if k != "password_hash"}

    def add_category(self, name: str) -> dict:
        category_id = self.next_id("categories")
        self.categories[category_id] = {"id": category_id, "name": name}
        return dict(self.categories[category_id])

    def add_recipe(self, user_id: int, title: str, *, category_id: int | None = None, description: str | None = None) -> dict:
        recipe_id = self.next_id("recipes")
        now = _now()
        self.recipes[recipe_id] = {
            "id": recipe_id,
            "user_id": user_id,
            "category_id": category_id,
            "title": title,
            "description": description,
            "image_url": None,
            "created_at": now,
            "updated_at": now,
        }
        return dict(self.recipes[recipe_id])

    def add_ingredient(self, recipe_id: int, name: str, quantity: str) -> dict:
        ingredient_id = self.next_id("ingredients")
        self.ingredients[ingredient_id] = {"id": ingredient_id, "recipe_id": recipe_id, "name": name, "quantity": quantity}
        return dict(self.ingredients[ingredient_id])

    def add_comment(self, recipe_id: int, user_id: int, content: str) -> dict:
        comment_id = self.next_id("comments")
        now = _now()
        self.comments[comment_id] = {
            "id": comment_id,
            "recipe_id": recipe_id,
            "user_id": user_id,
            "content": content,
            "created_at": now,
            "updated_at": now,
        }
        return dict(self.comments[comment_id])


class FakeUserRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def _public(self, row: dict) -> dict:
        return {key: value for key, value in row.items() if key != "password_hash"}

    async def create_user(self, *, username: str, email: str, password_hash: str, role: str) -> dict:
        user_id = self.store.next_id("users")
        row = {
            "id": user_id,
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "role": role,
            "created_at": _now(),
        }
        self.store.users[user_id] = row
        return self._public(row)

    async def list_users(self) -> list[dict]:
        rows = sorted(self.store.users.values(), key=lambda r: r["id"], reverse=True)
        return [self._public(row) for row in rows]

    async def get_user_by_id(self, user_id: int) -> dict | None:
        row = self.store.users.get(user_id)
        return self._public(row) if row else None

    async def get_user_by_email(self, email: str) -> dict | None:
        row = next((r for r in self.store.users.values() if r["email"] == email), None)
        return dict(row) if row else None

    async def get_user_by_username(self, username: str) -> dict | None:
        row = next((r for r in self.store.users.values() if r["username"] == username), None)
        return dict(row) if row else None

    async def get_user_credentials(self, user_id: int) -> dict | None:
        row = self.store.users.get(user_id)
        return dict(row) if row else None

    async def update_user(self, user_id: int, fields: dict[str, Any]) -> dict | None:
        row = self.store.users.get(user_id)
        if row is None:
            return None
        row.update({k: v for k, v in fields.items() if k in ("username", "email", "role")})
        return self._public(row)

    async def update_password(self, user_id: int, password_hash: str) -> bool:
        row = self.store.users.get(user_id)
        if row is None:
            return False
        row["password_hash"] = password_hash
        return True

    async def delete_user(self, user_id: int) -> bool:
        if self.store.users.pop(user_id, None) is None:
            return False
        for recipe_id in [r["id"] for r in self.store.recipes.values() if r["user_id"] == user_id]:
            _drop_recipe(self.store, recipe_id)
        for comment_id in [c["id"] for c in self.store.comments.values() if c["user_id"] == user_id]:
            del self.store.comments[comment_id]
        return True

    async def email_exists(self, email: str, *, exclude_id: int | None = None) -> bool:
        return any(r["email"] == email and r["id"] != exclude_id for r in self.store.users.values())

    async def username_exists(self, username: str, *, exclude_id: int | None = None) -> bool:
        return any(r["username"] == username and r["id"] != exclude_id for r in self.store.users.values())


class FakeCategoryRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    async def create_category(self, *, name: str) -> dict:
        category_id = self.store.next_id("categories")
        self.store.categories[category_id] = {"id": category_id, "name": name}
        return dict(self.store.categories[category_id])

    async def list_categories(self) -> list[dict]:
        return [dict(r) for r in sorted(self.store.categories.values(), key=lambda r: r["name"])]

    async def get_category_by_id(self, category_id: int) -> dict | None:
        row = self.store.categories.get(category_id)
        return dict(row) if row else None

    async def get_category_by_name(self, name: str) -> dict | None:
        row = next((r for r in self.store.categories.values() if r["name"] == name), None)
        return dict(row) if row else None

    async def update_category(self, category_id: int, *, name: str) -> dict | None:
        row = self.store.categories.get(category_id)
        if row is None:
            return None
        row["name"] = name
        return dict(row)

    async def delete_category(self, category_id: int) -> bool:
        if any(r["category_id"] == category_id for r in self.store.recipes.values()):
            raise RuntimeError("violates foreign key constraint recipes_category_id_fkey")
        return self.store.categories.pop(category_id, None) is not None

    async def count_recipes(self, category_id: int) -> int:
        return sum(1 for r in self.store.recipes.values() if r["category_id"] == category_id)

    async def name_exists(self, name: str, *, exclude_id: int | None = None) -> bool:
        return any(r["name"] == name and r["id"] != exclude_id for r in self.store.categories.values())


def _drop_recipe(store: FakeStore, recipe_id: int) -> bool:
    if store.recipes.pop(recipe_id, None) is None:
        return False
    for table in (store.ingredients, store.comments):
        for row_id in [row["id"] for row in table.values() if row["recipe_id"] == recipe_id]:
            del table[row_id]
    return True


class FakeRecipeRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def _joined(self, row: dict) -> dict:
        user = self.store.users.get(row["user_id"])
        category = self.store.categories.get(row["category_id"]) if row["category_id"] else None
        return {
            **row,
            "username": user["username"] if user else None,
            "category_name": category["name"] if category else None,
        }

    def _newest_first(self, rows: list[dict]) -> list[dict]:
        return [self._joined(r) for r in sorted(rows, key=lambda r: r["id"], reverse=True)]

    async def create_recipe(
        self,
        *,
        user_id: int,
        category_id: int | None,
        title: str,
        description: str | None,
        image_url: str | None,
    ) -> dict:
        recipe_id = self.store.next_id("recipes")
        now = _now()
        self.store.recipes[recipe_id] = {
            "id": recipe_id,
            "user_id": user_id,
            "category_id": category_id,
            "title": title,
            "description": description,
            "image_url": image_url,
            "created_at": now,
            "updated_at": now,
        }
        return dict(self.store.recipes[recipe_id])

    async def list_recipes(self) -> list[dict]:
        return self._newest_first(list(self.store.recipes.values()))

    async def list_recipes_page(self, *, limit: int, offset: int) -> list[dict]:
        _bigint(limit, offset)
        return self._newest_first(list(self.store.recipes.values()))[offset : offset + limit]

    async def count_recipes(self) -> int:
        return len(self.store.recipes)

    async def get_recipe_by_id(self, recipe_id: int) -> dict | None:
        _bigint(recipe_id)
        row = self.store.recipes.get(recipe_id)
        return self._joined(row) if row else None

    async def list_recipes_by_user(self, user_id: int) -> list[dict]:
        return self._newest_first([r for r in self.store.recipes.values() if r["user_id"] == user_id])

    async def list_recipes_by_category(self, category_id: int) -> list[dict]:
        return self._newest_first([r for r in self.store.recipes.values() if r["category_id"] == category_id])

    async def search_recipes(self, term: str) -> list[dict]:
        needle = term.lower()
        return self._newest_first([r for r in self.store.recipes.values() if needle in r["title"].lower()])

    async def update_recipe(self, recipe_id: int, fields: dict[str, Any]) -> dict | None:
        row = self.store.recipes.get(recipe_id)
        if row is None:
            return None
        row.update(fields)
        row["updated_at"] = _now()
        return self._joined(row)

    async def delete_recipe(self, recipe_id: int) -> bool:
        return _drop_recipe(self.store, recipe_id)


class FakeIngredientRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def _insert(self, table: dict[int, dict], recipe_id: int, name: str, quantity: str) -> dict:
        if self.store.fail_ingredient_insert_after is not None:
            if self.store.fail_ingredient_insert_after <= 0:
                raise RuntimeError("Failed to insert ingredient.")
            self.store.fail_ingredient_insert_after -= 1
        ingredient_id = self.store.next_id("ingredients")
        table[ingredient_id] = {"id": ingredient_id, "recipe_id": recipe_id, "name": name, "quantity": quantity}
        return dict(table[ingredient_id])

    def _with_title(self, row: dict) -> dict:
        recipe = self.store.recipes.get(row["recipe_id"])
        return {**row, "recipe_title": recipe["title"] if recipe else None}

    async def create_ingredient(self, *, recipe_id: int, name: str, quantity: str) -> dict:
        return self._insert(self.store.ingredients, recipe_id, name, quantity)

    async def create_ingredients(self, recipe_id: int, items: list[dict[str, Any]]) -> list[dict]:
        # Work on a copy and publish it only when every insert succeeded.
        staged = copy.deepcopy(self.store.ingredients)
        created = [self._insert(staged, recipe_id, i["name"], i["quantity"]) for i in items]
        self.store.ingredients = staged
        return created

    async def replace_ingredients(self, recipe_id: int, items: list[dict[str, Any]]) -> list[dict]:
        staged = {k: v for k, v in copy.deepcopy(self.store.ingredients).items() if v["recipe_id"] != recipe_id}
        created = [self._insert(staged, recipe_id, i["name"], i["quantity"]) for i in items]
        self.store.ingredients = staged
        return created

    async def list_ingredients(self) -> list[dict]:
        rows = sorted(self.store.ingredients.values(), key=lambda r: (r["recipe_id"], r["id"]))
        return [self._with_title(r) for r in rows]

    async def get_ingredient_by_id(self, ingredient_id: int) -> dict | None:
        row = self.store.ingredients.get(ingredient_id)
        return self._with_title(row) if row else None

    async def list_ingredients_by_recipe(self, recipe_id: int) -> list[dict]:
        return [dict(r) for r in sorted(self.store.ingredients.values(), key=lambda r: r["id"]) if r["recipe_id"] == recipe_id]

    async def count_ingredients_by_recipe(self, recipe_id: int) -> int:
        return sum(1 for r in self.store.ingredients.values() if r["recipe_id"] == recipe_id)

    async def update_ingredient(self, ingredient_id: int, fields: dict[str, Any]) -> dict | None:
        row = self.store.ingredients.get(ingredient_id)
        if row is None:
            return None
        row.update({k: v for k, v in fields.items() if k in ("name", "quantity")})
        return dict(row)

    async def delete_ingredient(self, ingredient_id: int) -> bool:
        return self.store.ingredients.pop(ingredient_id, None) is not None

    async def delete_ingredients_by_recipe(self, recipe_id: int) -> int:
        doomed = [k for k, v in self.store.ingredients.items() if v["recipe_id"] == recipe_id]
        for key in doomed:
            del self.store.ingredients[key]
        return len(doomed)


class FakeCommentRepository:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def _joined(self, row: dict) -> dict:
        user = self.store.users.get(row["user_id"])
        recipe = self.store.recipes.get(row["recipe_id"])
        return {
            **row,
            "username": user["username"] if user else None,
            "recipe_title": recipe["title"] if recipe else None,
        }

    def _newest_first(self, rows: list[dict]) -> list[dict]:
        return [self._joined(r) for r in sorted(rows, key=lambda r: r["id"], reverse=True)]

    async def create_comment(self, *, recipe_id: int, user_id: int, content: str) -> dict:
        comment_id = self.store.next_id("comments")
        now = _now()
        self.store.comments[comment_id] = {
            "id": comment_id,
            "recipe_id": recipe_id,
            "user_id": user_id,
            "content": content,
            "created_at": now,
            "updated_at": now,
        }
        return dict(self.store.comments[comment_id])

    async def list_comments(self) -> list[dict]:
        return self._newest_first(list(self.store.comments.values()))

    async def list_recent_comments(self, *, limit: int, offset: int) -> list[dict]:
        return self._newest_first(list(self.store.comments.values()))[offset : offset + limit]

    async def get_comment_by_id(self, comment_id: int) -> dict | None:
        row = self.store.comments.get(comment_id)
        return self._joined(row) if row else None

    async def list_comments_by_recipe(self, recipe_id: int) -> list[dict]:
        return self._newest_first([c for c in self.store.comments.values() if c["recipe_id"] == recipe_id])

    async def list_comments_by_user(self, user_id: int) -> list[dict]:
        return self._newest_first([c for c in self.store.comments.values() if c["user_id"] == user_id])

    async def count_comments_by_recipe(self, recipe_id: int) -> int:
        return sum(1 for c in self.store.comments.values() if c["recipe_id"] == recipe_id)

    async def update_comment(self, comment_id: int, *, content: str) -> dict | None:
        row = self.store.comments.get(comment_id)
        if row is None:
            return None
        row["content"] = content
        row["updated_at"] = _now()
        return self._joined(row)

    async def delete_comment(self, comment_id: int) -> bool:
        return self.store.comments.pop(comment_id, None) is not None

    async def delete_comments_by_recipe(self, recipe_id: int) -> int:
        doomed = [k for k, v in self.store.comments.items() if v["recipe_id"] == recipe_id]
        for key in doomed:
            del self.store.comments[key]
        return len(doomed)

    async def delete_comments_by_user(self, user_id: int) -> int:
        doomed = [k for k, v in self.store.comments.items() if v["user_id"] == user_id]
        for key in doomed:
            del self.store.comments[key]
        return len(doomed)


def build_repositories(store: FakeStore | None = None) -> Repositories:
    store = store or FakeStore()
    return Repositories(
        users=FakeUserRepository(store),
        categories=FakeCategoryRepository(store),
        recipes=FakeRecipeRepository(store),
        ingredients=FakeIngredientRepository(store),
        comments=FakeCommentRepository(store),
    )
