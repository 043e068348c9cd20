"""
Recipe API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from cookboxd.auth import dependencies as auth_dependencies
from cookboxd.core.deps import get_repositories
from cookboxd.core.ports import Repositories

from . import schemas, service

router = APIRouter(prefix="/recipes")


@router.get("")
async def list_recipes(
    page: str | None = Query(default=None),
    per_page: str | None = Query(default=None),
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    if page is None and per_page is None:
        return {"success": True, "data": await service.list_recipes(repos)}
    return {"success": True, "data": await service.list_recipes_page(repos, page, per_page)}


@router.get("/search")
async def search_recipes(
    q: str | None = Query(default=None),
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.search_recipes(repos, q)}


@router.get("/user/{user_id}")
async def list_recipes_by_user(
    user_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_recipes_by_user(repos, user_id)}


@router.get("/category/{category_id}")
async def list_recipes_by_category(
    category_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_recipes_by_category(repos, category_id)}


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.get_recipe(repos, recipe_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: schemas.RecipeRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    recipe = await service.create_recipe(repos, request.model_dump(exclude_none=True), actor=current_user)
    return {"success": True, "message": "Recipe created successfully", "data": recipe}


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    request: schemas.RecipeRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    recipe = await service.update_recipe(
        repos,
        recipe_id,
        request.model_dump(exclude_unset=True),
        actor=current_user,
    )
    return {"success": True, "message": "Recipe updated successfully", "data": recipe}


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    await service.delete_recipe(repos, recipe_id, actor=current_user)
    return {"success": True, "message": "Recipe deleted successfully"}
