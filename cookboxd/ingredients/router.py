"""
Ingredient API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from cookboxd.auth import dependencies as auth_dependencies
from cookboxd.core.deps import get_repositories
from cookboxd.core.ports import Repositories

from . import schemas, service

router = APIRouter(prefix="/ingredients")


@router.get("")
async def list_ingredients(
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_ingredients(repos)}


@router.get("/recipe/{recipe_id}")
async def list_ingredients_by_recipe(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_ingredients_by_recipe(repos, recipe_id)}


@router.get("/recipe/{recipe_id}/count")
async def count_recipe_ingredients(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    count = await service.count_recipe_ingredients(repos, recipe_id)
    return {"success": True, "data": {"count": count}}


@router.get("/{ingredient_id}")
async def get_ingredient(
    ingredient_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.get_ingredient(repos, ingredient_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ingredient(
    request: schemas.IngredientRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    ingredient = await service.create_ingredient(
        repos,
        request.model_dump(exclude_none=True),
        actor=current_user,
    )
    return {"success": True, "message": "Ingredient added successfully", "data": ingredient}


@router.post("/batch", status_code=status.HTTP_201_CREATED)
async def create_ingredients(
    request: schemas.IngredientBatchRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    rows = await service.create_ingredients(repos, request.recipe_id, request.ingredients, actor=current_user)
    return {"success": True, "message": f"{len(rows)} ingredients added successfully", "data": rows}


@router.put("/recipe/{recipe_id}/replace")
async def replace_ingredients(
    recipe_id: str,
    request: schemas.IngredientReplaceRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    rows = await service.replace_ingredients(repos, recipe_id, request.ingredients, actor=current_user)
    return {"success": True, "message": "Recipe ingredients replaced successfully", "data": rows}


@router.put("/{ingredient_id}")
async def update_ingredient(
    ingredient_id: str,
    request: schemas.IngredientUpdateRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    ingredient = await service.update_ingredient(
        repos,
        ingredient_id,
        request.model_dump(exclude_unset=True),
        actor=current_user,
    )
    return {"success": True, "message": "Ingredient updated successfully", "data": ingredient}


@router.delete("/recipe/{recipe_id}")
async def delete_recipe_ingredients(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    deleted = await service.delete_recipe_ingredients(repos, recipe_id, actor=current_user)
    return {"success": True, "message": "All ingredients deleted successfully", "data": {"deleted": deleted}}


@router.delete("/{ingredient_id}")
async def delete_ingredient(
    ingredient_id: str,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    await service.delete_ingredient(repos, ingredient_id, actor=current_user)
    return {"success": True, "message": "Ingredient deleted successfully"}
