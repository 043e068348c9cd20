"""
Category API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from cookboxd.auth import dependencies as auth_dependencies
from cookboxd.core.deps import get_repositories
from cookboxd.core.ports import Repositories

from . import schemas, service

router = APIRouter(prefix="/categories")


@router.get("")
async def list_categories(
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_categories(repos)}


@router.get("/name/{name}")
async def get_category_by_name(
    name: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.get_category_by_name(repos, name)}


@router.get("/{category_id}")
async def get_category(
    category_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.get_category(repos, category_id)}


@router.get("/{category_id}/count")
async def count_category_recipes(
    category_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    count = await service.count_category_recipes(repos, category_id)
    return {"success": True, "data": {"count": count}}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    request: schemas.CategoryRequest,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    category = await service.create_category(repos, request.model_dump(exclude_none=True))
    return {"success": True, "message": "Category created successfully", "data": category}


@router.put("/{category_id}")
async def update_category(
    category_id: str,
    request: schemas.CategoryRequest,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    category = await service.update_category(repos, category_id, request.model_dump(exclude_none=True))
    return {"success": True, "message": "Category updated successfully", "data": category}


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    await service.delete_category(repos, category_id)
    return {"success": True, "message": "Category deleted successfully"}
