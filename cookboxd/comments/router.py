"""
Comment API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from cookboxd.auth import dependencies as auth_dependencies
from cookboxd.core.deps import get_repositories
from cookboxd.core.ports import Repositories

from . import schemas, service

router = APIRouter(prefix="/comments")


@router.get("")
async def list_comments(
    page: str | None = Query(default=None),
    per_page: str | None = Query(default=None),
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    if page is None and per_page is None:
        return {"success": True, "data": await service.list_comments(repos)}
    return {"success": True, "data": await service.list_recent_comments(repos, page, per_page)}


@router.get("/recipe/{recipe_id}")
async def list_comments_by_recipe(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_comments_by_recipe(repos, recipe_id)}


@router.get("/recipe/{recipe_id}/count")
async def count_recipe_comments(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    count = await service.count_recipe_comments(repos, recipe_id)
    return {"success": True, "data": {"count": count}}


@router.get("/user/{user_id}")
async def list_comments_by_user(
    user_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_comments_by_user(repos, user_id)}


@router.get("/{comment_id}")
async def get_comment(
    comment_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.get_comment(repos, comment_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: schemas.CommentRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_member),
) -> dict:
    comment = await service.create_comment(repos, request.model_dump(exclude_none=True), actor=current_user)
    return {"success": True, "message": "Comment posted successfully", "data": comment}


@router.put("/{comment_id}")
async def update_comment(
    comment_id: str,
    request: schemas.CommentUpdateRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    comment = await service.update_comment(
        repos,
        comment_id,
        request.model_dump(exclude_none=True),
        actor=current_user,
    )
    return {"success": True, "message": "Comment updated successfully", "data": comment}


@router.delete("/recipe/{recipe_id}")
async def delete_recipe_comments(
    recipe_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    deleted = await service.delete_recipe_comments(repos, recipe_id)
    return {"success": True, "message": "All comments deleted successfully", "data": {"deleted": deleted}}


@router.delete("/user/{user_id}")
async def delete_user_comments(
    user_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    deleted = await service.delete_user_comments(repos, user_id)
    return {"success": True, "message": "All user comments deleted successfully", "data": {"deleted": deleted}}


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: str,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    await service.delete_comment(repos, comment_id, actor=current_user)
    return {"success": True, "message": "Comment deleted successfully"}
