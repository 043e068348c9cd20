"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from cookboxd.auth import dependencies as auth_dependencies
from cookboxd.core.deps import get_repositories
from cookboxd.core.ports import Repositories

from . import schemas, service

router = APIRouter(prefix="/users")


@router.get("")
async def list_users(
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.list_users(repos)}


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return {"success": True, "data": await service.get_user(repos, user_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: schemas.UserCreateRequest,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    user = await service.create_user(repos, request.model_dump(exclude_none=True))
    return {"success": True, "message": "User created successfully", "data": user}


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    request: schemas.UserUpdateRequest,
    repos: Repositories = Depends(get_repositories),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    user = await service.update_user(repos, user_id, request.model_dump(exclude_none=True))
    return {"success": True, "message": "User updated successfully", "data": user}


@router.post("/{user_id}/password")
async def change_password(
    user_id: str,
    request: schemas.PasswordChangeRequest,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    await service.change_password(
        repos,
        user_id,
        current_password=request.current_password,
        new_password=request.new_password,
        actor=current_user,
    )
    return {"success": True, "message": "Password changed successfully"}


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    repos: Repositories = Depends(get_repositories),
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    await service.delete_user(repos, user_id, actor=current_user)
    return {"success": True, "message": "User deleted successfully"}
