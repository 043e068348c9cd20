"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from cookboxd.core.deps import get_repositories
from cookboxd.core.ports import Repositories

from . import dependencies, schemas, service

router = APIRouter(prefix="/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: schemas.RegisterRequest,
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = await service.register(repos, request.model_dump(exclude_none=True))
    return {"success": True, "message": "User registered successfully", "data": user}


@router.post("/login")
async def login(
    request: schemas.LoginRequest,
    repos: Repositories = Depends(get_repositories),
) -> dict:
    data = await service.login(repos, request.model_dump(exclude_none=True))
    return {"success": True, "message": "Login successful", "data": data}


@router.get("/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> dict:
    return {"success": True, "data": current_user}
