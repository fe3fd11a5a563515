"""
FastAPI router for the users resource.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, status

from . import dependencies, schemas, service

router = APIRouter()


@router.get("/users", dependencies=[Depends(dependencies.require_database)])
async def list_users() -> dict:
    """
    All users, newest first.
    """
    return await service.list_users()


# No readiness gate here; a missing connection surfaces as a 500 from the query.
@router.get("/users/{user_id}")
async def get_user(user_id: str) -> dict:
    return await service.get_user(user_id)


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(dependencies.require_database)],
)
async def create_user(payload: schemas.UserPayload | None = Body(default=None)) -> dict:
    return await service.create_user(payload)


@router.put("/users/{user_id}", dependencies=[Depends(dependencies.require_database)])
async def update_user(
    user_id: str,
    payload: schemas.UserPayload | None = Body(default=None),
) -> dict:
    return await service.update_user(user_id, payload)


@router.delete("/users/{user_id}", dependencies=[Depends(dependencies.require_database)])
async def delete_user(user_id: str) -> dict:
    return await service.delete_user(user_id)
