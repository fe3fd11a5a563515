"""
Users business logic.

Builds the response envelope `{success, data, message?, count?}`; failures are
raised as `core.errors` exceptions and rendered by the app's error handlers.
"""

from __future__ import annotations

from typing import Any

from core import errors

from . import repository, schemas

NOT_FOUND_MESSAGE = "User not found"


def _to_user(row: dict) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "name": row["name"],
        "email": row["email"],
        "created_at": row["created_at"],
    }


def _as_text(value: Any) -> str:
    # Postgres receives booleans in their JSON spelling, not Python's.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _require_fields(payload: schemas.UserPayload | None) -> tuple[str, str]:
    name = payload.name if payload is not None else None
    email = payload.email if payload is not None else None
    if not name or not email:
        raise errors.ValidationError("Name and email are required")
    return _as_text(name), _as_text(email)


async def list_users() -> dict:
    rows = await repository.list_users()
    users = [_to_user(row) for row in rows]
    return {"success": True, "data": users, "count": len(users)}


async def get_user(user_id: str) -> dict:
    row = await repository.get_user(user_id)
    if row is None:
        raise errors.NotFoundError(NOT_FOUND_MESSAGE)
    return {"success": True, "data": _to_user(row)}


async def create_user(payload: schemas.UserPayload | None) -> dict:
    name, email = _require_fields(payload)
    row = await repository.create_user(name=name, email=email)
    if row is None:
        raise errors.InternalError("Failed to create user.")
    return {
        "success": True,
        "message": "User created successfully",
        "data": _to_user(row),
    }


async def update_user(user_id: str, payload: schemas.UserPayload | None) -> dict:
    name, email = _require_fields(payload)
    row = await repository.update_user(user_id, name=name, email=email)
    if row is None:
        raise errors.NotFoundError(NOT_FOUND_MESSAGE)
    return {
        "success": True,
        "message": "User updated successfully",
        "data": _to_user(row),
    }


async def delete_user(user_id: str) -> dict:
    row = await repository.delete_user(user_id)
    if row is None:
        raise errors.NotFoundError(NOT_FOUND_MESSAGE)
    return {
        "success": True,
        "message": "User deleted successfully",
        "data": _to_user(row),
    }
