"""
Users persistence helpers.

Path ids are bound as text and cast by Postgres, so whatever the client sent
reaches the database as a parameter and never as SQL text.
"""

from __future__ import annotations

from core import db


async def list_users() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, email, created_at
        FROM users
        ORDER BY created_at DESC
        """
    )


async def get_user(user_id: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, email, created_at
        FROM users
        WHERE id = $1::text::integer
        """,
        user_id,
    )


async def create_user(*, name: str, email: str) -> dict | None:
    return await db.fetch_one(
        """
        INSERT INTO users (name, email)
        VALUES ($1, $2)
        RETURNING id, name, email, created_at
        """,
        name,
        email,
    )


async def update_user(user_id: str, *, name: str, email: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE users
        SET name = $1, email = $2
        WHERE id = $3::text::integer
        RETURNING id, name, email, created_at
        """,
        name,
        email,
        user_id,
    )


async def delete_user(user_id: str) -> dict | None:
    return await db.fetch_one(
        """
        DELETE FROM users
        WHERE id = $1::text::integer
        RETURNING id, name, email, created_at
        """,
        user_id,
    )
