"""
Readiness gate for data-touching routes.
"""

from __future__ import annotations

from core import db, errors

NOT_READY_MESSAGE = "Database not connected yet. Please try again in a moment."


async def require_database() -> None:
    if not db.is_ready():
        raise errors.NotReadyError(NOT_READY_MESSAGE)
