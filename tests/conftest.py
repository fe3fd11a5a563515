from __future__ import annotations

import asyncio
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

API_ROOT = Path(__file__).resolve().parents[1] / "api"
if str(API_ROOT) not in sys.path:
    sys.path.insert(0, str(API_ROOT))

from core import db
from main import app


BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def _normalize(sql: str) -> str:
    return " ".join(sql.split())


def _cast_id(value):
    try:
        return int(str(value))
    except ValueError:
        raise RuntimeError(f'invalid input syntax for type integer: "{value}"') from None


class FakeConnection:
    """In-memory stand-in for an asyncpg connection holding the users table."""

    def __init__(self, *, fail_bootstrap: bool = False) -> None:
        self.fail_bootstrap = fail_bootstrap
        self.broken = False
        self.closed = False
        self.table_created = False
        self.rows: list[dict] = []
        self.statements: list[str] = []
        self._next_id = 1
        self._busy = False

    async def _query(self, sql: str, args: tuple) -> list[dict]:
        if self._busy:
            raise RuntimeError("another operation is in progress")
        self._busy = True
        try:
            # Give other tasks a chance to interleave.
            await asyncio.sleep(0)
            return self._dispatch(_normalize(sql), args)
        finally:
            self._busy = False

    def _dispatch(self, sql: str, args: tuple) -> list[dict]:
        self.statements.append(sql)
        if self.broken:
            raise ConnectionError("connection was closed in the middle of operation")

        if sql.startswith("CREATE TABLE IF NOT EXISTS users"):
            if self.fail_bootstrap:
                raise RuntimeError("permission denied for schema public")
            self.table_created = True
            return []
        if sql.startswith("SELECT NOW()"):
            return [{"current_time": BASE_TIME, "db_version": "PostgreSQL 16.2"}]
        if sql == "SELECT id, name, email, created_at FROM users ORDER BY created_at DESC":
            return sorted(self.rows, key=lambda r: r["created_at"], reverse=True)
        if sql.startswith("SELECT id, name, email, created_at FROM users WHERE id"):
            user_id = _cast_id(args[0])
            return [r for r in self.rows if r["id"] == user_id]
        if sql.startswith("INSERT INTO users"):
            row = {
                "id": self._next_id,
                "name": args[0],
                "email": args[1],
                "created_at": BASE_TIME + timedelta(seconds=self._next_id),
            }
            self._next_id += 1
            self.rows.append(row)
            return [row]
        if sql.startswith("UPDATE users"):
            user_id = _cast_id(args[2])
            matched = [r for r in self.rows if r["id"] == user_id]
            for row in matched:
                row["name"], row["email"] = args[0], args[1]
            return matched
        if sql.startswith("DELETE FROM users"):
            user_id = _cast_id(args[0])
            matched = [r for r in self.rows if r["id"] == user_id]
            self.rows = [r for r in self.rows if r["id"] != user_id]
            return matched
        raise AssertionError(f"Unexpected SQL: {sql}")

    async def fetch(self, sql: str, *args):
        return [dict(r) for r in await self._query(sql, args)]

    async def fetchrow(self, sql: str, *args):
        rows = await self._query(sql, args)
        return dict(rows[0]) if rows else None

    async def execute(self, sql: str, *args) -> str:
        await self._query(sql, args)
        return "OK"

    async def close(self) -> None:
        self.closed = True


class FakeConnector:
    """Replaces asyncpg.connect; fails the first `failures` calls."""

    def __init__(self, connection: FakeConnection | None = None, *, failures: int = 0) -> None:
        self.connection = connection or FakeConnection()
        self.failures = failures
        self.calls: list[dict] = []

    async def __call__(self, **kwargs) -> FakeConnection:
        self.calls.append(kwargs)
        if self.failures > 0:
            self.failures -= 1
            raise OSError("Connect call failed ('10.0.0.5', 5432)")
        self.connection.closed = False
        return self.connection


@pytest.fixture()
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture()
def online_manager(fake_connection: FakeConnection):
    manager = db.ConnectionManager(connect=FakeConnector(fake_connection), retry_delay=0)
    previous = db.set_manager(manager)
    yield manager
    db.set_manager(previous)


@pytest.fixture()
def offline_manager():
    # Never connects; the long delay keeps the retry loop parked in sleep.
    manager = db.ConnectionManager(connect=FakeConnector(failures=10**9), retry_delay=3600)
    previous = db.set_manager(manager)
    yield manager
    db.set_manager(previous)


@pytest.fixture()
def client(online_manager: db.ConnectionManager):
    with TestClient(app) as test_client:
        test_client.portal.call(online_manager.wait_ready)
        yield test_client


@pytest.fixture()
def offline_client(offline_manager: db.ConnectionManager):
    with TestClient(app) as test_client:
        yield test_client
