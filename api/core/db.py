"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the single long-lived connection. FastAPI starts the
connection loop on startup and closes it on shutdown (see `api/main.py`).

Connection lifecycle:
- not ready at process start
- ready once connect + schema bootstrap succeed
- any failure during that sequence clears ready and retries after a fixed delay

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Any, Awaitable, Callable

import asyncpg

from . import config, errors

RETRY_DELAY_SECONDS = 5.0

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(100),
    email VARCHAR(100),
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

logger = logging.getLogger(__name__)

Connector = Callable[..., Awaitable[Any]]


class ConnectionManager:
    """
    One connection, one writer of the ready flag.

    Queries are serialized with a lock: an asyncpg connection cannot run two
    statements at once, and there is no pool to hand out a second one.
    """

    def __init__(
        self,
        settings: config.DatabaseSettings | None = None,
        *,
        connect: Connector | None = None,
        retry_delay: float = RETRY_DELAY_SECONDS,
    ) -> None:
        self._settings = settings
        self._connect = connect or asyncpg.connect
        self._retry_delay = retry_delay
        self._conn: Any = None
        self._lock = asyncio.Lock()
        self._ready = asyncio.Event()
        self._task: asyncio.Task | None = None
        self.attempts = 0

    def is_ready(self) -> bool:
        return self._ready.is_set()

    async def wait_ready(self) -> None:
        await self._ready.wait()

    async def initialize(self) -> bool:
        """
        Run one connect + bootstrap attempt. Returns True on success.
        """
        settings = self._settings or config.database_settings()
        self.attempts += 1
        try:
            self._conn = await self._connect(**settings.connect_kwargs())
            logger.info(
                "database_connected host=%s port=%s database=%s",
                settings.host,
                settings.port,
                settings.database,
            )
            self._ready.set()

            await self.execute(SCHEMA_SQL)
            logger.info("users_table_ready")
            return True
        except Exception as e:
            logger.error("database_init_failed attempt=%s error=%s", self.attempts, e)
            self._ready.clear()
            await self._discard_connection()
            return False

    async def run_until_connected(self) -> None:
        while not await self.initialize():
            logger.info("database_retry_scheduled delay_s=%s", self._retry_delay)
            await asyncio.sleep(self._retry_delay)

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run_until_connected())
        return self._task

    async def close(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
        self._task = None
        self._ready.clear()
        await self._discard_connection()

    async def _discard_connection(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return None
        try:
            await conn.close()
        except Exception:
            logger.warning("database_close_failed", exc_info=True)

    async def _run(self, method: str, sql: str, *args: Any) -> Any:
        async with self._lock:
            if self._conn is None:
                raise errors.InternalError("Database connection is not established.")
            try:
                return await getattr(self._conn, method)(sql, *args)
            except Exception as e:
                raise errors.InternalError(str(e)) from e

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._run("fetchrow", sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._run("fetch", sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        await self._run("execute", sql, *args)


def _record_to_dict(record: Any) -> dict[str, Any]:
    return dict(record)


_manager = ConnectionManager()


def manager() -> ConnectionManager:
    return _manager


def set_manager(new_manager: ConnectionManager) -> ConnectionManager:
    """
    Swap the process-wide manager (tests, alternative drivers). Returns the old one.
    """
    global _manager
    previous, _manager = _manager, new_manager
    return previous


def start() -> asyncio.Task:
    return _manager.start()


async def close() -> None:
    await _manager.close()


def is_ready() -> bool:
    return _manager.is_ready()


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    return await _manager.fetch_one(sql, *args)


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    return await _manager.fetch_all(sql, *args)


async def execute(sql: str, *args: Any) -> None:
    await _manager.execute(sql, *args)
