"""
Environment-derived settings.

Everything is read from the process environment at call time, so values
injected by the orchestrator (ConfigMap, Secret, downward API) are picked up
without restarting the process. Blank values count as unset.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

DEFAULT_PORT = 3030
DEFAULT_INFO_FILE = "/data/info.txt"


def _env(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_raw(name: str, default: str) -> str:
    # Echoed verbatim; whitespace in a ConfigMap or Secret is part of the value.
    return os.environ.get(name) or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class DatabaseSettings:
    user: str
    password: str
    host: str
    port: int
    database: str

    def connect_kwargs(self) -> dict[str, Any]:
        return {
            "user": self.user,
            "password": self.password,
            "host": self.host,
            "port": self.port,
            "database": self.database,
        }


@dataclass(frozen=True)
class AppSettings:
    message: str
    secret: str
    pod_name: str | None
    info_file: str


def database_settings() -> DatabaseSettings:
    return DatabaseSettings(
        user=_env("DB_USER", "postgres"),
        password=_env("DB_PASSWORD", "postgres"),
        host=_env("DB_HOST", "test-statefulset-service"),
        port=_env_int("DB_PORT", 5432),
        database=_env("DB_NAME", "testdb"),
    )


def app_settings() -> AppSettings:
    return AppSettings(
        message=_env_raw("APP_MESSAGE", "No ConfigMap"),
        secret=_env_raw("APP_PASSWORD", "No Secret"),
        pod_name=os.environ.get("HOSTNAME") or None,
        info_file=_env("INFO_FILE_PATH", DEFAULT_INFO_FILE),
    )


def server_port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def log_level() -> str:
    return _env("LOG_LEVEL", "INFO").upper()
