"""
Diagnostic endpoints logic: config echo, mounted-file read, raw DB check.
"""

from __future__ import annotations

from pathlib import Path

from core import config, db, errors

FILE_NOT_FOUND = "File not found"


def read_info_file(path: str) -> str:
    """
    Content of the mounted file, or a placeholder when it cannot be read.
    """
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return FILE_NOT_FOUND


def environment_info() -> dict:
    settings = config.app_settings()
    info = {
        "messageFromConfigMap": settings.message,
        "secretPassword": settings.secret,
        "podName": settings.pod_name,
        "pvFileContent": read_info_file(settings.info_file),
    }
    # Without HOSTNAME the pod name is left out rather than reported as null.
    if info["podName"] is None:
        del info["podName"]
    return info


def config_sentence() -> str:
    settings = config.app_settings()
    return f"configMap message is: {settings.message} And secret password is: {settings.secret}"


async def database_status() -> tuple[int, dict]:
    """
    Query the connection directly, whatever the ready flag says.
    """
    try:
        row = await db.fetch_one("SELECT NOW() AS current_time, version() AS db_version")
    except errors.InternalError as e:
        return 500, {
            "success": False,
            "error": "Database connection failed",
            "details": e.message,
        }
    return 200, {
        "success": True,
        "message": "Database is connected",
        "data": row,
    }
