"""
Probe and diagnostic endpoints.

`/ready` and `/live` are static: neither looks at the database.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from . import service

router = APIRouter()


@router.get("/")
def root() -> dict:
    return service.environment_info()


@router.get("/ready", response_class=PlainTextResponse)
def ready() -> str:
    return "READY"


@router.get("/live", response_class=PlainTextResponse)
def live() -> str:
    return "ALIVE"


@router.get("/checking", response_class=PlainTextResponse)
def checking() -> str:
    return service.config_sentence()


@router.get("/db-status")
async def db_status() -> JSONResponse:
    status_code, body = await service.database_status()
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
