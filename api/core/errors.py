"""
Error taxonomy and the JSON error envelope.

Every failure a client can see is rendered as `{"success": false, "error": ...}`
with the status code carried by the exception.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(ServiceError):
    # Carries the raw driver message; clients see it verbatim.
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotReadyError(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def envelope_error(exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


async def _service_error_handler(_: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("request_failed status=%s error=%s", exc.status_code, exc.message)
    return envelope_error(exc)


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("invalid_request errors=%s", exc.errors())
    return envelope_error(ValidationError("Invalid request body"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
