from __future__ import annotations

"""
JSON exception handlers.

FastAPI integrates these via `app.main.create_app` (`install_exception_handlers`).
Every error is rendered as `{"message": str}` (plus optional `details`) with the
matching status code; nothing escapes as an unhandled fault.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException
from app.middleware.request_id import get_request_id

logger = logging.getLogger("app.errors")

ENDPOINT_NOT_FOUND = "Endpoint not found"


def _message(message: str, status_code: int, *, details=None, headers=None) -> JSONResponse:
    content = {"message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:  # type: ignore
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    if isinstance(exc, AppException):
        return await app_exception_handler(request, exc)
    # Unmatched paths and unsupported verbs both surface as an unknown endpoint.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _message(ENDPOINT_NOT_FOUND, status.HTTP_404_NOT_FOUND)
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _message(detail, exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    logger.info("Rejected malformed request to %s %s", request.method, request.url.path)
    return _message(
        "Invalid request",
        status.HTTP_400_BAD_REQUEST,
        details=jsonable_encoder(exc.errors()),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore
    logger.exception(
        "Unhandled error on %s %s (request_id=%s)", request.method, request.url.path, get_request_id(request)
    )
    return _message("An unexpected error occurred.", status.HTTP_500_INTERNAL_SERVER_ERROR)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)  # type: ignore[arg-type]


__all__ = [
    "ENDPOINT_NOT_FOUND",
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "global_exception_handler",
    "install_exception_handlers",
]
