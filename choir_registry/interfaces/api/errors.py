"""Translate application errors into the JSON error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from choir_registry.domain.errors import (
    ChoirRegistryError,
    MemberNotFoundError,
    PayloadTooLargeError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from choir_registry.interfaces.api.schemas import ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[ChoirRegistryError], int] = {
    MemberNotFoundError: status.HTTP_404_NOT_FOUND,
    UnsupportedMediaTypeError: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    PayloadTooLargeError: 413,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(HTTPException):
    """``HTTPException`` carrying a machine readable error code."""

    def __init__(self, status_code: int, message: str, code: str) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.code = code


def to_http_error(exc: ChoirRegistryError) -> ApiError:
    """Return the ``ApiError`` matching ``exc``'s place in the error hierarchy."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for cls in type(exc).__mro__:
        if cls in _STATUS_BY_ERROR:
            status_code = _STATUS_BY_ERROR[cls]
            break
    if status_code >= 500:
        logger.error("Request failed: %s", exc)
    return ApiError(status_code, str(exc), exc.code)


def _error_body(message: str, code: str) -> dict[str, object]:
    return ErrorResponse(message=message, error=code).model_dump()


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = getattr(exc, "code", "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail), code),
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "query")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=422,
        content=_error_body("; ".join(problems) or "Invalid request", "validation_error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Render every HTTP error as ``{success: false, message, error}``."""

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)


__all__ = ["ApiError", "register_error_handlers", "to_http_error"]
