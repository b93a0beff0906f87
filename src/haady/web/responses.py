"""
API response envelope.

Every route returns either {"ok": true, "data": ...} or
{"ok": false, "error": {"code", "message", "details"?}}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from haady.db.errors import AppError, ErrorCode, HTTP_STATUS_BY_CODE

logger = logging.getLogger(__name__)

_CODE_BY_HTTP_STATUS = {status: code for code, status in HTTP_STATUS_BY_CODE.items()}


def success_response(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"ok": True, "data": jsonable_encoder(data)},
    )


def error_response(error: AppError, status_code: int | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code or error.http_status,
        content={"ok": False, "error": jsonable_encoder(error.to_dict())},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.code == ErrorCode.INTERNAL:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    summary = ", ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in errors
    )
    return error_response(
        AppError(ErrorCode.VALIDATION, f"Validation failed: {summary}", details=errors)
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _CODE_BY_HTTP_STATUS.get(exc.status_code, ErrorCode.VALIDATION)
    if exc.status_code >= 500:
        code = ErrorCode.INTERNAL
    return error_response(AppError(code, str(exc.detail)), status_code=exc.status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Render every error through the envelope."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
