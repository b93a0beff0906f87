"""
Repository errors.

Every failure leaving the repository layer is an AppError with a stable
code. Raw database messages never reach API clients.
"""

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    VALIDATION = "VALIDATION"
    AUTH = "AUTH"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


HTTP_STATUS_BY_CODE = {
    ErrorCode.VALIDATION: 400,
    ErrorCode.AUTH: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.INTERNAL: 500,
}


class AppError(Exception):
    """Error with a code the API layer can render."""

    def __init__(self, code: ErrorCode, message: str, details: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_CODE.get(self.code, 500)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return error

    def __repr__(self) -> str:
        return f"AppError({self.code.value}, {self.message!r})"


# PostgREST: "The result contains 0 rows"
NO_ROWS_CODE = "PGRST116"


def validation_error(message: str, details: Any = None) -> AppError:
    return AppError(ErrorCode.VALIDATION, message, details)


def auth_error(message: str = "Authentication required") -> AppError:
    return AppError(ErrorCode.AUTH, message)


def not_found_error(message: str = "Resource not found") -> AppError:
    return AppError(ErrorCode.NOT_FOUND, message)


def map_supabase_error(error: Any) -> AppError:
    """
    Map a Supabase/PostgREST error to an AppError.

    Accepts postgrest APIError instances, plain exceptions, or dicts with
    code/message/status keys (as returned in some client responses).
    """
    if isinstance(error, AppError):
        return error

    if error is None:
        return AppError(ErrorCode.INTERNAL, "An unexpected error occurred")

    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message") or ""
        details = error.get("details")
        status = error.get("status") or error.get("statusCode")
    else:
        code = getattr(error, "code", None)
        message = getattr(error, "message", None) or str(error)
        details = getattr(error, "details", None)
        status = getattr(error, "status", None) or getattr(error, "status_code", None)

    code = str(code) if code is not None else None
    message = str(message)

    if status == 404 or code == NO_ROWS_CODE:
        return not_found_error()

    if code == "23505":
        return AppError(ErrorCode.CONFLICT, "This resource already exists")

    if code == "42501" or "permission" in message or "RLS" in message:
        return AppError(
            ErrorCode.FORBIDDEN,
            "You do not have permission to perform this action",
        )

    if code == "PGRST301" or "new row violates row-level security policy" in message:
        return AppError(ErrorCode.FORBIDDEN, "Access denied by security policy")

    if code == "PGRST205" or "Could not find the table" in message:
        return AppError(
            ErrorCode.INTERNAL,
            "Database table not found. Please ensure migrations are applied.",
        )

    if code:
        logger.warning(f"Unmapped Supabase error code {code}: {message} ({details})")
    else:
        logger.error(f"Unexpected database error: {error!r}")

    return AppError(
        ErrorCode.INTERNAL,
        "An error occurred while processing your request",
    )
