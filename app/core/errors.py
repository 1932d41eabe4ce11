"""Stable error codes and the HTTP error shape shared by all routes."""

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in every error body."""

    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    GROUP_ALREADY_EXISTS = "GROUP_ALREADY_EXISTS"
    USER_ALREADY_IN_GROUP = "USER_ALREADY_IN_GROUP"
    USER_NOT_IN_GROUP = "USER_NOT_IN_GROUP"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def error_detail(code: ErrorCode, message: str) -> dict[str, Any]:
    """Body placed under "detail" for every error response."""
    return {"code": code.value, "message": message}


def api_error(
    status_code: int,
    code: ErrorCode,
    message: str,
    headers: dict[str, str] | None = None,
) -> HTTPException:
    """Build an HTTPException carrying a stable error code."""
    return HTTPException(
        status_code=status_code,
        detail=error_detail(code, message),
        headers=headers,
    )


def not_found(code: ErrorCode, message: str) -> HTTPException:
    return api_error(status.HTTP_404_NOT_FOUND, code, message)


def conflict(code: ErrorCode, message: str) -> HTTPException:
    """Duplicates are reported as 400, matching the public contract."""
    return api_error(status.HTTP_400_BAD_REQUEST, code, message)


def unauthenticated(code: ErrorCode, message: str) -> HTTPException:
    return api_error(
        status.HTTP_401_UNAUTHORIZED,
        code,
        message,
        headers={"WWW-Authenticate": "Bearer"},
    )
