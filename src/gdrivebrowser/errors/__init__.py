"""Public error exports for gdrivebrowser."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    BrowserError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    RateLimitError,
    RemoteError,
    SessionError,
    ValidationError,
    map_http_error,
)

__all__ = [
    "BrowserError",
    "ValidationError",
    "InvalidStateError",
    "SessionError",
    "RemoteError",
    "AuthError",
    "PermissionDeniedError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
