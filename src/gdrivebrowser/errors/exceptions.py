"""Exception hierarchy and HTTP error mapping for gdrivebrowser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class BrowserError(Exception):
    """
    Base exception for gdrivebrowser.

    Attributes:
        details: Optional structured information (e.g., HTTP status, item id).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause


class ValidationError(BrowserError):
    """Raised when user input is rejected before any remote call is made."""


class InvalidStateError(BrowserError):
    """Raised when the browser is used in an invalid state (e.g., signed out)."""


class SessionError(BrowserError):
    """Raised when no usable signed-in session is available."""


class RemoteError(BrowserError):
    """
    Base class for failures reported by the storage backend.

    `backend_message` is the message the backend supplied, verbatim, or None
    when the failure carried no readable message.
    """

    def __init__(
        self,
        message: str,
        *,
        backend_message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause)
        self.backend_message = backend_message


class AuthError(RemoteError):
    """Raised when the bearer credential is rejected (HTTP 401)."""


class PermissionDeniedError(RemoteError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(RemoteError):
    """Raised when request arguments are rejected (HTTP 400)."""


class NotFoundError(RemoteError):
    """Raised when a folder, file or permission does not exist (HTTP 404)."""


class ConflictError(RemoteError):
    """Raised on HTTP 409/412."""


class RateLimitError(RemoteError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(RemoteError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(RemoteError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(RemoteError):
    """Raised for unclassified backend errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to RemoteError subclasses."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASONS: tuple[str, ...] = (
    "quota",
    "ratelimitexceeded",
    "userratelimitexceeded",
    "dailylimitexceeded",
    "storagequotaexceeded",
)

_STATUS_TO_ERROR: dict[int, type[RemoteError]] = {
    400: InvalidArgumentError,
    401: AuthError,
    404: NotFoundError,
    409: ConflictError,
    412: ConflictError,
    429: RateLimitError,
}


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    lowered = reason.lower()
    return any(key in lowered for key in _QUOTA_REASONS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RemoteError:
    """
    Map an HTTP error to a RemoteError subclass.

    403 splits into QuotaExceededError (quota-like reason) and
    PermissionDeniedError; anything not listed in the status table is ApiError.
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 403:
        error_cls: type[RemoteError] = (
            QuotaExceededError if _is_quota_reason(info.reason) else PermissionDeniedError
        )
    else:
        error_cls = _STATUS_TO_ERROR.get(info.status_code, ApiError)

    return error_cls(
        message,
        backend_message=info.message,
        details=details,
        cause=cause,
    )
