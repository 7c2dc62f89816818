"""gdrivebrowser public API."""

from __future__ import annotations

from gdrivebrowser.auth import OAuthClient
from gdrivebrowser.browser import DriveBrowser
from gdrivebrowser.config import BrowserConfig, load_config
from gdrivebrowser.coordinator import FileUpload, MutationCoordinator
from gdrivebrowser.errors import (
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
from gdrivebrowser.models import (
    BreadcrumbEntry,
    FileRef,
    FolderRef,
    ListingSnapshot,
    MutationResult,
    PermissionsResult,
    Role,
    ShareGrant,
    ShareResult,
    TrashSnapshot,
)
from gdrivebrowser.navigation import Location, LocationModel
from gdrivebrowser.notify import LoggingNotifier, Notifier
from gdrivebrowser.remote import DriveRemote, RemoteClient
from gdrivebrowser.search import filter_listing
from gdrivebrowser.session import SessionContext, UserSession
from gdrivebrowser.sharing import SharingService
from gdrivebrowser.store import ListingState, ListingStore

__all__ = [
    # High-level
    "DriveBrowser",
    "BrowserConfig",
    "load_config",
    "SessionContext",
    "UserSession",
    "OAuthClient",
    # Core
    "LocationModel",
    "Location",
    "ListingStore",
    "ListingState",
    "MutationCoordinator",
    "FileUpload",
    "SharingService",
    "filter_listing",
    # Remote
    "RemoteClient",
    "DriveRemote",
    "Notifier",
    "LoggingNotifier",
    # Models
    "BreadcrumbEntry",
    "FolderRef",
    "FileRef",
    "ListingSnapshot",
    "TrashSnapshot",
    "ShareGrant",
    "Role",
    "MutationResult",
    "ShareResult",
    "PermissionsResult",
    # Errors
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
