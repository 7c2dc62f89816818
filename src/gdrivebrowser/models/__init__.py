"""Public model exports for gdrivebrowser."""

from __future__ import annotations

from .drive_item import DriveItem
from .items import BreadcrumbEntry, FileRef, FolderRef, Item, item_kind
from .listing import ListingSnapshot, TrashSnapshot
from .results import (
    MutationResult,
    MutationStatus,
    PermissionsResult,
    PermissionsStatus,
    ShareResult,
)
from .sharing import Role, ShareGrant

__all__ = [
    "BreadcrumbEntry",
    "DriveItem",
    "FileRef",
    "FolderRef",
    "Item",
    "item_kind",
    "ListingSnapshot",
    "TrashSnapshot",
    "MutationResult",
    "MutationStatus",
    "PermissionsResult",
    "PermissionsStatus",
    "ShareResult",
    "Role",
    "ShareGrant",
]
