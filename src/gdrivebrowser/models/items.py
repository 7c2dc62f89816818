"""Read-only projections of backend folders and files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(slots=True, frozen=True)
class FolderRef:
    """
    A folder node as last reported by the backend.

    Notes:
        - parent_id is None for folders directly under the root.
        - Instances are replaced wholesale on every fetch, never edited.
    """

    id: str
    name: str
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class FileRef:
    """Metadata of a stored file. The client never holds file bytes."""

    id: str
    name: str
    type: str = ""
    size: Optional[int] = None
    folder_id: Optional[str] = None


@dataclass(slots=True, frozen=True)
class BreadcrumbEntry:
    id: str
    name: str


Item = Union[FolderRef, FileRef]


def item_kind(item: Item) -> str:
    """Return "folder" or "file" for a listing item."""
    if isinstance(item, FolderRef):
        return "folder"
    if isinstance(item, FileRef):
        return "file"
    raise TypeError(f"Unsupported item type: {type(item).__name__}")
