"""Listing snapshots for the active view and the trash view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .items import FileRef, FolderRef


@dataclass(slots=True, frozen=True)
class ListingSnapshot:
    """
    Folders and files for one location.

    Both collections are always tuples (empty on failure), never None.
    """

    folders: tuple[FolderRef, ...] = ()
    files: tuple[FileRef, ...] = ()

    @classmethod
    def of(cls, folders: Iterable[FolderRef], files: Iterable[FileRef]):
        return cls(folders=tuple(folders), files=tuple(files))

    @property
    def is_empty(self) -> bool:
        return not self.folders and not self.files

    def folder_ids(self) -> set[str]:
        return {f.id for f in self.folders}

    def file_ids(self) -> set[str]:
        return {f.id for f in self.files}


@dataclass(slots=True, frozen=True)
class TrashSnapshot(ListingSnapshot):
    """Same shape as ListingSnapshot, scoped to soft-deleted items."""
