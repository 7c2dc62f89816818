"""Current location and breadcrumb trail (no remote I/O)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from gdrivebrowser.errors import InvalidStateError, ValidationError
from gdrivebrowser.models import BreadcrumbEntry, FolderRef

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Location:
    """Where the browser is. current_folder_id None means the root."""

    current_folder_id: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.current_folder_id is None


ROOT = Location()


class LocationModel:
    """
    Owns the current folder and the breadcrumb leading to it.

    Invariant:
        The breadcrumb is empty iff the location is the root; otherwise its
        last entry id equals the current folder id. Every transition re-checks
        this and raises InvalidStateError if it ever breaks.
    """

    def __init__(self) -> None:
        self._current: Optional[str] = None
        self._trail: list[BreadcrumbEntry] = []

    @property
    def location(self) -> Location:
        if self._current is None:
            return ROOT
        return Location(self._current)

    @property
    def current_folder_id(self) -> Optional[str]:
        return self._current

    @property
    def breadcrumb(self) -> tuple[BreadcrumbEntry, ...]:
        return tuple(self._trail)

    def navigate_into(self, folder: FolderRef) -> Location:
        """Descend into a child folder of the current location."""
        if not isinstance(folder.id, str) or not folder.id:
            raise ValidationError("Folder id must be a non-empty string", details={"folder": folder})
        self._current = folder.id
        self._trail.append(BreadcrumbEntry(id=folder.id, name=folder.name))
        self._check()
        logger.debug("[navigate_into] folder_id:%s depth:%d", folder.id, len(self._trail))
        return self.location

    def navigate_to_root(self) -> Location:
        self._current = None
        self._trail.clear()
        self._check()
        return self.location

    def navigate_to_breadcrumb(self, folder_id: str) -> bool:
        """
        Jump to an ancestor already on the breadcrumb.

        Returns:
            True if the location changed, False when folder_id is not on the
            breadcrumb (location and breadcrumb are left untouched).
        """
        for index, entry in enumerate(self._trail):
            if entry.id == folder_id:
                del self._trail[index + 1 :]
                self._current = entry.id
                self._check()
                return True

        logger.debug("[navigate_to_breadcrumb] ignored unknown id; folder_id:%s", folder_id)
        return False

    def _check(self) -> None:
        if not self._trail:
            ok = self._current is None
        else:
            ok = self._trail[-1].id == self._current
        if not ok:
            raise InvalidStateError(
                "Breadcrumb does not end at the current folder",
                details={
                    "current_folder_id": self._current,
                    "breadcrumb": [e.id for e in self._trail],
                },
            )
