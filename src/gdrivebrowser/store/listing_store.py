"""Active and trash listings, re-fetched wholesale from the remote."""

from __future__ import annotations

import asyncio
import itertools
import logging
from enum import Enum
from typing import Any, Optional

from gdrivebrowser.errors import RemoteError
from gdrivebrowser.models import ListingSnapshot, TrashSnapshot
from gdrivebrowser.navigation import Location
from gdrivebrowser.notify import Notifier
from gdrivebrowser.remote.protocol import RemoteClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class ListingState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY_ON_ERROR = "empty_on_error"


class ListingStore:
    """
    Holds the active listing of the current location and the trash listing.

    Policy:
        - refresh() and refresh_trash() never raise. A failure of either leg
          resets BOTH collections of that view to empty, sets EMPTY_ON_ERROR
          and notifies the user.
        - Each refresh takes a token from a monotonically increasing counter.
          A completion whose token is no longer the latest for that view is
          discarded without touching state.
        - The trash is only fetched on refresh_trash(); location changes do
          not touch it.
    """

    def __init__(
        self,
        remote: RemoteClient,
        notifier: Notifier,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._remote = remote
        self._notifier = notifier
        self._page_size = page_size

        self._tokens = itertools.count(1)
        self._listing_token = 0
        self._trash_token = 0

        self._listing = ListingSnapshot()
        self._trash = TrashSnapshot()
        self.state = ListingState.IDLE
        self.trash_state = ListingState.IDLE
        self.last_error: Optional[str] = None
        self.last_trash_error: Optional[str] = None
        self.location: Optional[Location] = None

    @property
    def listing(self) -> ListingSnapshot:
        return self._listing

    @property
    def trash(self) -> TrashSnapshot:
        return self._trash

    @property
    def folders(self):
        return self._listing.folders

    @property
    def files(self):
        return self._listing.files

    @property
    def page_size(self) -> int:
        return self._page_size

    async def refresh(self, location: Location) -> ListingSnapshot:
        """Fetch folders and files of `location` together (first page of files)."""
        token = next(self._tokens)
        self._listing_token = token
        self.state = ListingState.LOADING
        folder_id = location.current_folder_id

        folders, files = await asyncio.gather(
            self._remote.list_folders(folder_id),
            self._remote.list_files(folder_id, self._page_size, 0),
            return_exceptions=True,
        )

        if token != self._listing_token:
            logger.debug(
                "[refresh] discarded stale listing; token:%d latest:%d folder_id:%s",
                token,
                self._listing_token,
                folder_id,
            )
            return self._listing

        failure = _first_failure(folders, files)
        if failure is not None:
            message = _describe(failure, "Failed to load folder contents", "refresh")
            logger.warning("[refresh] listing failed; folder_id:%s error:%s", folder_id, message)
            self._listing = ListingSnapshot()
            self.state = ListingState.EMPTY_ON_ERROR
            self.last_error = message
            self.location = location
            self._notifier.error(message)
            return self._listing

        self._listing = ListingSnapshot.of(folders, files)
        self.state = ListingState.POPULATED
        self.last_error = None
        self.location = location
        logger.debug(
            "[refresh] listing loaded; folder_id:%s folders:%d files:%d",
            folder_id,
            len(self._listing.folders),
            len(self._listing.files),
        )
        return self._listing

    async def refresh_trash(self) -> TrashSnapshot:
        """Fetch trashed folders and files together."""
        token = next(self._tokens)
        self._trash_token = token
        self.trash_state = ListingState.LOADING

        folders, files = await asyncio.gather(
            self._remote.list_trash_folders(),
            self._remote.list_trash_files(),
            return_exceptions=True,
        )

        if token != self._trash_token:
            logger.debug(
                "[refresh_trash] discarded stale trash; token:%d latest:%d",
                token,
                self._trash_token,
            )
            return self._trash

        failure = _first_failure(folders, files)
        if failure is not None:
            message = _describe(failure, "Failed to load trash", "refresh_trash")
            logger.warning("[refresh_trash] trash failed; error:%s", message)
            self._trash = TrashSnapshot()
            self.trash_state = ListingState.EMPTY_ON_ERROR
            self.last_trash_error = message
            self._notifier.error(message)
            return self._trash

        self._trash = TrashSnapshot.of(folders, files)
        self.trash_state = ListingState.POPULATED
        self.last_trash_error = None
        return self._trash

    def in_trash(self, item_id: str) -> bool:
        return item_id in self._trash.folder_ids() or item_id in self._trash.file_ids()


def _first_failure(*legs: Any) -> Optional[BaseException]:
    for leg in legs:
        if isinstance(leg, BaseException):
            return leg
    return None


def _describe(exc: BaseException, fallback: str, operation: str) -> str:
    if isinstance(exc, RemoteError) and exc.backend_message:
        return exc.backend_message
    if not isinstance(exc, RemoteError):
        logger.error("[%s] unexpected listing failure", operation, exc_info=exc)
    return fallback
