"""DriveBrowser: the browsing view's model, wiring location, listings and actions."""

from __future__ import annotations

import logging
import webbrowser
from typing import Callable, Optional

from gdrivebrowser.config import BrowserConfig
from gdrivebrowser.coordinator import FileUpload, MutationCoordinator
from gdrivebrowser.errors import RemoteError
from gdrivebrowser.models import (
    BreadcrumbEntry,
    FileRef,
    FolderRef,
    Item,
    ListingSnapshot,
    MutationResult,
    PermissionsResult,
    Role,
    ShareResult,
    TrashSnapshot,
)
from gdrivebrowser.navigation import Location, LocationModel
from gdrivebrowser.notify import Confirm, LoggingNotifier, Notifier
from gdrivebrowser.remote import DriveRemote, RemoteClient
from gdrivebrowser.search import filter_listing
from gdrivebrowser.session import SessionContext
from gdrivebrowser.sharing import SharingService
from gdrivebrowser.store import DEFAULT_PAGE_SIZE, ListingState, ListingStore

logger = logging.getLogger(__name__)

Opener = Callable[[str], object]


class DriveBrowser:
    """
    High-level browsing view: where am I, what do I see, what can I do.

    Location changes refetch the active listing. Mutations go through the
    MutationCoordinator, which refetches whatever they affect. The search
    query is a pure projection over the active listing.
    """

    def __init__(
        self,
        remote: RemoteClient,
        session: SessionContext,
        *,
        notifier: Optional[Notifier] = None,
        confirm: Optional[Confirm] = None,
        opener: Optional[Opener] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        session.require_user()
        self._session = session
        self._remote = remote
        self._notifier = notifier or LoggingNotifier()
        self._opener = opener or webbrowser.open

        self._location = LocationModel()
        self._store = ListingStore(remote, self._notifier, page_size=page_size)
        self._coordinator = MutationCoordinator(
            remote,
            self._store,
            self._location,
            self._notifier,
            confirm=confirm,
        )
        self._sharing = SharingService(remote, self._notifier)
        self._query = ""

    @classmethod
    def from_config(
        cls,
        config: BrowserConfig,
        session: SessionContext,
        *,
        notifier: Optional[Notifier] = None,
        confirm: Optional[Confirm] = None,
        opener: Optional[Opener] = None,
    ) -> "DriveBrowser":
        """Build a browser over Google Drive for the signed-in session."""
        remote = DriveRemote.from_session(
            session,
            supports_all_drives=config.supports_all_drives,
            max_retries=config.max_retries,
        )
        return cls(
            remote,
            session,
            notifier=notifier,
            confirm=confirm,
            opener=opener,
            page_size=config.page_size,
        )

    # ----------------------------
    # State
    # ----------------------------
    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def location(self) -> Location:
        return self._location.location

    @property
    def breadcrumb(self) -> tuple[BreadcrumbEntry, ...]:
        return self._location.breadcrumb

    @property
    def listing(self) -> ListingSnapshot:
        return self._store.listing

    @property
    def trash(self) -> TrashSnapshot:
        return self._store.trash

    @property
    def state(self) -> ListingState:
        return self._store.state

    @property
    def trash_state(self) -> ListingState:
        return self._store.trash_state

    @property
    def uploading(self) -> bool:
        return self._coordinator.uploading

    @property
    def query(self) -> str:
        return self._query

    @property
    def visible(self) -> ListingSnapshot:
        """Active listing filtered by the current search query."""
        return filter_listing(self._query, self._store.listing)

    # ----------------------------
    # Navigation
    # ----------------------------
    async def refresh(self) -> ListingSnapshot:
        return await self._store.refresh(self._location.location)

    async def open_folder(self, folder: FolderRef) -> ListingSnapshot:
        self._location.navigate_into(folder)
        return await self.refresh()

    async def go_root(self) -> ListingSnapshot:
        self._location.navigate_to_root()
        return await self.refresh()

    async def go_to_breadcrumb(self, folder_id: str) -> ListingSnapshot:
        """Jump to an ancestor; unknown ids are ignored and nothing is fetched."""
        if not self._location.navigate_to_breadcrumb(folder_id):
            return self._store.listing
        return await self.refresh()

    async def open_trash(self) -> TrashSnapshot:
        return await self._store.refresh_trash()

    def search(self, query: str) -> ListingSnapshot:
        self._query = query or ""
        return self.visible

    # ----------------------------
    # Mutations
    # ----------------------------
    async def create_folder(self, name: str) -> MutationResult:
        return await self._coordinator.create_folder(name)

    async def rename(self, item: Item, new_name: str) -> MutationResult:
        return await self._coordinator.rename(item, new_name)

    async def delete(self, item: Item) -> MutationResult:
        return await self._coordinator.soft_delete(item)

    async def restore(self, item: Item) -> MutationResult:
        return await self._coordinator.restore(item)

    async def delete_forever(self, item: Item) -> MutationResult:
        return await self._coordinator.permanently_delete(item)

    async def upload(self, upload: Optional[FileUpload]) -> MutationResult:
        return await self._coordinator.upload(upload)

    # ----------------------------
    # Files and sharing
    # ----------------------------
    async def open_file(self, file: FileRef) -> Optional[str]:
        """Resolve a short-lived access URL and hand it to the host opener."""
        try:
            url = await self._remote.get_file_access_url(file.id)
        except RemoteError as exc:
            message = exc.backend_message or "Failed to open file"
            logger.warning("[open_file] access url failed; file_id:%s", file.id)
            self._notifier.error(message)
            return None
        self._opener(url)
        return url

    async def share(
        self,
        file: FileRef | str,
        shared_with: Optional[str],
        role: Role | str = Role.VIEWER,
    ) -> ShareResult:
        file_id = file.id if isinstance(file, FileRef) else file
        return await self._sharing.share_file(file_id, shared_with, role)

    async def permissions(self, file: FileRef | str) -> PermissionsResult:
        file_id = file.id if isinstance(file, FileRef) else file
        return await self._sharing.fetch_permissions(file_id)

    def logout(self) -> None:
        self._session.logout()
