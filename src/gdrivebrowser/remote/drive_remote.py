"""Google Drive implementation of the RemoteClient contract."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, TypeVar

from gdrivebrowser.auth import credentials_from_token
from gdrivebrowser.controller import GoogleDriveController
from gdrivebrowser.errors import InvalidArgumentError, NotFoundError, RemoteError
from gdrivebrowser.models import DriveItem, FileRef, FolderRef, Role, ShareGrant
from gdrivebrowser.session import SessionContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROOT_ALIAS = "root"


class DriveRemote:
    """
    Asynchronous RemoteClient over GoogleDriveController.

    Notes:
        - Controller calls block, so each runs in a worker thread; the event
          loop is only suspended for the awaiting operation.
        - Folder id None means the user's My Drive root. Items whose parent
          is that root are reported with parent_id / folder_id None.
        - Soft delete is Drive's trash; restore is untrash.
    """

    def __init__(
        self,
        controller: GoogleDriveController,
        *,
        own_permission_id: Optional[str] = None,
    ) -> None:
        self._controller = controller
        self._own_permission_id = own_permission_id

    @classmethod
    def from_session(
        cls,
        session: SessionContext,
        *,
        supports_all_drives: bool = True,
        max_retries: int = 3,
    ) -> "DriveRemote":
        user = session.require_user()
        controller = GoogleDriveController(
            credentials_from_token(user.token),
            supports_all_drives=supports_all_drives,
            max_retries=max_retries,
        )
        return cls(controller, own_permission_id=user.user_id)

    # ----------------------------
    # Listings
    # ----------------------------
    async def list_folders(self, parent_id: Optional[str]) -> list[FolderRef]:
        root_id = await self._call(self._controller.root_id)
        items = await self._call(
            self._controller.list_children,
            parent_id or ROOT_ALIAS,
            folders=True,
        )
        return [_to_folder_ref(item, root_id) for item in items]

    async def list_files(
        self, folder_id: Optional[str], limit: int, offset: int
    ) -> list[FileRef]:
        root_id = await self._call(self._controller.root_id)
        items = await self._call(
            self._controller.list_children,
            folder_id or ROOT_ALIAS,
            folders=False,
            limit=limit,
            offset=offset,
        )
        return [_to_file_ref(item, root_id) for item in items]

    async def list_trash_folders(self) -> list[FolderRef]:
        root_id = await self._call(self._controller.root_id)
        items = await self._call(self._controller.list_trashed, folders=True)
        return [_to_folder_ref(item, root_id) for item in items]

    async def list_trash_files(self) -> list[FileRef]:
        root_id = await self._call(self._controller.root_id)
        items = await self._call(self._controller.list_trashed, folders=False)
        return [_to_file_ref(item, root_id) for item in items]

    # ----------------------------
    # Mutations
    # ----------------------------
    async def create_folder(self, name: str, parent_id: Optional[str]) -> None:
        item = await self._call(self._controller.create_folder, name, parent_id or ROOT_ALIAS)
        logger.info("[create_folder] created; folder_id:%s", item.id)

    async def rename_folder(self, folder_id: str, name: str) -> None:
        await self._call(self._controller.rename, folder_id, name)

    async def rename_file(self, file_id: str, name: str) -> None:
        await self._call(self._controller.rename, file_id, name)

    async def soft_delete_folder(self, folder_id: str) -> None:
        await self._call(self._controller.set_trashed, folder_id, True)

    async def soft_delete_file(self, file_id: str) -> None:
        await self._call(self._controller.set_trashed, file_id, True)

    async def restore_folder(self, folder_id: str) -> None:
        await self._call(self._controller.set_trashed, folder_id, False)

    async def restore_file(self, file_id: str) -> None:
        await self._call(self._controller.set_trashed, file_id, False)

    async def permanently_delete_folder(self, folder_id: str) -> None:
        await self._call(self._controller.delete_permanently, folder_id)

    async def permanently_delete_file(self, file_id: str) -> None:
        await self._call(self._controller.delete_permanently, file_id)

    async def upload_file(
        self,
        name: str,
        content: bytes,
        mime_type: Optional[str],
        folder_id: Optional[str] = None,
    ) -> None:
        item = await self._call(
            self._controller.upload_bytes,
            name,
            content,
            mime_type=mime_type,
            parent_id=folder_id,
        )
        logger.info("[upload_file] uploaded; file_id:%s bytes:%d", item.id, len(content))

    # ----------------------------
    # Access and sharing
    # ----------------------------
    async def get_file_access_url(self, file_id: str) -> str:
        item = await self._call(self._controller.get, file_id)
        if item.is_folder:
            raise InvalidArgumentError(
                "Folders cannot be opened as files",
                backend_message="Folders cannot be opened as files",
                details={"file_id": file_id},
            )
        url = item.web_content_link or item.web_view_link
        if not url:
            raise NotFoundError(
                "File has no access URL",
                details={"file_id": file_id},
            )
        return url

    async def share_file(
        self, file_id: str, shared_with: Optional[str], role: Role
    ) -> Optional[str]:
        await self._call(
            self._controller.create_permission,
            file_id,
            drive_role=role.drive_role,
            email=shared_with,
        )
        if shared_with is not None:
            return None
        # grant already exists; report the share without a link
        try:
            item = await self._call(self._controller.get, file_id)
        except RemoteError as exc:
            logger.warning(
                "[share_file] link lookup failed after share; file_id:%s error:%s",
                file_id,
                exc.message,
            )
            return None
        return item.web_view_link

    async def get_share_permissions(self, file_id: str) -> list[ShareGrant]:
        permissions = await self._call(self._controller.list_permissions, file_id)
        return [
            _to_share_grant(file_id, p)
            for p in permissions
            if p.get("id") != self._own_permission_id
        ]

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(func, *args, **kwargs)


def _visible_parent(item: DriveItem, root_id: str) -> Optional[str]:
    parent = item.parent_id
    if parent is None or parent == root_id:
        return None
    return parent


def _to_folder_ref(item: DriveItem, root_id: str) -> FolderRef:
    return FolderRef(
        id=item.id,
        name=item.name,
        parent_id=_visible_parent(item, root_id),
        created_at=item.created_time,
    )


def _to_file_ref(item: DriveItem, root_id: str) -> FileRef:
    return FileRef(
        id=item.id,
        name=item.name,
        type=item.mime_type,
        size=item.size,
        folder_id=_visible_parent(item, root_id),
    )


def _to_share_grant(file_id: str, permission: dict[str, Any]) -> ShareGrant:
    kind = permission.get("type")
    if kind == "anyone":
        shared_with = None
    elif kind == "domain":
        shared_with = permission.get("domain")
    else:
        shared_with = permission.get("emailAddress")

    return ShareGrant(
        file_id=file_id,
        shared_with=shared_with if isinstance(shared_with, str) else None,
        role=Role.from_drive_role(str(permission.get("role", ""))),
        permission_id=permission.get("id"),
    )
