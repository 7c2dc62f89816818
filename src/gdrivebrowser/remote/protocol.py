"""Contract of the remote resource client consumed by the browser core."""

from __future__ import annotations

from typing import Optional, Protocol

from gdrivebrowser.models import FileRef, FolderRef, Role, ShareGrant


class RemoteClient(Protocol):
    """
    Asynchronous access to folders, files, trash and sharing.

    Every method raises a RemoteError subclass on failure. Credentials are
    attached by the implementation; callers never see them.
    """

    async def list_folders(self, parent_id: Optional[str]) -> list[FolderRef]: ...

    async def list_files(
        self, folder_id: Optional[str], limit: int, offset: int
    ) -> list[FileRef]: ...

    async def create_folder(self, name: str, parent_id: Optional[str]) -> None: ...

    async def rename_folder(self, folder_id: str, name: str) -> None: ...

    async def rename_file(self, file_id: str, name: str) -> None: ...

    async def soft_delete_folder(self, folder_id: str) -> None: ...

    async def soft_delete_file(self, file_id: str) -> None: ...

    async def restore_folder(self, folder_id: str) -> None: ...

    async def restore_file(self, file_id: str) -> None: ...

    async def permanently_delete_folder(self, folder_id: str) -> None: ...

    async def permanently_delete_file(self, file_id: str) -> None: ...

    async def list_trash_folders(self) -> list[FolderRef]: ...

    async def list_trash_files(self) -> list[FileRef]: ...

    async def upload_file(
        self,
        name: str,
        content: bytes,
        mime_type: Optional[str],
        folder_id: Optional[str] = None,
    ) -> None: ...

    async def get_file_access_url(self, file_id: str) -> str: ...

    async def share_file(
        self, file_id: str, shared_with: Optional[str], role: Role
    ) -> Optional[str]:
        """Create a grant. Returns the general shareable URL when the backend has one."""
        ...

    async def get_share_permissions(self, file_id: str) -> list[ShareGrant]: ...
