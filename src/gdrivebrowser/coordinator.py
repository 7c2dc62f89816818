"""MutationCoordinator: one backend call per action, then a full refetch."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from gdrivebrowser.errors import RemoteError, ValidationError
from gdrivebrowser.models import Item, MutationResult, item_kind
from gdrivebrowser.navigation import LocationModel
from gdrivebrowser.notify import Confirm, Notifier, ask_confirmation
from gdrivebrowser.remote.protocol import RemoteClient
from gdrivebrowser.store import ListingStore
from gdrivebrowser.util.mime import guess_upload_mime

logger = logging.getLogger(__name__)

REFRESH_LISTING = "listing"
REFRESH_TRASH = "trash"


@dataclass(slots=True, frozen=True)
class FileUpload:
    """A file picked by the user, ready to be sent."""

    name: str
    content: bytes
    mime_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: str) -> "FileUpload":
        with open(path, "rb") as f:
            content = f.read()
        name = os.path.basename(path)
        return cls(name=name, content=content, mime_type=guess_upload_mime(name))


class MutationCoordinator:
    """
    Executes create/rename/delete/restore/upload against the remote.

    Every action follows the same path:
        1) validate locally (names, selection, confirmation, trash membership);
           a rejected action issues no request and returns status "invalid"
           or "cancelled";
        2) exactly one backend call;
        3) success -> notify, then refetch the affected view(s);
           failure -> notify backend message (or a per-action fallback) and
           leave local state untouched.
    The returned MutationResult is the single outcome of the action.
    """

    def __init__(
        self,
        remote: RemoteClient,
        store: ListingStore,
        location: LocationModel,
        notifier: Notifier,
        *,
        confirm: Optional[Confirm] = None,
    ) -> None:
        self._remote = remote
        self._store = store
        self._location = location
        self._notifier = notifier
        self._confirm = confirm
        self._uploads_in_flight = 0

    @property
    def uploading(self) -> bool:
        """True while at least one upload call is in flight."""
        return self._uploads_in_flight > 0

    async def create_folder(self, name: str) -> MutationResult:
        action = "create_folder"
        try:
            clean = _require_name(name, "Folder name")
        except ValidationError as exc:
            return self._invalid(action, exc)

        parent_id = self._location.current_folder_id
        return await self._run(
            action,
            lambda: self._remote.create_folder(clean, parent_id),
            success="Folder created",
            fallback="Failed to create folder",
            refresh=(REFRESH_LISTING,),
        )

    async def rename(self, item: Item, new_name: str) -> MutationResult:
        kind = item_kind(item)
        action = f"rename_{kind}"
        try:
            clean = _require_name(new_name, "Name")
        except ValidationError as exc:
            return self._invalid(action, exc)

        call = self._remote.rename_folder if kind == "folder" else self._remote.rename_file
        return await self._run(
            action,
            lambda: call(item.id, clean),
            success=f"{kind.capitalize()} renamed",
            fallback="Rename failed",
            refresh=(REFRESH_LISTING,),
        )

    async def soft_delete(self, item: Item) -> MutationResult:
        kind = item_kind(item)
        action = f"soft_delete_{kind}"
        if not await ask_confirmation(self._confirm, f'Move "{item.name}" to trash?'):
            return _cancelled(action)

        call = (
            self._remote.soft_delete_folder if kind == "folder" else self._remote.soft_delete_file
        )
        return await self._run(
            action,
            lambda: call(item.id),
            success=f"{kind.capitalize()} moved to trash",
            fallback="Delete failed",
            refresh=(REFRESH_LISTING,),
        )

    async def restore(self, item: Item) -> MutationResult:
        kind = item_kind(item)
        action = f"restore_{kind}"
        if not self._store.in_trash(item.id):
            return self._invalid(
                action,
                ValidationError("Item is not in the trash", details={"id": item.id}),
            )

        call = self._remote.restore_folder if kind == "folder" else self._remote.restore_file
        return await self._run(
            action,
            lambda: call(item.id),
            success=f"{kind.capitalize()} restored",
            fallback="Restore failed",
            refresh=(REFRESH_TRASH, REFRESH_LISTING),
        )

    async def permanently_delete(self, item: Item) -> MutationResult:
        kind = item_kind(item)
        action = f"permanently_delete_{kind}"
        prompt = f'Permanently delete "{item.name}"? This cannot be undone.'
        if not await ask_confirmation(self._confirm, prompt):
            return _cancelled(action)

        call = (
            self._remote.permanently_delete_folder
            if kind == "folder"
            else self._remote.permanently_delete_file
        )
        return await self._run(
            action,
            lambda: call(item.id),
            success=f"{kind.capitalize()} permanently deleted",
            fallback="Permanent delete failed",
            refresh=(REFRESH_TRASH,),
        )

    async def upload(self, upload: Optional[FileUpload]) -> MutationResult:
        action = "upload_file"
        if upload is None:
            return self._invalid(action, ValidationError("No file selected"))
        try:
            _require_name(upload.name, "File name")
        except ValidationError as exc:
            return self._invalid(action, exc)

        folder_id = self._location.current_folder_id

        async def _send() -> None:
            self._uploads_in_flight += 1
            try:
                if folder_id is None:
                    await self._remote.upload_file(upload.name, upload.content, upload.mime_type)
                else:
                    await self._remote.upload_file(
                        upload.name, upload.content, upload.mime_type, folder_id
                    )
            finally:
                self._uploads_in_flight -= 1

        return await self._run(
            action,
            _send,
            success="File uploaded",
            fallback="Upload failed",
            refresh=(REFRESH_LISTING,),
        )

    # ----------------------------
    # Internals
    # ----------------------------
    async def _run(
        self,
        action: str,
        call: Callable[[], Awaitable[None]],
        *,
        success: str,
        fallback: str,
        refresh: tuple[str, ...],
    ) -> MutationResult:
        try:
            await call()
        except RemoteError as exc:
            message = exc.backend_message or fallback
            logger.warning(
                "[%s] backend call failed; error_type:%s message:%s",
                action,
                exc.__class__.__name__,
                message,
            )
            self._notifier.error(message)
            return MutationResult(
                action=action,
                status="failed",
                message=message,
                error_type=exc.__class__.__name__,
            )

        logger.info("[%s] done; refreshing:%s", action, ",".join(refresh))
        self._notifier.success(success)
        await self._refresh(refresh)
        return MutationResult(action=action, status="success", message=success, refreshed=refresh)

    async def _refresh(self, targets: tuple[str, ...]) -> None:
        pending = []
        if REFRESH_TRASH in targets:
            pending.append(self._store.refresh_trash())
        if REFRESH_LISTING in targets:
            pending.append(self._store.refresh(self._location.location))
        await asyncio.gather(*pending)

    def _invalid(self, action: str, exc: ValidationError) -> MutationResult:
        logger.info("[%s] rejected before request; reason:%s", action, exc.message)
        self._notifier.error(exc.message)
        return MutationResult(
            action=action,
            status="invalid",
            message=exc.message,
            error_type=exc.__class__.__name__,
        )


def _cancelled(action: str) -> MutationResult:
    logger.info("[%s] not confirmed; no request issued", action)
    return MutationResult(action=action, status="cancelled", message="Cancelled")


def _require_name(name: Optional[str], label: str) -> str:
    clean = (name or "").strip()
    if not clean:
        raise ValidationError(f"{label} cannot be empty")
    return clean


