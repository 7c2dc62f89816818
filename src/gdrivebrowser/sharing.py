"""Sharing: issue grants and read the current grants of a file."""

from __future__ import annotations

import logging
from typing import Optional

from gdrivebrowser.errors import RemoteError
from gdrivebrowser.models import PermissionsResult, Role, ShareResult
from gdrivebrowser.notify import Notifier
from gdrivebrowser.remote.protocol import RemoteClient

logger = logging.getLogger(__name__)


def normalize_recipient(shared_with: Optional[str]) -> Optional[str]:
    """Blank recipients mean a link share (None), not an error."""
    if shared_with is None:
        return None
    clean = shared_with.strip()
    return clean or None


class SharingService:
    def __init__(self, remote: RemoteClient, notifier: Notifier) -> None:
        self._remote = remote
        self._notifier = notifier

    async def share_file(
        self,
        file_id: str,
        shared_with: Optional[str],
        role: Role | str,
    ) -> ShareResult:
        """
        Grant `role` on a file to a user, or to anyone with the link.

        When the backend returns a general URL it is pushed to the notifier
        so the host can offer copy-to-clipboard.
        """
        try:
            parsed_role = Role.parse(role)
        except ValueError:
            message = f"Unknown role: {role}"
            self._notifier.error(message)
            return ShareResult(status="invalid", message=message, error_type="ValidationError")

        recipient = normalize_recipient(shared_with)
        try:
            general_url = await self._remote.share_file(file_id, recipient, parsed_role)
        except RemoteError as exc:
            message = exc.backend_message or "Failed to share file"
            logger.warning(
                "[share_file] share failed; file_id:%s error_type:%s",
                file_id,
                exc.__class__.__name__,
            )
            self._notifier.error(message)
            return ShareResult(
                status="failed",
                message=message,
                error_type=exc.__class__.__name__,
            )

        logger.info(
            "[share_file] shared; file_id:%s link:%s role:%s",
            file_id,
            recipient is None,
            parsed_role.value,
        )
        if general_url:
            self._notifier.share_link(general_url)
            message = "Shareable link created"
        else:
            message = "File shared"
            self._notifier.success(message)
        return ShareResult(status="success", message=message, general_url=general_url)

    async def fetch_permissions(self, file_id: str) -> PermissionsResult:
        try:
            grants = await self._remote.get_share_permissions(file_id)
        except RemoteError as exc:
            message = exc.backend_message or "Failed to load permissions"
            logger.warning("[fetch_permissions] lookup failed; file_id:%s", file_id)
            self._notifier.error(message)
            return PermissionsResult(file_id=file_id, status="failed", message=message)

        if not grants:
            return PermissionsResult(
                file_id=file_id,
                status="not_shared",
                message="Not shared with anyone",
            )
        return PermissionsResult(file_id=file_id, status="shared", grants=list(grants))
