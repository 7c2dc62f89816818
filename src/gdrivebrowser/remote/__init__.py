"""Remote resource client exports for gdrivebrowser."""

from __future__ import annotations

from .drive_remote import DriveRemote
from .protocol import RemoteClient

__all__ = ["DriveRemote", "RemoteClient"]
