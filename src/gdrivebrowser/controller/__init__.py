"""Internal controller exports for gdrivebrowser."""

from __future__ import annotations

from .drive_controller import GoogleDriveController

__all__ = ["GoogleDriveController"]
