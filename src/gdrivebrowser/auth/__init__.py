"""Public auth exports for gdrivebrowser."""

from __future__ import annotations

from .oauth_client import DRIVE_SCOPES, OAuthClient, build_drive_service, credentials_from_token

__all__ = ["DRIVE_SCOPES", "OAuthClient", "build_drive_service", "credentials_from_token"]
