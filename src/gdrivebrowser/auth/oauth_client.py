"""OAuth sign-in and Drive service construction for gdrivebrowser."""

from __future__ import annotations

import logging
import os
from typing import Any, Sequence

from gdrivebrowser.errors import AuthError, SessionError
from gdrivebrowser.session import SessionContext, UserSession

logger = logging.getLogger(__name__)

DRIVE_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)


def credentials_from_token(token: str):
    """
    Wrap a bearer token held by the session in Google credentials.

    The credentials are not refreshable; an expired token surfaces as AuthError
    on the next call and the user signs in again.
    """
    if not isinstance(token, str) or not token.strip():
        raise SessionError("Session token is empty")
    try:
        from google.oauth2.credentials import Credentials
    except ImportError as exc:  # pragma: no cover
        raise AuthError(
            "Google auth libraries are not available",
            details={"hint": "Install google-auth"},
            cause=exc,
        ) from exc
    return Credentials(token=token)


def build_drive_service(credentials: Any):
    """
    Build a Drive v3 service resource.

    httplib2 is not thread-safe and DriveRemote runs requests in worker
    threads, so every request gets its own authorized Http object.
    """
    try:
        import google_auth_httplib2
        import httplib2
        from googleapiclient.discovery import build
        from googleapiclient.http import HttpRequest
    except ImportError as exc:  # pragma: no cover
        raise AuthError(
            "google-api-python-client is not available",
            details={"hint": "Install google-api-python-client and google-auth-httplib2"},
            cause=exc,
        ) from exc

    def _request_builder(http, *args, **kwargs):
        authorized = google_auth_httplib2.AuthorizedHttp(credentials, http=httplib2.Http())
        return HttpRequest(authorized, *args, **kwargs)

    try:
        return build(
            "drive",
            "v3",
            credentials=credentials,
            requestBuilder=_request_builder,
            cache_discovery=False,
        )
    except Exception as exc:
        raise AuthError("Failed to build Drive service", cause=exc) from exc


class OAuthClient:
    """Installed-app OAuth flow backed by a client secrets file and a token file."""

    def __init__(self, client_secrets_file: str, token_file: str) -> None:
        for label, value in (("client_secrets_file", client_secrets_file), ("token_file", token_file)):
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{label} must be a non-empty string")
        self._client_secrets_file = client_secrets_file
        self._token_file = token_file

    @property
    def token_file(self) -> str:
        return self._token_file

    def get_credentials(self, scopes: Sequence[str] = DRIVE_SCOPES, ensure_valid: bool = True):
        """
        Return OAuth credentials for the given scopes.

        The token file is reused when valid (refreshed when possible);
        otherwise the browser-based consent flow runs and the new token is
        written back.

        Raises:
            AuthError: on load/refresh/flow failures.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise ValueError("scopes must be a non-empty sequence of strings")

        try:
            from google.auth.transport.requests import Request
            from google.oauth2.credentials import Credentials
            from google_auth_oauthlib.flow import InstalledAppFlow
        except ImportError as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth and google-auth-oauthlib"},
                cause=exc,
            ) from exc

        creds = None
        if os.path.exists(self._token_file):
            try:
                creds = Credentials.from_authorized_user_file(self._token_file, scopes=list(scopes))
            except (OSError, ValueError) as exc:
                raise AuthError(
                    "Failed to load token_file",
                    details={"token_file": self._token_file},
                    cause=exc,
                ) from exc

            if not ensure_valid:
                return creds

            if not creds.valid and creds.refresh_token:
                try:
                    creds.refresh(Request())
                    self._save_credentials(creds)
                except AuthError:
                    raise
                except Exception as exc:
                    raise AuthError(
                        "Failed to refresh OAuth credentials",
                        details={"token_file": self._token_file},
                        cause=exc,
                    ) from exc

            if creds.valid:
                return creds

        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                self._client_secrets_file,
                scopes=list(scopes),
            )
            creds = flow.run_local_server(port=0)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={"client_secrets_file": self._client_secrets_file},
                cause=exc,
            ) from exc
        self._save_credentials(creds)
        return creds

    def sign_in(
        self,
        session: SessionContext,
        scopes: Sequence[str] = DRIVE_SCOPES,
    ) -> UserSession:
        """Authorize, look up the Drive account and record it in `session`."""
        from gdrivebrowser.controller import GoogleDriveController

        creds = self.get_credentials(scopes=scopes, ensure_valid=True)
        user = GoogleDriveController(creds).about_user()
        user_id = user.get("permissionId")
        if not isinstance(user_id, str) or not user_id:
            raise AuthError("Drive did not report the signed-in account", details={"user": user})

        return session.login(user_id, creds.token, user.get("emailAddress"))

    def _save_credentials(self, creds) -> None:
        token_dir = os.path.dirname(self._token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(self._token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": self._token_file},
                cause=exc,
            ) from exc
        logger.debug("[_save_credentials] token saved; token_file:%s", self._token_file)
