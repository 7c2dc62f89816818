"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from gdrivebrowser.store import DEFAULT_PAGE_SIZE

DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)
DEFAULT_SESSION_FILE = "~/.gdrivebrowser/session.json"


@dataclass(frozen=True)
class BrowserConfig:
    """
    Centralized configuration.

    Required fields have no defaults; load_config() raises KeyError at
    startup when their environment variables are missing.
    """

    client_secrets_file: str
    token_file: str

    session_file: str = DEFAULT_SESSION_FILE
    page_size: int = DEFAULT_PAGE_SIZE
    max_retries: int = 3
    supports_all_drives: bool = True
    scopes: tuple[str, ...] = DEFAULT_SCOPES


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def load_config() -> BrowserConfig:
    """Construct a BrowserConfig from environment variables.

    Required environment variables:
        GDRIVEBROWSER_CLIENT_SECRETS: Path to the OAuth client secrets JSON.
        GDRIVEBROWSER_TOKEN_FILE: Path to the OAuth token JSON (created if missing).

    Optional environment variables (with defaults):
        GDRIVEBROWSER_SESSION_FILE: Persisted session (default: ~/.gdrivebrowser/session.json).
        GDRIVEBROWSER_PAGE_SIZE: Files fetched per listing page (default: 100).
        GDRIVEBROWSER_MAX_RETRIES: Transport retries for transient errors (default: 3).
        GDRIVEBROWSER_SUPPORTS_ALL_DRIVES: Include shared drives (default: true).
        GDRIVEBROWSER_SCOPES: Comma-separated OAuth scopes (default: full drive).

    Returns:
        Configured BrowserConfig instance.
    """
    scopes_raw = os.environ.get("GDRIVEBROWSER_SCOPES", "").strip()
    scopes = tuple(s.strip() for s in scopes_raw.split(",") if s.strip()) or DEFAULT_SCOPES

    page_size = int(os.environ.get("GDRIVEBROWSER_PAGE_SIZE", str(DEFAULT_PAGE_SIZE)))
    if page_size <= 0:
        raise ValueError("GDRIVEBROWSER_PAGE_SIZE must be positive")

    return BrowserConfig(
        client_secrets_file=os.environ["GDRIVEBROWSER_CLIENT_SECRETS"],
        token_file=os.environ["GDRIVEBROWSER_TOKEN_FILE"],
        session_file=os.environ.get("GDRIVEBROWSER_SESSION_FILE", DEFAULT_SESSION_FILE),
        page_size=page_size,
        max_retries=int(os.environ.get("GDRIVEBROWSER_MAX_RETRIES", "3")),
        supports_all_drives=_parse_bool(
            os.environ.get("GDRIVEBROWSER_SUPPORTS_ALL_DRIVES", "true")
        ),
        scopes=scopes,
    )
