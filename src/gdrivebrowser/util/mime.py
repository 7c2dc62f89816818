from __future__ import annotations

import mimetypes

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DEFAULT_UPLOAD_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def guess_upload_mime(name: str) -> str:
    """Best-effort MIME type for an upload, from the file name's extension."""
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_UPLOAD_MIME
