from .mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME, guess_upload_mime, is_folder
from .time import parse_rfc3339

__all__ = [
    "DEFAULT_UPLOAD_MIME",
    "FOLDER_MIME",
    "guess_upload_mime",
    "is_folder",
    "parse_rfc3339",
]
