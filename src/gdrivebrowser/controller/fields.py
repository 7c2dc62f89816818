"""Field selectors for Google Drive API responses."""

from __future__ import annotations

ITEM_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "trashed,"
    "createdTime,"
    "modifiedTime,"
    "size,"
    "webViewLink,"
    "webContentLink"
)

LIST_FIELDS: str = f"nextPageToken,files({ITEM_FIELDS})"

PERMISSION_FIELDS: str = "id,type,role,emailAddress,domain"

PERMISSION_LIST_FIELDS: str = f"nextPageToken,permissions({PERMISSION_FIELDS})"

ABOUT_USER_FIELDS: str = "user(permissionId,emailAddress,displayName)"
