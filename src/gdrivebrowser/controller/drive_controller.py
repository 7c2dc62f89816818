"""Google Drive API controller (blocking; wrapped by DriveRemote)."""

from __future__ import annotations

import io
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from gdrivebrowser.auth import build_drive_service
from gdrivebrowser.errors import (
    ApiError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    RemoteError,
    map_http_error,
)
from gdrivebrowser.models import DriveItem
from gdrivebrowser.util.mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME
from gdrivebrowser.util.time import parse_rfc3339

from .fields import (
    ABOUT_USER_FIELDS,
    ITEM_FIELDS,
    LIST_FIELDS,
    PERMISSION_FIELDS,
    PERMISSION_LIST_FIELDS,
)

T = TypeVar("T")

MAX_PAGE_SIZE = 1000


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Thin Drive v3 wrapper returning DriveItem / plain dicts.

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Transient failures (429, 5xx, network) are retried with back-off;
          everything else is raised as a RemoteError subclass.
    """

    def __init__(
        self,
        credentials: Any,
        *,
        supports_all_drives: bool = True,
        max_retries: int = 3,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy(max_retries=max_retries)
        self._service = build_drive_service(credentials)
        self._root_id: Optional[str] = None

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
        max_retries: int = 3,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._retry_policy = _RetryPolicy(max_retries=max_retries)
        obj._service = service
        obj._root_id = None
        return obj

    # ----------------------------
    # Reads
    # ----------------------------
    def get(self, file_id: str) -> DriveItem:
        req = self._service.files().get(
            fileId=file_id,
            fields=ITEM_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_item(data)

    def root_id(self) -> str:
        """Resolve (once) the real id behind the "root" alias."""
        if self._root_id is None:
            req = self._service.files().get(fileId="root", fields="id")
            self._root_id = str(self._execute(req.execute)["id"])
        return self._root_id

    def list_children(
        self,
        parent_id: str,
        *,
        folders: bool,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[DriveItem]:
        """Non-trashed children of parent_id, folders or files only."""
        q = _build_query(parent_id=parent_id, folders=folders, trashed=False)
        return self._find_by_query(q, limit=limit, offset=offset)

    def list_trashed(self, *, folders: bool) -> list[DriveItem]:
        """Trashed items owned by the signed-in user, folders or files only."""
        q = _build_query(parent_id=None, folders=folders, trashed=True, owned_by_me=True)
        return self._find_by_query(q)

    def about_user(self) -> dict[str, Any]:
        req = self._service.about().get(fields=ABOUT_USER_FIELDS)
        data = self._execute(req.execute)
        return dict(data.get("user") or {})

    def list_permissions(self, file_id: str) -> list[dict[str, Any]]:
        results: list[dict[str, Any]] = []
        page_token: Optional[str] = None
        while True:
            req = self._service.permissions().list(
                fileId=file_id,
                fields=PERMISSION_LIST_FIELDS,
                pageToken=page_token,
                **self._common_get_kwargs(),
            )
            data = self._execute(req.execute)
            results.extend(p for p in data.get("permissions", []) if isinstance(p, dict))
            page_token = data.get("nextPageToken")
            if not page_token:
                return results

    # ----------------------------
    # Writes
    # ----------------------------
    def create_folder(self, name: str, parent_id: str) -> DriveItem:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=ITEM_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute, retry=False)
        return _file_dict_to_item(data)

    def rename(self, file_id: str, new_name: str) -> DriveItem:
        req = self._service.files().update(
            fileId=file_id,
            body={"name": new_name},
            fields=ITEM_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_item(data)

    def set_trashed(self, file_id: str, trashed: bool) -> None:
        """Soft-delete (trashed=True) or restore (trashed=False)."""
        req = self._service.files().update(
            fileId=file_id,
            body={"trashed": trashed},
            fields="id",
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    def delete_permanently(self, file_id: str) -> None:
        req = self._service.files().delete(
            fileId=file_id,
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    def upload_bytes(
        self,
        name: str,
        content: bytes,
        *,
        mime_type: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> DriveItem:
        """Create a file from memory. Without parent_id Drive places it at root."""
        from googleapiclient.http import MediaIoBaseUpload

        media = MediaIoBaseUpload(
            io.BytesIO(content),
            mimetype=mime_type or DEFAULT_UPLOAD_MIME,
            resumable=False,
        )
        body: dict[str, Any] = {"name": name}
        if parent_id is not None:
            body["parents"] = [parent_id]

        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=ITEM_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute, retry=False)
        return _file_dict_to_item(data)

    def create_permission(
        self,
        file_id: str,
        *,
        drive_role: str,
        email: Optional[str] = None,
    ) -> dict[str, Any]:
        """Grant a user (email) or anyone-with-the-link (email None)."""
        if email is None:
            body: dict[str, Any] = {"type": "anyone", "role": drive_role}
        else:
            body = {"type": "user", "role": drive_role, "emailAddress": email}

        kwargs = self._common_write_kwargs()
        if drive_role == "owner":
            kwargs["transferOwnership"] = True

        req = self._service.permissions().create(
            fileId=file_id,
            body=body,
            fields=PERMISSION_FIELDS,
            **kwargs,
        )
        return dict(self._execute(req.execute, retry=False))

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _find_by_query(
        self,
        q: str,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[DriveItem]:
        """Run a files.list query; with limit, stop paging once the window is covered."""
        wanted = None if limit is None else offset + limit
        page_size = MAX_PAGE_SIZE if wanted is None else max(1, min(wanted, MAX_PAGE_SIZE))

        items: list[DriveItem] = []
        page_token: Optional[str] = None
        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                orderBy="name",
                pageSize=page_size,
                pageToken=page_token,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            items.extend(_file_dict_to_item(f) for f in data.get("files", []))

            page_token = data.get("nextPageToken")
            if not page_token or (wanted is not None and len(items) >= wanted):
                break

        if limit is None:
            return items[offset:]
        return items[offset : offset + limit]

    def _execute(self, func: Callable[[], T], *, retry: bool = True) -> T:
        """
        Run a request, retrying transient failures when `retry` is set.

        Creates pass retry=False: a request that reached Drive before the
        connection dropped would otherwise be applied twice.
        """
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if retry and self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: RemoteError) -> bool:
        if isinstance(exc, (RateLimitError, NetworkError)):
            return True
        if isinstance(exc, ApiError):
            status_code = exc.details.get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> RemoteError:
        from googleapiclient.errors import HttpError

        if isinstance(exc, RemoteError):
            return exc
        if isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)
        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)
        return ApiError("Drive API error", cause=exc)


def _build_query(
    *,
    parent_id: Optional[str],
    folders: bool,
    trashed: bool,
    owned_by_me: bool = False,
) -> str:
    clauses: list[str] = []
    if parent_id is not None:
        clauses.append(f"'{parent_id}' in parents")
    clauses.append(f"mimeType {'=' if folders else '!='} '{FOLDER_MIME}'")
    clauses.append(f"trashed={'true' if trashed else 'false'}")
    if owned_by_me:
        clauses.append("'me' in owners")
    return " and ".join(clauses)


def _parse_time(value: Any):
    if not isinstance(value, str):
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None


def _file_dict_to_item(data: dict[str, Any]) -> DriveItem:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    view_link = data.get("webViewLink")
    content_link = data.get("webContentLink")
    return DriveItem(
        id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=list(parents) if isinstance(parents, list) else [],
        trashed=bool(data.get("trashed", False)),
        created_time=_parse_time(data.get("createdTime")),
        modified_time=_parse_time(data.get("modifiedTime")),
        size=size,
        web_view_link=view_link if isinstance(view_link, str) else None,
        web_content_link=content_link if isinstance(content_link, str) else None,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message if isinstance(message, str) else None,
        details=details or None,
    )
