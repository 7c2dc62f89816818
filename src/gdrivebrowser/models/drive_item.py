"""Raw Drive item as returned by the controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from gdrivebrowser.util.mime import is_folder


@dataclass(slots=True)
class DriveItem:
    """
    A Drive file or folder, decoded from a files resource.

    Notes:
        - Drive allows multiple parents; the browser only uses the first one.
    """

    id: str
    name: str
    mime_type: str
    parents: list[str] = field(default_factory=list)

    trashed: bool = False
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None
    size: Optional[int] = None
    web_view_link: Optional[str] = None
    web_content_link: Optional[str] = None

    @property
    def parent_id(self) -> Optional[str]:
        return self.parents[0] if self.parents else None

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)
