"""Result models for mutations, sharing and permission lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .sharing import ShareGrant


MutationStatus = Literal["success", "failed", "invalid", "cancelled"]
PermissionsStatus = Literal["shared", "not_shared", "failed"]


@dataclass(slots=True)
class MutationResult:
    """Outcome of one mutating action, produced once per call."""

    action: str
    status: MutationStatus
    message: str = ""

    error_type: Optional[str] = None
    refreshed: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status == "success"


@dataclass(slots=True)
class ShareResult:
    status: MutationStatus
    message: str = ""
    general_url: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


@dataclass(slots=True)
class PermissionsResult:
    """
    Current grants for a file.

    "not_shared" (empty grants) and "failed" are distinct states.
    """

    file_id: str
    status: PermissionsStatus
    grants: list[ShareGrant] = field(default_factory=list)
    message: str = ""
