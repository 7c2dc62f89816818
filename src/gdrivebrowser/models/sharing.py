"""Share grant model and role vocabulary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Permission level of a share grant."""

    VIEWER = "viewer"
    EDITOR = "editor"
    OWNER = "owner"

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        """Accept a Role or its case-insensitive name. Raises ValueError if unknown."""
        if isinstance(value, Role):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown role: {value!r}")
        return cls(value.strip().lower())

    @property
    def drive_role(self) -> str:
        return _DRIVE_ROLES[self]

    @classmethod
    def from_drive_role(cls, drive_role: str) -> "Role":
        for role, name in _DRIVE_ROLES.items():
            if name == drive_role:
                return role
        # commenter and other read-only variants collapse to viewer
        return cls.VIEWER


_DRIVE_ROLES: dict[Role, str] = {
    Role.VIEWER: "reader",
    Role.EDITOR: "writer",
    Role.OWNER: "owner",
}


@dataclass(slots=True, frozen=True)
class ShareGrant:
    """
    A permission record for one file.

    shared_with is None for a shareable-link grant.
    """

    file_id: str
    shared_with: Optional[str]
    role: Role
    permission_id: Optional[str] = None

    @property
    def is_link(self) -> bool:
        return self.shared_with is None
