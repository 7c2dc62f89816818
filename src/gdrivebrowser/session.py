"""Signed-in user context, persisted between runs."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from gdrivebrowser.errors import SessionError

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class UserSession:
    user_id: str
    token: str
    email: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.user_id, "email": self.email, "token": self.token}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["UserSession"]:
        """Return a session, or None when `data` is not a usable session record."""
        if not isinstance(data, dict):
            return None
        user_id = data.get("id")
        token = data.get("token")
        if not isinstance(user_id, str) or not user_id.strip():
            return None
        if not isinstance(token, str) or not token.strip():
            return None
        email = data.get("email")
        return cls(user_id=user_id, token=token, email=email if isinstance(email, str) else None)


class SessionContext:
    """
    Explicit replacement for a process-wide "current user".

    Components that need the user receive this object. `load()` restores a
    persisted session and discards the file when it is malformed; `logout()`
    removes it.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = os.path.expanduser(path) if path else None
        self._user: Optional[UserSession] = None

    @property
    def user(self) -> Optional[UserSession]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def require_user(self) -> UserSession:
        if self._user is None:
            raise SessionError("Not signed in")
        return self._user

    def load(self) -> Optional[UserSession]:
        """Restore the persisted session. Malformed records are deleted."""
        self._user = None
        if not self._path or not os.path.exists(self._path):
            return None

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("[load] unreadable session file discarded; path:%s error:%s", self._path, exc)
            self._discard()
            return None

        session = UserSession.from_dict(raw)
        if session is None:
            logger.warning("[load] malformed session discarded; path:%s", self._path)
            self._discard()
            return None

        self._user = session
        return session

    def login(self, user_id: str, token: str, email: Optional[str] = None) -> UserSession:
        session = UserSession.from_dict({"id": user_id, "token": token, "email": email})
        if session is None:
            raise SessionError("Session requires a non-empty user id and token")

        if self._path:
            session_dir = os.path.dirname(self._path)
            if session_dir:
                os.makedirs(session_dir, exist_ok=True)
            try:
                with open(self._path, "w", encoding="utf-8") as f:
                    json.dump(session.to_dict(), f)
            except OSError as exc:
                raise SessionError(
                    "Failed to save session file",
                    details={"path": self._path},
                    cause=exc,
                ) from exc

        self._user = session
        logger.info("[login] signed in; user_id:%s", user_id)
        return session

    def logout(self) -> None:
        self._discard()
        self._user = None
        logger.info("[logout] signed out")

    def _discard(self) -> None:
        if self._path and os.path.exists(self._path):
            try:
                os.remove(self._path)
            except OSError as exc:
                logger.warning("[_discard] could not remove session file; path:%s error:%s", self._path, exc)
