"""User-facing notification and confirmation seams."""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Optional, Protocol, Union

logger = logging.getLogger(__name__)

Confirm = Callable[[str], Union[bool, Awaitable[bool]]]


class Notifier(Protocol):
    """Side channel to the user (toasts, status bar, console...)."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def share_link(self, url: str) -> None: ...


class LoggingNotifier:
    """Default notifier: writes notifications to the gdrivebrowser.notify logger."""

    def success(self, message: str) -> None:
        logger.info("[success] %s", message)

    def error(self, message: str) -> None:
        logger.warning("[error] %s", message)

    def share_link(self, url: str) -> None:
        logger.info("[share_link] shareable link ready; url:%s", url)


async def ask_confirmation(confirm: Optional[Confirm], prompt: str) -> bool:
    """
    Ask the host to confirm a destructive action.

    No confirm callable means no confirmation was granted.
    """
    if confirm is None:
        return False
    answer = confirm(prompt)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)
