"""Side channels the store pokes while it works: haptics and user prompts.

Both are capability interfaces picked when the store is built. The defaults do
nothing beyond logging, so the core runs headless; a UI layer plugs in real
implementations.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Haptics(ABC):
    """Tactile feedback. Calls are best-effort; callers swallow failures."""

    @abstractmethod
    def impact(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def notification(self) -> None:
        raise NotImplementedError


class NoHaptics(Haptics):
    def impact(self) -> None:
        pass

    def notification(self) -> None:
        pass


class Notifier(ABC):
    """User-facing messages and confirmations."""

    @abstractmethod
    def notify(self, title: str, message: str) -> None:
        """Show a dismissable message."""
        raise NotImplementedError

    @abstractmethod
    def confirm(self, title: str, message: str, action: str) -> bool:
        """Ask before a destructive `action`; False means cancelled."""
        raise NotImplementedError


class LogNotifier(Notifier):
    """Headless notifier: messages go to the log, confirmations are declined."""

    def notify(self, title: str, message: str) -> None:
        logger.info("%s: %s", title, message)

    def confirm(self, title: str, message: str, action: str) -> bool:
        logger.info("%s: %s (declined %r, no interactive prompt)", title, message, action)
        return False


class ConsoleNotifier(Notifier):
    """Terminal notifier used by the CLI."""

    def notify(self, title: str, message: str) -> None:
        print(f"[{title}] {message}")

    def confirm(self, title: str, message: str, action: str) -> bool:
        answer = input(f"{title}: {message} Type '{action}' to confirm: ")
        return answer.strip().lower() == action.lower()
