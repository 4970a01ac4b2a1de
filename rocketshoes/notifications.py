"""
Notification side-channel.

Error-only, message-only: cart operations report failures here and nowhere
else. Success is observed through the cart snapshot.
"""
from collections import deque
from typing import Callable, Protocol

from rocketshoes.logging import get_logger

logger = get_logger(__name__)


class Notifier(Protocol):
    """Receives human-readable error messages for the UI layer."""

    def error(self, message: str) -> None:
        ...


class LogNotifier:
    """Writes notifications to the log. Default when no UI is attached."""

    def error(self, message: str) -> None:
        logger.warning(f"Cart notification: {message}")


class CallbackNotifier:
    """Forwards each message to a UI callable (toast, status bar, ...)."""

    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback

    def error(self, message: str) -> None:
        self.callback(message)


class ToastQueue:
    """
    Keeps pending messages until the UI drains them.

    Oldest messages are dropped once ``maxlen`` is reached.
    """

    def __init__(self, maxlen: int = 20):
        self._messages: deque[str] = deque(maxlen=maxlen)

    def error(self, message: str) -> None:
        self._messages.append(message)

    def drain(self) -> list[str]:
        """Return and forget all pending messages, oldest first."""
        messages = list(self._messages)
        self._messages.clear()
        return messages

    def __len__(self) -> int:
        return len(self._messages)
