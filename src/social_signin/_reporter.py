import logging
from collections.abc import Callable

from typing_extensions import Protocol

logger = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    def on_error(self, message: str) -> None: ...


class LoggingErrorReporter:
    def on_error(self, message: str) -> None:
        logger.error(f"[Social OAuth] {message}")


class CallbackErrorReporter:
    """Adapts a plain `(message) -> None` callable, e.g. a toast helper."""

    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback

    def on_error(self, message: str) -> None:
        self.callback(message)
