import asyncio
import logging
import webbrowser
from collections.abc import Callable
from urllib.parse import urlsplit

from typing_extensions import Protocol

from .models.callback_outcome import (
    BrowserCancel,
    BrowserDismiss,
    BrowserFailure,
    BrowserLocked,
    BrowserSuccess,
    CallbackOutcome,
)

logger = logging.getLogger(__name__)


class InteractiveBrowserSession(Protocol):
    """Shows the provider's consent page and reports how the session ended.

    Implementations own any timeout or cancellation semantics, `open` only
    returns once the session is over.
    """

    async def open(
        self, authorization_url: str, redirect_uri: str
    ) -> CallbackOutcome: ...


class DeepLinkBrowserSession:
    """
    Browser session for apps that receive the OAuth redirect as a deep link.

    `open` launches the system browser and waits until the app's deep link
    handler passes the redirect to `handle_redirect`, or until the user
    backs out through `cancel` or `dismiss`.
    """

    def __init__(self, launcher: Callable[[str], bool] = webbrowser.open):
        self.launcher = launcher
        self._pending: asyncio.Future[CallbackOutcome] | None = None
        self._redirect_uri: str | None = None

    @property
    def is_open(self) -> bool:
        return self._pending is not None

    async def open(self, authorization_url: str, redirect_uri: str) -> CallbackOutcome:
        if self._pending is not None:
            logger.warning("An authentication session is already open")
            return BrowserLocked()

        loop = asyncio.get_running_loop()
        self._pending = loop.create_future()
        self._redirect_uri = redirect_uri

        try:
            try:
                launched = self.launcher(authorization_url)
            except Exception as e:
                logger.error(f"Failed to launch browser: {type(e).__name__}")
                return BrowserFailure(reason=str(e))

            if launched is False:
                logger.error("Browser launcher refused to open the page")
                return BrowserFailure(reason="Unable to open the browser")

            return await self._pending
        finally:
            self._pending = None
            self._redirect_uri = None

    def handle_redirect(self, url: str) -> bool:
        """Complete the open session with `url`.

        Returns False when no session is waiting or the URL doesn't belong
        to it, so unrelated deep links can be routed elsewhere.
        """
        if self._redirect_uri is None or not url.startswith(self._redirect_uri):
            return False

        logger.debug(f"Received redirect for {urlsplit(url).scheme}:// callback")

        return self._resolve(BrowserSuccess(url=url))

    def cancel(self) -> bool:
        return self._resolve(BrowserCancel())

    def dismiss(self) -> bool:
        return self._resolve(BrowserDismiss())

    def _resolve(self, outcome: CallbackOutcome) -> bool:
        if self._pending is None or self._pending.done():
            return False

        self._pending.set_result(outcome)

        return True
