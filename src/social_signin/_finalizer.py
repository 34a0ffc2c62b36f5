import inspect
import logging
from collections.abc import Awaitable, Callable

from typing_extensions import Protocol

from ._storage import TokenStore, save_tokens, save_user
from .models.oauth import AuthResponse

logger = logging.getLogger(__name__)


class SessionFinalizer(Protocol):
    async def on_success(self, result: AuthResponse) -> None: ...


class Navigator(Protocol):
    def replace(self, route: str) -> None: ...


class DefaultSessionFinalizer:
    """Persist the credentials, then hand over to the app.

    The caller supplied `on_success` wins over the default navigation. If
    neither is given the flow just ends with the credentials stored.
    """

    def __init__(
        self,
        store: TokenStore,
        navigator: Navigator | None = None,
        on_success: Callable[[AuthResponse], Awaitable[None] | None] | None = None,
        post_login_route: str = "/(tabs)",
    ):
        self.store = store
        self.navigator = navigator
        self.on_success_callback = on_success
        self.post_login_route = post_login_route

    async def on_success(self, result: AuthResponse) -> None:
        assert result.access_token is not None
        assert result.user is not None

        await save_tokens(self.store, result.access_token, result.refresh_token)
        await save_user(self.store, result.user)

        if self.on_success_callback is not None:
            value = self.on_success_callback(result)

            if inspect.isawaitable(value):
                await value

            return

        if self.navigator is not None:
            logger.debug(f"Navigating to {self.post_login_route}")
            self.navigator.replace(self.post_login_route)
