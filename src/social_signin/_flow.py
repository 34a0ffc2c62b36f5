import asyncio
import logging
import secrets
from collections.abc import Callable
from enum import Enum

from typing_extensions import assert_never

from ._backend import BackendOAuthClient
from ._browser import InteractiveBrowserSession
from ._config import SocialAuthConfig
from ._finalizer import SessionFinalizer
from ._reporter import ErrorReporter, LoggingErrorReporter
from .exceptions import FailureKind, SocialAuthError
from .models.callback_outcome import (
    BrowserCancel,
    BrowserDismiss,
    BrowserFailure,
    BrowserLocked,
    BrowserSuccess,
    CallbackOutcome,
)
from .models.oauth import OAuthProvider
from .utils._redirect import RedirectPayload, parse_redirect
from .utils._state import generate_state

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Unable to complete social authentication. Please try again."


class FlowState(str, Enum):
    IDLE = "idle"
    INITIATING = "initiating"
    AWAITING_USER_INTERACTION = "awaiting_user_interaction"
    VALIDATING = "validating"
    EXCHANGING = "exchanging"
    FINALIZING = "finalizing"


def _message_from(error: Exception, default: str = DEFAULT_ERROR_MESSAGE) -> str:
    return str(error) or default


def _states_match(expected: str, returned: str) -> bool:
    return secrets.compare_digest(expected.encode("utf-8"), returned.encode("utf-8"))


class OAuthFlowController:
    """
    Drives a social sign-in through the authorization code flow.

    One attempt at a time: the backend mints the provider authorization URL
    for a fresh state token, the user goes through the provider's consent
    page in a browser session, the callback is checked against the state
    token and the code is exchanged by the backend for our own tokens, which
    are then handed to the finalizer.

    Failures never escape `start_social_auth`, they are reported through the
    error reporter and kept in `last_error`.
    """

    def __init__(
        self,
        backend: BackendOAuthClient,
        browser: InteractiveBrowserSession,
        finalizer: SessionFinalizer,
        error_reporter: ErrorReporter | None = None,
        config: SocialAuthConfig | None = None,
        state_generator: Callable[[], str] = generate_state,
    ):
        self.backend = backend
        self.browser = browser
        self.finalizer = finalizer
        self.error_reporter: ErrorReporter = error_reporter or LoggingErrorReporter()
        self.config = config or SocialAuthConfig()
        self.state_generator = state_generator

        self.state = FlowState.IDLE
        self.last_error: SocialAuthError | None = None
        self.is_initiating = False
        self.is_exchanging = False

        self._active = False
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def is_social_auth_pending(self) -> bool:
        return self.is_initiating or self.is_exchanging or self._active

    async def start_social_auth(
        self, provider: OAuthProvider, redirect_uri: str | None = None
    ) -> None:
        if self._active:
            logger.debug("Social sign-in already in progress, ignoring request")
            return

        self._active = True
        self.last_error = None

        try:
            await self._run(provider, redirect_uri or self.config.redirect_uri)
        except SocialAuthError as e:
            self._report(e)
        except Exception as e:
            logger.exception("Unexpected error during social sign-in")
            self._report(
                SocialAuthError(FailureKind.INTERACTION_FAILED, _message_from(e))
            )
        finally:
            self.is_initiating = False
            self.is_exchanging = False
            self._transition(FlowState.IDLE)
            self._active = False

    def start_social_auth_soon(
        self, provider: OAuthProvider, redirect_uri: str | None = None
    ) -> asyncio.Task[None] | None:
        """Schedule `start_social_auth` on the running loop.

        Meant for synchronous UI handlers. Returns None when an attempt is
        already running or already scheduled.
        """
        if self._active or self._tasks:
            return None

        task = asyncio.get_running_loop().create_task(
            self.start_social_auth(provider, redirect_uri)
        )

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        return task

    async def _run(self, provider: OAuthProvider, redirect_uri: str) -> None:
        try:
            provider = OAuthProvider(provider)
        except ValueError as e:
            raise SocialAuthError(
                FailureKind.PROVIDER_INITIATION_FAILED,
                f"Unsupported sign-in provider: {provider}",
            ) from e

        self._transition(FlowState.INITIATING)

        state_token = self.state_generator()
        self.is_initiating = True

        try:
            oauth_response = await self.backend.initiate(
                provider, redirect_uri, state_token
            )
        except Exception as e:
            logger.error(f"Failed to initiate {provider.value} sign-in")
            raise SocialAuthError(
                FailureKind.PROVIDER_INITIATION_FAILED, _message_from(e)
            ) from e
        finally:
            self.is_initiating = False

        if not oauth_response.authorization_url:
            logger.error(f"No authorization URL returned for {provider.value}")
            raise SocialAuthError(
                FailureKind.PROVIDER_INITIATION_FAILED,
                "Unable to start social authentication. Please try again.",
            )

        self._transition(FlowState.AWAITING_USER_INTERACTION)

        try:
            outcome = await self.browser.open(
                oauth_response.authorization_url, redirect_uri
            )
        except Exception as e:
            logger.error(f"Browser session failed: {type(e).__name__}")
            raise SocialAuthError(
                FailureKind.INTERACTION_FAILED, DEFAULT_ERROR_MESSAGE
            ) from e

        callback_url = self._callback_url(outcome)

        self._transition(FlowState.VALIDATING)

        payload = parse_redirect(callback_url)
        code = self._validate(payload, state_token)

        self._transition(FlowState.EXCHANGING)
        self.is_exchanging = True

        try:
            auth_response = await self.backend.exchange(
                code, payload.returned_state or state_token
            )
        except Exception as e:
            logger.error(f"Token exchange failed for {provider.value}")
            raise SocialAuthError(
                FailureKind.TOKEN_EXCHANGE_FAILED, _message_from(e)
            ) from e
        finally:
            self.is_exchanging = False

        if not auth_response.is_complete():
            logger.error("Token response is missing tokens or user")
            raise SocialAuthError(
                FailureKind.INCOMPLETE_TOKEN_RESPONSE,
                "Missing authentication tokens. Please sign in again.",
            )

        self._transition(FlowState.FINALIZING)

        try:
            await self.finalizer.on_success(auth_response)
        except Exception as e:
            # Tokens were issued, whether to roll back is up to the finalizer
            logger.error("Sign-in finalization failed after tokens were received")
            raise SocialAuthError(
                FailureKind.FINALIZATION_FAILED, _message_from(e)
            ) from e

        logger.info(f"Signed in with {provider.value}")

    def _callback_url(self, outcome: CallbackOutcome) -> str:
        if isinstance(outcome, BrowserSuccess):
            if not outcome.url:
                raise SocialAuthError(
                    FailureKind.MISSING_REDIRECT_URL,
                    "Provider did not return a redirect URL. Please try again.",
                )

            return outcome.url

        if isinstance(outcome, BrowserCancel):
            raise SocialAuthError(
                FailureKind.USER_CANCELLED, "Social authentication was cancelled."
            )

        if isinstance(outcome, BrowserDismiss):
            raise SocialAuthError(
                FailureKind.USER_DISMISSED,
                "Social authentication window was closed before completing.",
            )

        if isinstance(outcome, BrowserLocked):
            raise SocialAuthError(
                FailureKind.CONCURRENT_SESSION_LOCKED,
                "Another authentication session is already in progress. "
                "Please wait and retry.",
            )

        if isinstance(outcome, BrowserFailure):
            raise SocialAuthError(
                FailureKind.INTERACTION_FAILED, DEFAULT_ERROR_MESSAGE
            )

        assert_never(outcome)

    def _validate(self, payload: RedirectPayload, state_token: str) -> str:
        """Check the callback against the attempt and return the code."""
        if payload.error:
            raise SocialAuthError(FailureKind.PROVIDER_ERROR, payload.error)

        if not payload.code:
            raise SocialAuthError(
                FailureKind.MISSING_AUTHORIZATION_CODE,
                "Authentication code missing from provider response. "
                "Please try again.",
            )

        if state_token and payload.returned_state:
            if not _states_match(state_token, payload.returned_state):
                logger.warning("State returned by the provider does not match")
                raise SocialAuthError(
                    FailureKind.STATE_MISMATCH,
                    "Security validation failed. Please try again.",
                )

        if state_token and not payload.returned_state:
            raise SocialAuthError(
                FailureKind.STATE_MISSING_ON_RETURN,
                "Provider response missing validation state. Please try again.",
            )

        return payload.code

    def _report(self, error: SocialAuthError) -> None:
        self.last_error = error

        logger.debug(f"Social sign-in failed: {error.kind.value}")

        try:
            self.error_reporter.on_error(error.message)
        except Exception:
            logger.exception("Error reporter failed")

    def _transition(self, state: FlowState) -> None:
        logger.debug(f"Social sign-in state: {self.state.value} -> {state.value}")
        self.state = state
