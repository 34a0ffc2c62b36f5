from social_signin._backend import BackendOAuthClient, HTTPBackendOAuthClient
from social_signin._browser import DeepLinkBrowserSession, InteractiveBrowserSession
from social_signin._config import SocialAuthConfig
from social_signin._finalizer import DefaultSessionFinalizer, Navigator, SessionFinalizer
from social_signin._flow import FlowState, OAuthFlowController
from social_signin._reporter import (
    CallbackErrorReporter,
    ErrorReporter,
    LoggingErrorReporter,
)
from social_signin._storage import MemoryTokenStore, TokenStore
from social_signin.exceptions import (
    BackendError,
    FailureKind,
    SocialAuthError,
    SocialAuthException,
)
from social_signin.models.callback_outcome import (
    BrowserCancel,
    BrowserDismiss,
    BrowserFailure,
    BrowserLocked,
    BrowserSuccess,
    CallbackOutcome,
)
from social_signin.models.oauth import AuthResponse, AuthUser, OAuthProvider

__all__ = [
    "AuthResponse",
    "AuthUser",
    "BackendError",
    "BackendOAuthClient",
    "BrowserCancel",
    "BrowserDismiss",
    "BrowserFailure",
    "BrowserLocked",
    "BrowserSuccess",
    "CallbackErrorReporter",
    "CallbackOutcome",
    "DeepLinkBrowserSession",
    "DefaultSessionFinalizer",
    "ErrorReporter",
    "FailureKind",
    "FlowState",
    "HTTPBackendOAuthClient",
    "InteractiveBrowserSession",
    "LoggingErrorReporter",
    "MemoryTokenStore",
    "Navigator",
    "OAuthFlowController",
    "OAuthProvider",
    "SessionFinalizer",
    "SocialAuthConfig",
    "SocialAuthError",
    "SocialAuthException",
    "TokenStore",
]
