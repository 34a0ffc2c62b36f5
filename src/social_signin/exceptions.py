from enum import Enum


class SocialAuthException(Exception):
    def __init__(self, error: str, error_description: str | None = None) -> None:
        super().__init__(error_description or error)
        self.error = error
        self.error_description = error_description


class FailureKind(str, Enum):
    PROVIDER_INITIATION_FAILED = "provider_initiation_failed"
    USER_CANCELLED = "user_cancelled"
    USER_DISMISSED = "user_dismissed"
    CONCURRENT_SESSION_LOCKED = "concurrent_session_locked"
    INTERACTION_FAILED = "interaction_failed"
    MISSING_REDIRECT_URL = "missing_redirect_url"
    INVALID_REDIRECT_URL = "invalid_redirect_url"
    PROVIDER_ERROR = "provider_error"
    MISSING_AUTHORIZATION_CODE = "missing_authorization_code"
    STATE_MISMATCH = "state_mismatch"
    STATE_MISSING_ON_RETURN = "state_missing_on_return"
    TOKEN_EXCHANGE_FAILED = "token_exchange_failed"
    INCOMPLETE_TOKEN_RESPONSE = "incomplete_token_response"
    FINALIZATION_FAILED = "finalization_failed"


class SocialAuthError(SocialAuthException):
    """A terminal failure of a sign-in attempt.

    `message` is meant to be shown to the user as is.
    """

    def __init__(self, kind: FailureKind, message: str) -> None:
        super().__init__(kind.value, message)
        self.kind = kind
        self.message = message


class BackendError(SocialAuthException):
    """Raised by the backend client; `status_code` is 0 for network failures."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__("backend_error", message)
        self.status_code = status_code
        self.message = message
