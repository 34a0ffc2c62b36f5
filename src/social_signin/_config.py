from __future__ import annotations

import os
from dataclasses import dataclass

from .exceptions import SocialAuthException


@dataclass
class SocialAuthConfig:
    """Client-side configuration for the social sign-in flow."""

    # Must match the URL scheme the app registers for deep links
    redirect_scheme: str = "photoboothapp"
    redirect_path: str = "auth/callback"

    base_url: str | None = None

    authorize_path: str = "/api/v1/auth/authorize"
    callback_path: str = "/api/v1/auth/callback"

    # Where the default finalizer navigates after a successful sign-in
    post_login_route: str = "/(tabs)"

    # Seconds, applied to backend HTTP calls
    timeout: float = 30.0

    @property
    def redirect_uri(self) -> str:
        return f"{self.redirect_scheme}://{self.redirect_path}"

    def api_base_url(self) -> str:
        if not self.base_url:
            raise SocialAuthException(
                "configuration_error",
                "API base URL is not configured. Set SOCIAL_SIGNIN_API_BASE_URL.",
            )

        return self.base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> SocialAuthConfig:
        defaults = cls()

        return cls(
            redirect_scheme=os.environ.get(
                "SOCIAL_SIGNIN_REDIRECT_SCHEME", defaults.redirect_scheme
            ),
            redirect_path=os.environ.get(
                "SOCIAL_SIGNIN_REDIRECT_PATH", defaults.redirect_path
            ),
            base_url=os.environ.get("SOCIAL_SIGNIN_API_BASE_URL") or None,
            post_login_route=os.environ.get(
                "SOCIAL_SIGNIN_POST_LOGIN_ROUTE", defaults.post_login_route
            ),
        )
