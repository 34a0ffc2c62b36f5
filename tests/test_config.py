import pytest

from social_signin import SocialAuthConfig, SocialAuthException


def test_default_redirect_uri():
    assert SocialAuthConfig().redirect_uri == "photoboothapp://auth/callback"


def test_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SOCIAL_SIGNIN_REDIRECT_SCHEME", "myapp")
    monkeypatch.setenv("SOCIAL_SIGNIN_REDIRECT_PATH", "oauth/return")
    monkeypatch.setenv("SOCIAL_SIGNIN_API_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("SOCIAL_SIGNIN_POST_LOGIN_ROUTE", "/home")

    config = SocialAuthConfig.from_env()

    assert config.redirect_uri == "myapp://oauth/return"
    assert config.api_base_url() == "https://api.example.com"
    assert config.post_login_route == "/home"


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "SOCIAL_SIGNIN_REDIRECT_SCHEME",
        "SOCIAL_SIGNIN_REDIRECT_PATH",
        "SOCIAL_SIGNIN_API_BASE_URL",
        "SOCIAL_SIGNIN_POST_LOGIN_ROUTE",
    ):
        monkeypatch.delenv(name, raising=False)

    config = SocialAuthConfig.from_env()

    assert config == SocialAuthConfig()


def test_api_base_url_is_required():
    with pytest.raises(SocialAuthException) as exc_info:
        SocialAuthConfig().api_base_url()

    assert exc_info.value.error == "configuration_error"
