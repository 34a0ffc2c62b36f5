import pytest

from social_signin import MemoryTokenStore, OAuthFlowController, SocialAuthConfig

from .fakes import (
    FakeBackend,
    FakeBrowserSession,
    RecordingErrorReporter,
    RecordingFinalizer,
)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def browser() -> FakeBrowserSession:
    return FakeBrowserSession()


@pytest.fixture
def finalizer() -> RecordingFinalizer:
    return RecordingFinalizer()


@pytest.fixture
def error_reporter() -> RecordingErrorReporter:
    return RecordingErrorReporter()


@pytest.fixture
def config() -> SocialAuthConfig:
    return SocialAuthConfig(base_url="https://api.example.com")


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def controller(
    backend: FakeBackend,
    browser: FakeBrowserSession,
    finalizer: RecordingFinalizer,
    error_reporter: RecordingErrorReporter,
    config: SocialAuthConfig,
) -> OAuthFlowController:
    return OAuthFlowController(
        backend=backend,
        browser=browser,
        finalizer=finalizer,
        error_reporter=error_reporter,
        config=config,
    )
