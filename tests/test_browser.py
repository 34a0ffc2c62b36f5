import asyncio

import pytest

from social_signin import (
    BrowserCancel,
    BrowserDismiss,
    BrowserFailure,
    BrowserLocked,
    BrowserSuccess,
    DeepLinkBrowserSession,
)

pytestmark = pytest.mark.asyncio

AUTHORIZATION_URL = "https://accounts.example.com/o/oauth2/auth?state=test_state"
REDIRECT_URI = "photoboothapp://auth/callback"


class RecordingLauncher:
    def __init__(self, result: bool = True):
        self.urls: list[str] = []
        self.result = result

    def __call__(self, url: str) -> bool:
        self.urls.append(url)
        return self.result


async def _open_in_background(
    session: DeepLinkBrowserSession,
) -> asyncio.Task:
    task = asyncio.create_task(session.open(AUTHORIZATION_URL, REDIRECT_URI))
    await asyncio.sleep(0)
    return task


async def test_redirect_completes_the_session():
    launcher = RecordingLauncher()
    session = DeepLinkBrowserSession(launcher=launcher)

    task = await _open_in_background(session)

    assert launcher.urls == [AUTHORIZATION_URL]
    assert session.is_open

    callback = f"{REDIRECT_URI}?code=abc123&state=test_state"

    assert session.handle_redirect(callback) is True
    assert await task == BrowserSuccess(url=callback)
    assert not session.is_open


async def test_unrelated_deep_links_are_ignored():
    session = DeepLinkBrowserSession(launcher=RecordingLauncher())

    task = await _open_in_background(session)

    assert session.handle_redirect("photoboothapp://payments/success") is False
    assert not task.done()

    session.dismiss()

    assert await task == BrowserDismiss()


async def test_redirect_without_open_session_is_ignored():
    session = DeepLinkBrowserSession(launcher=RecordingLauncher())

    assert session.handle_redirect(f"{REDIRECT_URI}?code=abc123") is False
    assert session.cancel() is False


async def test_cancel():
    session = DeepLinkBrowserSession(launcher=RecordingLauncher())

    task = await _open_in_background(session)

    assert session.cancel() is True
    assert await task == BrowserCancel()


async def test_only_the_first_resolution_counts():
    session = DeepLinkBrowserSession(launcher=RecordingLauncher())

    task = await _open_in_background(session)

    assert session.cancel() is True
    assert session.dismiss() is False
    assert await task == BrowserCancel()


async def test_second_open_is_locked():
    session = DeepLinkBrowserSession(launcher=RecordingLauncher())

    task = await _open_in_background(session)

    assert await session.open(AUTHORIZATION_URL, REDIRECT_URI) == BrowserLocked()

    session.cancel()
    await task


async def test_launcher_refusing_to_open_is_a_failure():
    session = DeepLinkBrowserSession(launcher=RecordingLauncher(result=False))

    outcome = await session.open(AUTHORIZATION_URL, REDIRECT_URI)

    assert isinstance(outcome, BrowserFailure)
    assert not session.is_open


async def test_launcher_error_is_a_failure():
    def launcher(url: str) -> bool:
        raise OSError("No browser available")

    session = DeepLinkBrowserSession(launcher=launcher)

    outcome = await session.open(AUTHORIZATION_URL, REDIRECT_URI)

    assert outcome == BrowserFailure(reason="No browser available")
    assert not session.is_open
