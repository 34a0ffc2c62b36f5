import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from typing_extensions import Protocol

from ._config import SocialAuthConfig
from .exceptions import BackendError
from .models.oauth import (
    AuthResponse,
    OAuthCallbackRequest,
    OAuthProvider,
    OAuthRequest,
    OAuthResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BackendOAuthClient(Protocol):
    """The backend endpoints that mint authorization URLs and exchange codes."""

    async def initiate(
        self, provider: OAuthProvider, redirect_uri: str, state: str
    ) -> OAuthResponse: ...

    async def exchange(self, code: str, state: str | None = None) -> AuthResponse: ...


def _format_validation_errors(errors: list[Any]) -> str:
    if not errors:
        return "Validation error occurred"

    messages = []

    for error in errors:
        if not isinstance(error, dict):
            messages.append(str(error))
            continue

        loc = error.get("loc") or ["field"]
        field = str(loc[-1]).replace("_", " ").strip()
        field_name = " ".join(word.capitalize() for word in field.split(" "))

        messages.append(f"{field_name}: {error.get('msg') or 'Invalid value'}")

    return ". ".join(messages)


def extract_error_message(response: httpx.Response) -> str:
    """Turn an error response from the backend into a user-facing message.

    Understands FastAPI style `detail` bodies (including validation error
    lists), `message` bodies and HTML error pages from proxies.
    """
    fallback = response.reason_phrase or "An error occurred"
    text = response.text.strip()

    if not text:
        return fallback

    if text.startswith("<!DOCTYPE") or text.startswith("<html"):
        if "ngrok" in text and "offline" in text:
            return "Server is offline. Please check your connection."

        if "502" in text or "Bad Gateway" in text:
            return "Server is temporarily unavailable. Please try again later."

        if "503" in text or "Service Unavailable" in text:
            return "Service is temporarily unavailable. Please try again later."

        return "Server is unreachable. Please check your connection."

    try:
        body = response.json()
    except ValueError:
        return fallback

    if not isinstance(body, dict):
        return text

    value = body.get("detail") or body.get("message") or text

    if isinstance(value, list):
        return _format_validation_errors(value)

    if isinstance(value, dict):
        for key in ("message", "error"):
            if isinstance(value.get(key), str):
                return value[key]

        return str(value)

    return str(value)


class HTTPBackendOAuthClient:
    def __init__(
        self,
        config: SocialAuthConfig,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self.client = client

    async def initiate(
        self, provider: OAuthProvider, redirect_uri: str, state: str
    ) -> OAuthResponse:
        data = OAuthRequest(provider=provider, redirect_uri=redirect_uri, state=state)

        response = await self._post(self.config.authorize_path, data)

        return self._parse(response, OAuthResponse)

    async def exchange(self, code: str, state: str | None = None) -> AuthResponse:
        data = OAuthCallbackRequest(code=code, state=state)

        response = await self._post(self.config.callback_path, data)

        return self._parse(response, AuthResponse)

    async def _post(self, path: str, data: BaseModel) -> httpx.Response:
        url = f"{self.config.api_base_url()}{path}"

        try:
            if self.client is not None:
                response = await self._send(self.client, url, data)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    response = await self._send(client, url, data)
        except httpx.RequestError as e:
            logger.error(f"Network error calling {path}: {type(e).__name__}")

            raise BackendError(0, f"Network error: {e}") from e

        if response.is_success:
            return response

        message = extract_error_message(response)

        if response.status_code >= 500:
            logger.error(f"Server error calling {path}: {response.status_code}")
        else:
            logger.warning(f"Request to {path} failed: {response.status_code}")

        raise BackendError(response.status_code, message)

    async def _send(
        self, client: httpx.AsyncClient, url: str, data: BaseModel
    ) -> httpx.Response:
        return await client.post(
            url,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            content=data.model_dump_json(),
        )

    def _parse(self, response: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate_json(response.text)
        except ValidationError as e:
            logger.error(f"Invalid response from backend: {e.error_count()} errors")

            raise BackendError(
                response.status_code, "Received an invalid response from the server."
            ) from e
