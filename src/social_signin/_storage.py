import logging

from pydantic import ValidationError
from typing_extensions import Protocol

from .models.oauth import AuthUser

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "auth_access_token"
REFRESH_TOKEN_KEY = "auth_refresh_token"
USER_STORAGE_KEY = "auth_user"


class TokenStore(Protocol):
    """Secure key-value storage for credentials (keychain, keystore, ...)."""

    async def set(self, key: str, value: str) -> None: ...

    async def get(self, key: str) -> str | None: ...

    async def delete(self, key: str) -> None: ...


class MemoryTokenStore:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


async def save_tokens(
    store: TokenStore, access_token: str, refresh_token: str | None = None
) -> None:
    await store.set(ACCESS_TOKEN_KEY, access_token)

    if refresh_token:
        await store.set(REFRESH_TOKEN_KEY, refresh_token)


async def save_user(store: TokenStore, user: AuthUser) -> None:
    await store.set(USER_STORAGE_KEY, user.model_dump_json())


async def get_access_token(store: TokenStore) -> str | None:
    return await store.get(ACCESS_TOKEN_KEY)


async def get_stored_user(store: TokenStore) -> AuthUser | None:
    raw_user = await store.get(USER_STORAGE_KEY)

    if not raw_user:
        return None

    try:
        return AuthUser.model_validate_json(raw_user)
    except ValidationError as e:
        logger.error("Invalid stored user", exc_info=e)
        return None


async def clear_tokens(store: TokenStore) -> None:
    for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_STORAGE_KEY):
        await store.delete(key)
