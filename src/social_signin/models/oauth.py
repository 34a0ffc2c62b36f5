from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OAuthProvider(str, Enum):
    GOOGLE = "GoogleOAuth"
    APPLE = "AppleOAuth"


class OAuthRequest(BaseModel):
    provider: OAuthProvider
    redirect_uri: str
    state: str


class OAuthResponse(BaseModel):
    authorization_url: str | None = Field(
        None, description="Provider consent page the user should be sent to"
    )


class OAuthCallbackRequest(BaseModel):
    code: str
    state: str | None = None


class AuthUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Any = None
    email: str | None = None


class AuthResponse(BaseModel):
    access_token: str | None = Field(None, description="The issued access token")
    refresh_token: str | None = Field(
        None, description="Token used to obtain new access tokens"
    )
    token_type: str | None = Field(
        None, description="The type of token, usually 'Bearer'"
    )
    user: AuthUser | None = None

    def is_complete(self) -> bool:
        return bool(
            self.access_token
            and self.refresh_token
            and self.user is not None
            and self.user.id is not None
        )
