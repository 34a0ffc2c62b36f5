from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class BrowserSuccess(BaseModel):
    """The browser was redirected to the expected callback prefix."""

    type: Literal["success"] = "success"
    url: str | None = None


class BrowserCancel(BaseModel):
    """The user explicitly cancelled the session."""

    type: Literal["cancel"] = "cancel"


class BrowserDismiss(BaseModel):
    """The browser was closed before reaching the callback."""

    type: Literal["dismiss"] = "dismiss"


class BrowserLocked(BaseModel):
    """Another authentication session is already open."""

    type: Literal["locked"] = "locked"


class BrowserFailure(BaseModel):
    type: Literal["failure"] = "failure"
    reason: str | None = None


# Terminal result of an interactive browser session
CallbackOutcome = Annotated[
    Union[BrowserSuccess, BrowserCancel, BrowserDismiss, BrowserLocked, BrowserFailure],
    Field(discriminator="type"),
]
