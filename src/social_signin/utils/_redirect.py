from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..exceptions import FailureKind, SocialAuthError

_url_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class RedirectPayload:
    code: str | None = None
    error: str | None = None
    returned_state: str | None = None


def _first(params: dict[str, list[str]], name: str) -> str | None:
    values = params.get(name)

    if not values or not values[0]:
        return None

    return values[0]


def parse_redirect(url: str) -> RedirectPayload:
    """
    Extract the authorization response parameters from a callback URL.

    Only the query string is read. Empty values are treated as absent and
    unknown parameters are ignored.

    Raises:
        SocialAuthError: If the URL can't be parsed.
    """
    try:
        _url_adapter.validate_python(url)
        query = urlsplit(url).query
    except (ValidationError, ValueError) as e:
        raise SocialAuthError(
            FailureKind.INVALID_REDIRECT_URL,
            "Received an invalid redirect URL. Please try again.",
        ) from e

    params = parse_qs(query, keep_blank_values=True)

    return RedirectPayload(
        code=_first(params, "code"),
        error=_first(params, "error") or _first(params, "error_description"),
        returned_state=_first(params, "state"),
    )
