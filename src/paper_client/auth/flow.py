"""Browser-side half of the OAuth2 flow: authorize URL and redirect parsing.

Both functions are pure; no network I/O happens here.

Example:
    >>> url = build_authorization_uri("app-key", "http://localhost", "token")
    >>> print(f"Visit: {url}")
    >>> response = parse_authorization_response(input("Paste redirect URL: "))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from urllib.parse import parse_qsl, urlsplit

from authlib.common.urls import add_params_to_uri

from paper_client.auth.models import AuthorizationResponse, CodeResponse, TokenResponse
from paper_client.config import AUTHORIZE_URL

logger = logging.getLogger(__name__)

RESPONSE_TYPES = ("code", "token")


def build_authorization_uri(client_id: str, redirect_uri: str, response_type: str) -> str:
    """Build the URL of the provider's authorize page.

    Args:
        client_id: App key.
        redirect_uri: Where the provider sends the user back to.
        response_type: "code" for the authorization-code grant, "token" for
            the implicit grant.

    Returns:
        Authorize URL with client_id, redirect_uri and response_type set.
    """
    return add_params_to_uri(
        AUTHORIZE_URL,
        [
            ("client_id", client_id),
            ("redirect_uri", redirect_uri),
            ("response_type", response_type),
        ],
    )


def parse_authorization_response(redirect_uri: str) -> AuthorizationResponse | None:
    """Parse the URL the provider redirected the user to.

    Parameters are read from the query string, or from the fragment when
    there is no query (the implicit grant returns them after ``#``).

    Args:
        redirect_uri: The full redirect URL.

    Returns:
        CodeResponse if a ``code`` parameter is present, else TokenResponse if
        an ``access_token`` is present, else None. An unparseable URL also
        yields None.
    """
    try:
        parts = urlsplit(redirect_uri.strip())
    except ValueError:
        return None
    if not parts.scheme:
        return None

    params = dict(parse_qsl(parts.query or parts.fragment, keep_blank_values=True))

    if "code" in params:
        return CodeResponse(code=params["code"], state=params.get("state"))

    if "access_token" in params:
        return TokenResponse(
            access_token=params["access_token"],
            token_type=params.get("token_type", "bearer"),
            uid=params.get("uid", ""),
            account_id=params.get("account_id", ""),
            team_id=params.get("team_id"),
            state=params.get("state"),
        )

    logger.debug("Redirect URL carries no authorization response")
    return None


def run_authorization_flow(
    client_id: str,
    redirect_uri: str,
    response_type: str,
    prompt: Callable[[str], str] = input,
    open_url: Callable[[str], object] | None = None,
) -> AuthorizationResponse | None:
    """Print the authorize URL and parse the redirect URL the user pastes back.

    Args:
        client_id: App key.
        redirect_uri: Registered redirect URI.
        response_type: "code" or "token".
        prompt: Reads the pasted URL; defaults to ``input``.
        open_url: Called with the authorize URL before prompting, e.g.
            ``webbrowser.open``.
    """
    url = build_authorization_uri(client_id, redirect_uri, response_type)
    print(f"Please visit the following url and authorize this app:\n{url}\n")
    if open_url is not None:
        open_url(url)
    return parse_authorization_response(prompt("Paste redirect url here: "))
