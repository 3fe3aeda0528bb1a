"""Server-side half of the OAuth2 flow and token management endpoints.

AuthOperations authenticates as the app (client id and secret); token
revocation is available on every client holding an access token through
the RevocableToken mixin.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import OAuth2Client

from paper_client.auth.exceptions import TokenExchangeError, TokenFromOAuth1FailedError
from paper_client.auth.models import (
    TokenFromOAuth1Arg,
    TokenFromOAuth1Error,
    TokenFromOAuth1Result,
    TokenResponse,
)
from paper_client.config import AUTH_BASE_URL, TOKEN_URL
from paper_client.http.exceptions import DecodeError, TransportError
from paper_client.http.mapping import unwrap, unwrap_infallible
from paper_client.http.response import Response, decode_response
from paper_client.http.serialization import encode_json, run_decoder, void
from paper_client.http.transport import JSON_CONTENT_TYPE, send_request

logger = logging.getLogger(__name__)


class AuthOperations:
    """App-authenticated OAuth2 operations.

    Example:
        >>> auth = AuthOperations("app-key", "app-secret", "http://localhost")
        >>> token = auth.fetch_token(code)
        >>> dbx = Dropbox(token.access_token)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize auth operations.

        Args:
            client_id: App key.
            client_secret: App secret.
            redirect_uri: Redirect URI used when the authorization code was issued.
            transport: Optional httpx transport shared by the underlying clients.
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        self.session = OAuth2Client(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            token_endpoint_auth_method="client_secret_post",
            transport=transport,
        )
        self._client = httpx.Client(transport=transport)

    def fetch_token(self, code: str) -> TokenResponse:
        """Exchange an authorization code for an access token.

        Args:
            code: The ``code`` from a CodeResponse.

        Returns:
            TokenResponse with the access token and account identifiers.

        Raises:
            TransportError: If the request fails.
            DecodeError: If the response is not a token object.
            TokenExchangeError: If the endpoint answers with an OAuth error.
        """
        try:
            token = self.session.fetch_token(
                TOKEN_URL,
                code=code,
                grant_type="authorization_code",
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Token request failed: {e}") from e
        except AuthlibBaseError as e:
            raise TokenExchangeError(e.error, e.description) from e
        except ValueError as e:
            raise DecodeError(f"Token response is not JSON: {e}") from e

        logger.info(f"Fetched access token for account {token.get('account_id')}")
        return run_decoder(TokenResponse.from_dict, dict(token), "token response")

    def token_from_oauth1(
        self, oauth1_token: str, oauth1_token_secret: str
    ) -> Response[TokenFromOAuth1Result]:
        """Create an OAuth2 access token from an OAuth1 token pair.

        Raises:
            TokenFromOAuth1FailedError: If the pair is invalid or belongs to another app.
        """
        arg = TokenFromOAuth1Arg(oauth1_token=oauth1_token, oauth1_token_secret=oauth1_token_secret)
        response = send_request(
            self._client,
            AUTH_BASE_URL + "from_oauth1",
            encode_json(arg).encode("utf-8"),
            {"Content-Type": JSON_CONTENT_TYPE},
            auth=(self.client_id, self.client_secret),
        )
        envelope = decode_response(
            response, TokenFromOAuth1Result.from_dict, TokenFromOAuth1Error.from_dict
        )
        return unwrap(envelope, TokenFromOAuth1FailedError)

    def close(self):
        """Close the HTTP clients."""
        self.session.close()
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class RevocableToken:
    """Token revocation for clients that hold an access token.

    Mixed into AuthenticatedClient subclasses; relies on their ``rpc_request``.
    """

    rpc_request: Any

    def revoke_token(self) -> Response[None]:
        """Disable the access token this client uses.

        Raises:
            ContractViolationError: If the endpoint returns a typed error body.
        """
        envelope = self.rpc_request(AUTH_BASE_URL + "revoke", None, void, void)
        response = unwrap_infallible(envelope, "auth/token/revoke")
        logger.info("Access token revoked")
        return response
