"""OAuth2 authorization flow and token operations."""

from paper_client.auth.exceptions import (
    AuthError,
    CredentialsNotFoundError,
    TokenExchangeError,
    TokenFromOAuth1FailedError,
)
from paper_client.auth.flow import (
    build_authorization_uri,
    parse_authorization_response,
    run_authorization_flow,
)
from paper_client.auth.models import (
    AuthorizationResponse,
    CodeResponse,
    TokenFromOAuth1Error,
    TokenFromOAuth1Result,
    TokenResponse,
)
from paper_client.auth.operations import AuthOperations, RevocableToken

__all__ = [
    "AuthError",
    "AuthOperations",
    "AuthorizationResponse",
    "CodeResponse",
    "CredentialsNotFoundError",
    "RevocableToken",
    "TokenExchangeError",
    "TokenFromOAuth1Error",
    "TokenFromOAuth1FailedError",
    "TokenFromOAuth1Result",
    "TokenResponse",
    "build_authorization_uri",
    "parse_authorization_response",
    "run_authorization_flow",
]
