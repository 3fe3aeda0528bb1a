"""Types for the OAuth2 authorization flow and auth endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from paper_client.http.serialization import TaggedEnum


@dataclass(frozen=True)
class CodeResponse:
    """Authorization-code grant: exchange ``code`` with AuthOperations.fetch_token."""

    code: str
    state: str | None = None


@dataclass(frozen=True)
class TokenResponse:
    """Implicit grant, or the result of exchanging an authorization code."""

    access_token: str
    token_type: str
    uid: str
    account_id: str
    team_id: str | None = None
    state: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenResponse:
        """Create from a token endpoint response dict."""
        return cls(
            access_token=data["access_token"],
            token_type=data["token_type"],
            uid=data.get("uid") or "",
            account_id=data.get("account_id") or "",
            team_id=data.get("team_id"),
            state=data.get("state"),
        )


AuthorizationResponse = Union[CodeResponse, TokenResponse]


@dataclass(frozen=True)
class TokenFromOAuth1Arg:
    oauth1_token: str
    oauth1_token_secret: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenFromOAuth1Arg:
        return cls(
            oauth1_token=data["oauth1_token"],
            oauth1_token_secret=data["oauth1_token_secret"],
        )


@dataclass(frozen=True)
class TokenFromOAuth1Result:
    oauth2_token: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenFromOAuth1Result:
        return cls(oauth2_token=data["oauth2_token"])


class TokenFromOAuth1Error(TaggedEnum):
    """Why an OAuth1 token could not be converted."""

    INVALID_OAUTH1_TOKEN_INFO = "invalid_oauth1_token_info"
    APP_ID_MISMATCH = "app_id_mismatch"
