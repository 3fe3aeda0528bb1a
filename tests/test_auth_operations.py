"""Tests for token exchange, OAuth1 conversion and revocation."""

import base64
from urllib.parse import parse_qs

import pytest

from paper_client import Dropbox
from paper_client.auth import (
    AuthOperations,
    TokenExchangeError,
    TokenFromOAuth1Error,
    TokenFromOAuth1FailedError,
    TokenResponse,
)
from paper_client.http import ContractViolationError, DecodeError, TransportError

TOKEN_BODY = {
    "access_token": "sl.abc",
    "token_type": "bearer",
    "uid": "12345",
    "account_id": "dbid:AAH4f99T0taONIb-OurWxbNQ6ywGRopQngc",
}


@pytest.fixture
def auth(api):
    with AuthOperations("app-key", "app-secret", "http://localhost", transport=api.transport) as ops:
        yield ops


class TestFetchToken:
    """Test exchanging an authorization code."""

    def test_posts_form_body(self, api, auth):
        """Should send a form-encoded authorization_code grant with client credentials."""
        api.add(200, TOKEN_BODY)

        auth.fetch_token("the-code")

        request = api.last_request
        assert request.method == "POST"
        assert str(request.url) == "https://api.dropboxapi.com/oauth2/token"
        assert request.headers["Content-Type"].startswith("application/x-www-form-urlencoded")
        form = parse_qs(request.content.decode())
        assert form["grant_type"] == ["authorization_code"]
        assert form["code"] == ["the-code"]
        assert form["redirect_uri"] == ["http://localhost"]
        assert form["client_id"] == ["app-key"]
        assert form["client_secret"] == ["app-secret"]

    def test_returns_token_response(self, api, auth):
        """Should decode the token body."""
        api.add(200, TOKEN_BODY)

        token = auth.fetch_token("the-code")

        assert token == TokenResponse(
            access_token="sl.abc",
            token_type="bearer",
            uid="12345",
            account_id="dbid:AAH4f99T0taONIb-OurWxbNQ6ywGRopQngc",
        )

    def test_oauth_error(self, api, auth):
        """Should raise TokenExchangeError for an OAuth error body."""
        api.add(400, {"error": "invalid_grant", "error_description": "code doesn't exist"})

        with pytest.raises(TokenExchangeError, match="invalid_grant") as exc_info:
            auth.fetch_token("bad-code")

        assert exc_info.value.error == "invalid_grant"
        assert exc_info.value.description == "code doesn't exist"

    def test_non_json_body(self, api, auth):
        """Should raise DecodeError when the body is not JSON."""
        api.add(200, content=b"<html>oops</html>")

        with pytest.raises(DecodeError):
            auth.fetch_token("the-code")

    def test_missing_access_token(self, api, auth):
        """Should raise DecodeError when required fields are missing."""
        api.add(200, {"token_type": "bearer"})

        with pytest.raises(DecodeError):
            auth.fetch_token("the-code")

    def test_server_error(self, api, auth):
        """Should raise TransportError on a 5xx."""
        api.add(503, content=b"unavailable")

        with pytest.raises(TransportError):
            auth.fetch_token("the-code")


class TestTokenFromOAuth1:
    """Test the OAuth1 to OAuth2 token conversion."""

    def test_success(self, api, auth):
        """Should post the token pair with basic auth and decode the result."""
        api.add(200, {"oauth2_token": "new-token"})

        response = auth.token_from_oauth1("t1", "s1")

        assert response.body.oauth2_token == "new-token"
        request = api.last_request
        assert str(request.url) == "https://api.dropboxapi.com/2/auth/token/from_oauth1"
        expected = base64.b64encode(b"app-key:app-secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert api.last_json() == {"oauth1_token": "t1", "oauth1_token_secret": "s1"}

    def test_typed_error(self, api, auth):
        """Should raise with the decoded TokenFromOAuth1Error."""
        api.add_error(400, {".tag": "app_id_mismatch"})

        with pytest.raises(TokenFromOAuth1FailedError) as exc_info:
            auth.token_from_oauth1("t1", "s1")

        assert exc_info.value.error is TokenFromOAuth1Error.APP_ID_MISMATCH
        assert exc_info.value.status == 400


class TestRevokeToken:
    """Test token revocation on an authenticated client."""

    def test_revoke(self, api):
        """Should send null to the revoke endpoint with the bearer token."""
        api.add(200, content=b"")
        dbx = Dropbox("tok", http_client=api.client())

        response = dbx.revoke_token()

        assert response.body is None
        request = api.last_request
        assert str(request.url) == "https://api.dropboxapi.com/2/auth/token/revoke"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.content == b"null"

    def test_revoke_from_paper_client(self, api):
        """Should be available on namespace clients too."""
        api.add(200, content=b"null")
        dbx = Dropbox("tok", http_client=api.client())

        dbx.paper.revoke_token()

        assert str(api.last_request.url).endswith("/2/auth/token/revoke")

    def test_typed_error_is_contract_violation(self, api):
        """Should raise ContractViolationError if the endpoint returns a typed error."""
        api.add_error(409, None)
        dbx = Dropbox("tok", http_client=api.client())

        with pytest.raises(ContractViolationError) as exc_info:
            dbx.revoke_token()

        assert exc_info.value.api_error.status == 409
