"""Authentication exceptions."""

from paper_client.http.exceptions import OperationError, PaperClientError


class AuthError(PaperClientError):
    """Base exception for authentication errors."""

    pass


class CredentialsNotFoundError(AuthError):
    """Raised when no access token was given or found in the environment."""

    def __init__(self, env_var: str):
        self.env_var = env_var
        super().__init__(
            f"No access token provided. Pass access_token or set the {env_var} "
            "environment variable."
        )


class TokenExchangeError(AuthError):
    """Raised when the token endpoint answers with an OAuth error."""

    def __init__(self, error: str | None, description: str | None = None):
        self.error = error
        self.description = description
        message = f"Token exchange failed: {error}"
        if description:
            message += f" ({description})"
        super().__init__(message)


class TokenFromOAuth1FailedError(OperationError):
    """token/from_oauth1 returned a TokenFromOAuth1Error."""

    operation = "OAuth1 token conversion"
