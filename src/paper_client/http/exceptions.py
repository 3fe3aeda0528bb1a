"""HTTP layer exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from paper_client.http.response import APIError


class PaperClientError(Exception):
    """Base exception for all paper-client errors."""

    pass


class TransportError(PaperClientError):
    """Raised when a request cannot be sent or its response cannot be received."""

    pass


class SerializationError(PaperClientError):
    """Raised when a request argument cannot be encoded as JSON.

    Always raised before any network I/O takes place.
    """

    pass


class DecodeError(PaperClientError):
    """Raised when a response body or header does not have the expected shape."""

    def __init__(self, message: str, body: str | None = None):
        self.body = body
        super().__init__(message)


class HeaderNotFoundError(PaperClientError):
    """Raised when a download response lacks its metadata header."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Couldn't find header: {header}")


class ContractViolationError(PaperClientError):
    """Raised when an endpoint documented to never fail returns a typed error."""

    def __init__(self, endpoint: str, api_error: APIError[Any]):
        self.endpoint = endpoint
        self.api_error = api_error
        super().__init__(
            f"{endpoint} should not return errors, got HTTP {api_error.status}: "
            f"{api_error.body}"
        )


class OperationError(PaperClientError):
    """A typed API error lifted into an operation-specific exception.

    Subclasses name the operation that failed; the decoded remote error is
    kept untouched on ``api_error`` for inspection.
    """

    operation = "API call"

    def __init__(self, api_error: APIError[Any]):
        self.api_error = api_error
        summary = api_error.error_summary or api_error.body
        super().__init__(f"{self.operation} failed (HTTP {api_error.status}): {summary}")

    @property
    def error(self) -> Any:
        """The endpoint-specific error value."""
        return self.api_error.error

    @property
    def status(self) -> int:
        return self.api_error.status

    @property
    def user_message(self) -> str | None:
        return self.api_error.user_message
