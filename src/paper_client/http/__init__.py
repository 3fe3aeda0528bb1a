"""Transport, response envelope and error mapping for the Dropbox HTTP API."""

from paper_client.http.exceptions import (
    ContractViolationError,
    DecodeError,
    HeaderNotFoundError,
    OperationError,
    PaperClientError,
    SerializationError,
    TransportError,
)
from paper_client.http.mapping import unwrap, unwrap_infallible
from paper_client.http.response import (
    API_RESULT_HEADER,
    APIError,
    ContentEnvelope,
    ContentResponse,
    Envelope,
    Response,
)
from paper_client.http.transport import API_ARG_HEADER, AuthenticatedClient

__all__ = [
    "API_ARG_HEADER",
    "API_RESULT_HEADER",
    "APIError",
    "AuthenticatedClient",
    "ContentEnvelope",
    "ContentResponse",
    "ContractViolationError",
    "DecodeError",
    "Envelope",
    "HeaderNotFoundError",
    "OperationError",
    "PaperClientError",
    "Response",
    "SerializationError",
    "TransportError",
    "unwrap",
    "unwrap_infallible",
]
