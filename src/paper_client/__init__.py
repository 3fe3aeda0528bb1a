"""Typed client for the Dropbox Paper HTTP API."""

from paper_client.client import Dropbox
from paper_client.http.exceptions import (
    ContractViolationError,
    DecodeError,
    HeaderNotFoundError,
    OperationError,
    PaperClientError,
    SerializationError,
    TransportError,
)
from paper_client.paper.client import Paper

__version__ = "0.1.0"

__all__ = [
    "ContractViolationError",
    "DecodeError",
    "Dropbox",
    "HeaderNotFoundError",
    "OperationError",
    "Paper",
    "PaperClientError",
    "SerializationError",
    "TransportError",
]
