"""Lift decoded API errors into operation-specific exceptions."""

from __future__ import annotations

from typing import Any, TypeVar, Union

from paper_client.http.exceptions import ContractViolationError, OperationError
from paper_client.http.response import APIError, ContentResponse, Response

R = TypeVar("R", bound=Union[Response[Any], ContentResponse[Any]])


def unwrap(envelope: R | APIError[Any], error_cls: type[OperationError]) -> R:
    """Return the successful response or raise ``error_cls`` wrapping the API error.

    The typed error value is preserved as-is, nested unions included, on the
    raised exception's ``api_error``.
    """
    if isinstance(envelope, APIError):
        raise error_cls(envelope)
    return envelope


def unwrap_infallible(envelope: R | APIError[Any], endpoint: str) -> R:
    """Return the successful response of an endpoint contracted to never fail.

    Raises:
        ContractViolationError: If the remote service returned a typed error anyway.
    """
    if isinstance(envelope, APIError):
        raise ContractViolationError(endpoint, envelope)
    return envelope
