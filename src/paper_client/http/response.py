"""Response envelope decoding.

Every API call produces an *envelope*: a :class:`Response` (or
:class:`ContentResponse` for downloads) when the HTTP status is 2xx, and an
:class:`APIError` otherwise. The error payload type ``E`` is chosen per
endpoint, so each call only exposes the failures its remote counterpart
can actually produce.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

import httpx

from paper_client.http.exceptions import DecodeError, HeaderNotFoundError, TransportError
from paper_client.http.serialization import Decoder, parse_json, run_decoder

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")

API_RESULT_HEADER = "Dropbox-API-Result"


@dataclass
class Response(Generic[T]):
    """A successful JSON response."""

    body: T
    status: int
    headers: httpx.Headers = field(repr=False)


@dataclass
class ContentResponse(Generic[T]):
    """A successful download: metadata from the result header, content unread.

    The content stream holds a connection until it is drained or closed, so
    use it as a context manager or call :meth:`close`.

    Example:
        >>> with paper.download(doc_id, ExportFormat.MARKDOWN) as resp:
        ...     print(resp.body.title)
        ...     markdown = resp.text()
    """

    body: T
    content: httpx.Response = field(repr=False)
    status: int
    headers: httpx.Headers = field(repr=False)

    def read(self) -> bytes:
        """Read the whole content and release the connection."""
        try:
            return self.content.read()
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to read content: {e}") from e
        finally:
            self.content.close()

    def text(self) -> str:
        """Read the whole content as UTF-8 text."""
        return self.read().decode("utf-8")

    def iter_bytes(self, chunk_size: int | None = None) -> Iterator[bytes]:
        """Stream the content in chunks, closing the connection when done."""
        try:
            yield from self.content.iter_bytes(chunk_size)
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to read content: {e}") from e
        finally:
            self.content.close()

    def close(self) -> None:
        self.content.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


@dataclass
class APIError(Generic[E]):
    """A non-2xx response with a well-formed error body."""

    status: int
    body: str
    error: E
    user_message: str | None = None
    error_summary: str | None = None


Envelope = Union[Response[T], APIError[E]]
ContentEnvelope = Union[ContentResponse[T], APIError[E]]


def _read_text(response: httpx.Response) -> str:
    try:
        response.read()
    except httpx.HTTPError as e:
        raise TransportError(f"Failed to read response body: {e}") from e
    finally:
        response.close()
    return response.text


def build_api_error(status: int, body: str, error_decoder: Decoder[E]) -> APIError[E]:
    """Decode an error body of the shape ``{error_summary, error, user_message}``.

    Raises:
        DecodeError: If the body does not follow that shape or ``error`` does
            not decode with *error_decoder*.
    """
    data = parse_json(body, "error body")
    if not isinstance(data, dict) or "error" not in data:
        raise DecodeError(f"Malformed error body (HTTP {status}): {body!r}", body=body)

    user_message = data.get("user_message")
    # Some endpoints send user_message as {"locale": ..., "text": ...}
    if isinstance(user_message, dict):
        user_message = user_message.get("text")

    return APIError(
        status=status,
        body=body,
        error=run_decoder(error_decoder, data["error"], "error payload", raw=body),
        user_message=user_message,
        error_summary=data.get("error_summary"),
    )


def decode_response(
    response: httpx.Response,
    result_decoder: Decoder[T],
    error_decoder: Decoder[E],
) -> Envelope[T, E]:
    """Decode an RPC or upload response.

    Args:
        response: The raw HTTP response.
        result_decoder: Decoder for the success body.
        error_decoder: Decoder for the ``error`` field of an error body.

    Returns:
        Response on 2xx, APIError otherwise.

    Raises:
        DecodeError: If the body is not of the expected shape.
    """
    status = response.status_code
    text = _read_text(response)

    if response.is_success:
        data = parse_json(text, "response body")
        body = run_decoder(result_decoder, data, "response body", raw=text)
        return Response(body=body, status=status, headers=response.headers)

    logger.debug(f"HTTP {status} error body: {text}")
    return build_api_error(status, text, error_decoder)


def decode_content_response(
    response: httpx.Response,
    result_decoder: Decoder[T],
    error_decoder: Decoder[E],
) -> ContentEnvelope[T, E]:
    """Decode a download response whose metadata travels in a header.

    On success the body is left unread inside the returned ContentResponse.

    Raises:
        HeaderNotFoundError: If a 2xx response lacks the result header.
        DecodeError: If the header or error body is not of the expected shape.
    """
    status = response.status_code

    if not response.is_success:
        text = _read_text(response)
        logger.debug(f"HTTP {status} error body: {text}")
        return build_api_error(status, text, error_decoder)

    raw = response.headers.get(API_RESULT_HEADER)
    if raw is None:
        response.close()
        raise HeaderNotFoundError(API_RESULT_HEADER)

    try:
        data = parse_json(raw, f"{API_RESULT_HEADER} header")
        body = run_decoder(result_decoder, data, f"{API_RESULT_HEADER} header", raw=raw)
    except DecodeError:
        response.close()
        raise

    return ContentResponse(body=body, content=response, status=status, headers=response.headers)
