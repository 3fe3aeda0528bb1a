"""Authenticated request issuance.

Three request shapes are supported, all sent as POST:

- RPC: JSON argument in the body, JSON result in the body.
- Content upload: raw bytes in the body, JSON argument in the
  ``Dropbox-API-Arg`` header, JSON result in the body.
- Content download: JSON argument in the ``Dropbox-API-Arg`` header, raw
  bytes in the body, JSON result in the ``Dropbox-API-Result`` header.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

import httpx

from paper_client.http.exceptions import TransportError
from paper_client.http.response import (
    ContentEnvelope,
    Envelope,
    decode_content_response,
    decode_response,
)
from paper_client.http.serialization import Decoder, encode_json

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")

API_ARG_HEADER = "Dropbox-API-Arg"
JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"

UploadContent = bytes | str | Iterable[bytes]


def send_request(
    client: httpx.Client,
    url: str | httpx.URL,
    content: bytes | Iterable[bytes],
    headers: dict[str, str],
    stream: bool = False,
    auth: Any = None,
) -> httpx.Response:
    """POST a request, turning every httpx failure into a TransportError.

    Args:
        client: The httpx client to send with.
        url: Absolute endpoint URL.
        content: Request body.
        headers: Request headers.
        stream: Leave the response body unread.
        auth: Optional httpx auth (e.g. a ``(user, password)`` tuple).

    Returns:
        The raw HTTP response, whatever its status.
    """
    try:
        request = client.build_request("POST", url, content=content, headers=headers)
        if auth is not None:
            return client.send(request, stream=stream, auth=auth)
        return client.send(request, stream=stream)
    except httpx.InvalidURL as e:
        raise TransportError(f"Invalid URL {url}: {e}") from e
    except httpx.HTTPError as e:
        raise TransportError(f"Request to {url} failed: {e}") from e


class AuthenticatedClient:
    """Base for clients that call the API with a bearer token.

    The token is immutable; sub-clients receive the root client's token and
    httpx client rather than creating their own. An httpx client passed in
    stays owned by the caller and is left open by :meth:`close`.
    """

    def __init__(self, access_token: str, http_client: httpx.Client | None = None):
        """Initialize the client.

        Args:
            access_token: OAuth2 bearer token.
            http_client: httpx client to send requests with. A default client
                is created when omitted.
        """
        self._access_token = access_token
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client()

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def http_client(self) -> httpx.Client:
        return self._client

    def close(self):
        """Close the HTTP client if this client created it."""
        if self._owns_client:
            self._client.close()
            logger.debug(f"Closed {type(self).__name__} client")

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def _get_headers(self, **extra: str) -> dict[str, str]:
        """Get headers for API requests."""
        return {"Authorization": f"Bearer {self._access_token}", **extra}

    def rpc_request(
        self,
        url: str | httpx.URL,
        arg: Any,
        result_decoder: Decoder[T],
        error_decoder: Decoder[E],
    ) -> Envelope[T, E]:
        """Make a JSON-in/JSON-out call.

        Args:
            url: Endpoint URL.
            arg: Argument object; ``None`` is sent as JSON ``null``.
            result_decoder: Decoder for the success body.
            error_decoder: Decoder for the endpoint's error union.

        Raises:
            SerializationError: If ``arg`` cannot be encoded (no request is sent).
            TransportError: If the request fails.
            DecodeError: If the response does not have the expected shape.
        """
        body = encode_json(arg)
        headers = self._get_headers(**{"Content-Type": JSON_CONTENT_TYPE})

        logger.debug(f"RPC {url}")
        response = send_request(self._client, url, body.encode("utf-8"), headers)
        return decode_response(response, result_decoder, error_decoder)

    def content_upload_request(
        self,
        url: str | httpx.URL,
        arg: Any,
        content: UploadContent,
        result_decoder: Decoder[T],
        error_decoder: Decoder[E],
    ) -> Envelope[T, E]:
        """Upload raw content with the argument carried in the API-Arg header.

        ``str`` content is sent UTF-8 encoded.
        """
        headers = self._get_headers(
            **{
                "Content-Type": OCTET_STREAM_CONTENT_TYPE,
                API_ARG_HEADER: encode_json(arg),
            }
        )
        if isinstance(content, str):
            content = content.encode("utf-8")

        logger.debug(f"Upload {url}")
        response = send_request(self._client, url, content, headers)
        return decode_response(response, result_decoder, error_decoder)

    def content_download_request(
        self,
        url: str | httpx.URL,
        arg: Any,
        result_decoder: Decoder[T],
        error_decoder: Decoder[E],
    ) -> ContentEnvelope[T, E]:
        """Download content; the result metadata comes back in a response header.

        The returned ContentResponse holds the unread body stream, which the
        caller must drain or close.
        """
        headers = self._get_headers(**{API_ARG_HEADER: encode_json(arg)})

        logger.debug(f"Download {url}")
        response = send_request(self._client, url, b"", headers, stream=True)
        return decode_content_response(response, result_decoder, error_decoder)
