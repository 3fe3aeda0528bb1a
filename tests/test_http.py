"""Tests for the transport, envelope decoder and error mapping."""

import json

import httpx
import pytest

from paper_client.http import (
    APIError,
    AuthenticatedClient,
    ContentResponse,
    ContractViolationError,
    DecodeError,
    HeaderNotFoundError,
    OperationError,
    Response,
    SerializationError,
    TransportError,
    unwrap,
    unwrap_infallible,
)
from paper_client.http.response import decode_content_response, decode_response
from paper_client.http.serialization import void
from paper_client.paper import DocLookupError, DocLookupFailedError, PaperDocExportResult
from paper_client.paper.models import ListPaperDocsResponse, RefPaperDoc

URL = "https://api.dropboxapi.com/2/paper/docs/test"

LIST_BODY = {
    "doc_ids": ["abc"],
    "cursor": {"value": "c1", "expiration": "2025-01-01T00:00:00Z"},
    "has_more": True,
}


def make_response(status, body=b"", headers=None):
    return httpx.Response(status, content=body, headers=headers)


class TestDecodeResponse:
    """Test RPC/upload envelope decoding."""

    def test_success(self):
        """Should decode a 2xx body with the result decoder."""
        envelope = decode_response(
            make_response(200, json.dumps(LIST_BODY).encode()),
            ListPaperDocsResponse.from_dict,
            void,
        )
        assert isinstance(envelope, Response)
        assert envelope.status == 200
        assert envelope.body.doc_ids == ["abc"]
        assert envelope.body.cursor.value == "c1"
        assert envelope.body.has_more is True

    def test_success_with_unexpected_shape(self):
        """Should raise DecodeError rather than default missing fields."""
        with pytest.raises(DecodeError) as exc_info:
            decode_response(
                make_response(200, b'{"doc_ids": ["abc"]}'),
                ListPaperDocsResponse.from_dict,
                void,
            )
        assert exc_info.value.body == '{"doc_ids": ["abc"]}'

    def test_success_with_invalid_json(self):
        """Should raise DecodeError for a non-JSON body."""
        with pytest.raises(DecodeError):
            decode_response(make_response(200, b"not json"), ListPaperDocsResponse.from_dict, void)

    def test_empty_body_is_null(self):
        """Should read an empty 2xx body as null for void results."""
        envelope = decode_response(make_response(200, b""), void, void)
        assert envelope.body is None

    def test_error_body(self):
        """Should decode a well-formed error body into APIError."""
        body = {
            "error_summary": "doc_not_found/..",
            "error": {".tag": "doc_not_found"},
            "user_message": "The doc was not found",
        }
        text = json.dumps(body)
        envelope = decode_response(
            make_response(409, text.encode()), void, DocLookupError.from_dict
        )
        assert envelope == APIError(
            status=409,
            body=text,
            error=DocLookupError.DOC_NOT_FOUND,
            user_message="The doc was not found",
            error_summary="doc_not_found/..",
        )

    def test_error_body_null_user_message(self):
        """Should leave user_message unset when it is JSON null."""
        text = '{"error_summary":"x","error":{".tag":"doc_not_found"},"user_message":null}'
        envelope = decode_response(
            make_response(409, text.encode()), void, DocLookupError.from_dict
        )
        assert isinstance(envelope, APIError)
        assert envelope.error is DocLookupError.DOC_NOT_FOUND
        assert envelope.user_message is None
        assert envelope.body == text

    def test_error_body_localized_user_message(self):
        """Should take the text of a localized user_message object."""
        body = {
            "error_summary": "x",
            "error": "doc_not_found",
            "user_message": {"locale": "en", "text": "Not found"},
        }
        envelope = decode_response(
            make_response(409, json.dumps(body).encode()), void, DocLookupError.from_dict
        )
        assert envelope.user_message == "Not found"

    def test_error_body_unknown_variant(self):
        """Should raise DecodeError for an error outside the endpoint's set."""
        text = '{"error_summary":"x","error":{".tag":"something_new"},"user_message":null}'
        with pytest.raises(DecodeError):
            decode_response(make_response(409, text.encode()), void, DocLookupError.from_dict)

    def test_error_body_not_json(self):
        """Should raise DecodeError for plain-text errors such as a bad token."""
        with pytest.raises(DecodeError):
            decode_response(
                make_response(400, b"Error in call to API function"),
                void,
                DocLookupError.from_dict,
            )

    def test_void_error_with_payload(self):
        """Should raise DecodeError when a never-fails endpoint sends a typed error."""
        text = '{"error_summary":"x","error":{".tag":"other"},"user_message":null}'
        with pytest.raises(DecodeError):
            decode_response(make_response(409, text.encode()), ListPaperDocsResponse.from_dict, void)


class TestDecodeContentResponse:
    """Test download envelope decoding."""

    META = {"owner": "a@b.c", "title": "Doc", "revision": 3, "mime_type": "text/x-markdown"}

    def test_success(self):
        """Should decode metadata from the result header and leave the body unread."""
        response = make_response(
            200, b"# Doc", headers={"Dropbox-API-Result": json.dumps(self.META)}
        )
        envelope = decode_content_response(
            response, PaperDocExportResult.from_dict, DocLookupError.from_dict
        )
        assert isinstance(envelope, ContentResponse)
        assert envelope.body == PaperDocExportResult(
            owner="a@b.c", title="Doc", revision=3, mime_type="text/x-markdown"
        )
        assert envelope.read() == b"# Doc"

    def test_missing_header(self):
        """Should raise HeaderNotFoundError, not DecodeError."""
        with pytest.raises(HeaderNotFoundError) as exc_info:
            decode_content_response(
                make_response(200, b"# Doc"),
                PaperDocExportResult.from_dict,
                DocLookupError.from_dict,
            )
        assert not isinstance(exc_info.value, DecodeError)
        assert exc_info.value.header == "Dropbox-API-Result"

    def test_malformed_header(self):
        """Should raise DecodeError when the header is not the expected JSON."""
        response = make_response(200, b"# Doc", headers={"Dropbox-API-Result": '{"title": 1}'})
        with pytest.raises(DecodeError):
            decode_content_response(
                response, PaperDocExportResult.from_dict, DocLookupError.from_dict
            )

    def test_error(self):
        """Should decode the error body on non-2xx."""
        text = '{"error_summary":"x","error":{".tag":"insufficient_permissions"},"user_message":null}'
        envelope = decode_content_response(
            make_response(409, text.encode()),
            PaperDocExportResult.from_dict,
            DocLookupError.from_dict,
        )
        assert isinstance(envelope, APIError)
        assert envelope.error is DocLookupError.INSUFFICIENT_PERMISSIONS


class TestUnwrap:
    """Test lifting APIError into exceptions."""

    def test_passes_response_through(self):
        """Should return a successful response unchanged."""
        response = Response(body=None, status=200, headers=httpx.Headers())
        assert unwrap(response, DocLookupFailedError) is response

    def test_raises_operation_error(self):
        """Should raise the given class carrying the APIError."""
        api_error = APIError(status=409, body="{}", error=DocLookupError.DOC_NOT_FOUND)
        with pytest.raises(DocLookupFailedError) as exc_info:
            unwrap(api_error, DocLookupFailedError)

        assert isinstance(exc_info.value, OperationError)
        assert exc_info.value.api_error is api_error
        assert exc_info.value.error is DocLookupError.DOC_NOT_FOUND
        assert exc_info.value.status == 409
        assert exc_info.value.user_message is None
        assert "HTTP 409" in str(exc_info.value)

    def test_infallible_raises_contract_violation(self):
        """Should raise ContractViolationError naming the endpoint."""
        api_error = APIError(status=409, body="{}", error=None)
        with pytest.raises(ContractViolationError, match="paper/docs/list"):
            unwrap_infallible(api_error, "paper/docs/list")


class TestAuthenticatedClient:
    """Test request shapes."""

    def test_rpc_request(self, api):
        """Should POST JSON with the bearer token."""
        api.add(200, content=b"null")
        client = AuthenticatedClient("tok", api.client())

        client.rpc_request(URL, RefPaperDoc("d1"), void, void)

        request = api.last_request
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Content-Type"] == "application/json"
        assert api.last_json() == {"doc_id": "d1"}

    def test_rpc_request_null_arg(self, api):
        """Should send a None argument as the JSON literal null."""
        api.add(200, content=b"null")
        AuthenticatedClient("tok", api.client()).rpc_request(URL, None, void, void)
        assert api.last_request.content == b"null"

    def test_upload_request(self, api):
        """Should send raw content with the argument in the API-Arg header."""
        api.add(200, content=b"null")
        client = AuthenticatedClient("tok", api.client())

        client.content_upload_request(URL, RefPaperDoc("d1"), "héllo", void, void)

        request = api.last_request
        assert request.headers["Content-Type"] == "application/octet-stream"
        assert json.loads(request.headers["Dropbox-API-Arg"]) == {"doc_id": "d1"}
        assert request.content == "héllo".encode("utf-8")

    def test_header_arg_is_ascii(self, api):
        """Should escape non-ASCII characters in the API-Arg header."""
        api.add(200, content=b"null")
        client = AuthenticatedClient("tok", api.client())

        client.content_upload_request(URL, RefPaperDoc("dé"), b"", void, void)

        raw = api.last_request.headers["Dropbox-API-Arg"]
        assert raw == '{"doc_id": "d\\u00e9"}'
        assert json.loads(raw) == {"doc_id": "dé"}

    def test_download_request(self, api):
        """Should send an empty body with the API-Arg header."""
        api.add(200, content=b"body", headers={"Dropbox-API-Result": "null"})
        client = AuthenticatedClient("tok", api.client())

        with client.content_download_request(URL, RefPaperDoc("d1"), void, void) as response:
            assert response.read() == b"body"

        request = api.last_request
        assert request.content == b""
        assert json.loads(request.headers["Dropbox-API-Arg"]) == {"doc_id": "d1"}

    def test_serialization_error_before_io(self, api):
        """Should raise SerializationError without sending anything."""
        client = AuthenticatedClient("tok", api.client())

        with pytest.raises(SerializationError):
            client.rpc_request(URL, {"bad": object()}, void, void)

        assert api.requests == []

    def test_transport_error(self):
        """Should wrap connection failures in TransportError."""

        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = AuthenticatedClient("tok", httpx.Client(transport=httpx.MockTransport(fail)))

        with pytest.raises(TransportError, match="connection refused"):
            client.rpc_request(URL, None, void, void)

