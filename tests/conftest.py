"""Shared fixtures: a scripted mock of the Dropbox HTTP API."""

import json

import httpx
import pytest


class MockAPI:
    """Records requests and answers them with queued responses, in order."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def add(self, status=200, json_body=None, content=None, headers=None):
        """Queue a response. ``json_body`` is serialized unless ``content`` is given."""
        if content is None:
            content = json.dumps(json_body).encode("utf-8")
        self._responses.append(httpx.Response(status, content=content, headers=headers))
        return self

    def add_error(self, status, error, error_summary="x", user_message=None):
        """Queue an error response in the API's error body shape."""
        return self.add(
            status,
            {"error_summary": error_summary, "error": error, "user_message": user_message},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request to {request.url}")
        return self._responses.pop(0)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def api():
    return MockAPI()
