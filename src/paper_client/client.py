"""Root API client.

Owns the access token and the HTTP connection pool; namespace clients such
as ``Dropbox.paper`` share both.
"""

from __future__ import annotations

import os

import httpx

from paper_client.auth.exceptions import CredentialsNotFoundError
from paper_client.auth.operations import RevocableToken
from paper_client.config import TOKEN_ENV
from paper_client.http.transport import AuthenticatedClient
from paper_client.paper.client import Paper


class Dropbox(RevocableToken, AuthenticatedClient):
    """Dropbox API client with bearer-token authentication.

    Example:
        >>> with Dropbox() as dbx:
        ...     page = dbx.paper.list(limit=10).body
        ...     print(page.doc_ids)
    """

    def __init__(
        self,
        access_token: str | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            access_token: OAuth2 access token. If None, reads from DROPBOX_TOKEN.
            http_client: httpx client to send requests with.

        Raises:
            CredentialsNotFoundError: If no token is given or set in the environment.
        """
        token = access_token or os.environ.get(TOKEN_ENV)
        if not token:
            raise CredentialsNotFoundError(TOKEN_ENV)

        super().__init__(token, http_client)
        self._paper: Paper | None = None

    @property
    def paper(self) -> Paper:
        """Paper docs client sharing this client's token and connections."""
        if self._paper is None:
            self._paper = Paper(self.access_token, self.http_client)
        return self._paper

