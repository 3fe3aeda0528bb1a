"""Dropbox Paper docs client.

Every method issues one request and returns the decoded Response (or a
ContentResponse for downloads). Typed API failures are raised as the
OperationError subclass belonging to the endpoint.

Example:
    >>> with Paper(access_token) as paper:
    ...     for doc_id in paper.iter_doc_ids():
    ...         print(paper.get_folder_info(doc_id).body.folders)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from paper_client.auth.operations import RevocableToken
from paper_client.config import PAPER_DOCS_BASE_URL
from paper_client.http.mapping import unwrap, unwrap_infallible
from paper_client.http.response import ContentResponse, Response
from paper_client.http.serialization import void
from paper_client.http.transport import AuthenticatedClient, UploadContent
from paper_client.paper.errors import (
    DocCreateFailedError,
    DocLookupError,
    DocLookupFailedError,
    DocUpdateFailedError,
    ListDocsCursorError,
    ListDocsCursorFailedError,
    ListUsersCursorError,
    ListUsersCursorFailedError,
    PaperDocCreateError,
    PaperDocUpdateError,
)
from paper_client.paper.models import (
    ExportFormat,
    FoldersContainingPaperDoc,
    ImportFormat,
    ListPaperDocsArgs,
    ListPaperDocsContinueArgs,
    ListPaperDocsFilterBy,
    ListPaperDocsResponse,
    ListPaperDocsSortBy,
    ListPaperDocsSortOrder,
    ListUsersOnFolderArgs,
    ListUsersOnFolderContinueArgs,
    ListUsersOnFolderResponse,
    PaperDocCreateArgs,
    PaperDocCreateUpdateResult,
    PaperDocExport,
    PaperDocExportResult,
    PaperDocSharingPolicy,
    PaperDocUpdateArgs,
    PaperDocUpdatePolicy,
    RefPaperDoc,
    SharingPolicy,
    SharingPublicPolicyType,
    SharingTeamPolicyType,
)
from paper_client.paper.users import (
    AddPaperDocUserRequestBuilder,
    ListUsersOnPaperDocArgs,
    ListUsersOnPaperDocContinueArgs,
    ListUsersOnPaperDocResponse,
    MemberSelector,
    RemovePaperDocUser,
    UserOnPaperDocFilter,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000


class Paper(RevocableToken, AuthenticatedClient):
    """Client for the ``/2/paper/docs/`` endpoints."""

    def url(self, path: str) -> str:
        """Absolute URL of a docs endpoint."""
        return PAPER_DOCS_BASE_URL + path

    # =========================================================================
    # Docs
    # =========================================================================

    def archive(self, doc_id: str) -> Response[None]:
        """Mark a doc as archived.

        Raises:
            DocLookupFailedError: If the doc cannot be found or accessed.
        """
        envelope = self.rpc_request(
            self.url("archive"), RefPaperDoc(doc_id), void, DocLookupError.from_dict
        )
        return unwrap(envelope, DocLookupFailedError)

    def create(
        self,
        import_format: ImportFormat,
        content: UploadContent,
        parent_folder_id: str | None = None,
    ) -> Response[PaperDocCreateUpdateResult]:
        """Create a doc from uploaded content.

        Args:
            import_format: Format of ``content``.
            content: Doc body; ``str`` is sent UTF-8 encoded.
            parent_folder_id: Folder to create the doc in, or the root when omitted.

        Raises:
            DocCreateFailedError: With a PaperDocCreateError.
        """
        arg = PaperDocCreateArgs(import_format=import_format, parent_folder_id=parent_folder_id)
        envelope = self.content_upload_request(
            self.url("create"),
            arg,
            content,
            PaperDocCreateUpdateResult.from_dict,
            PaperDocCreateError.from_dict,
        )
        response = unwrap(envelope, DocCreateFailedError)
        logger.info(f"Created doc {response.body.doc_id}")
        return response

    def download(
        self, doc_id: str, export_format: ExportFormat
    ) -> ContentResponse[PaperDocExportResult]:
        """Export a doc.

        The content is left unread on the returned ContentResponse; read it
        or close it to release the connection.

        Raises:
            DocLookupFailedError: If the doc cannot be found or accessed.
            HeaderNotFoundError: If the response lacks its metadata header.
        """
        envelope = self.content_download_request(
            self.url("download"),
            PaperDocExport(doc_id=doc_id, export_format=export_format),
            PaperDocExportResult.from_dict,
            DocLookupError.from_dict,
        )
        return unwrap(envelope, DocLookupFailedError)

    def get_folder_info(self, doc_id: str) -> Response[FoldersContainingPaperDoc]:
        """Get the folder path and sharing policy of the folder containing a doc.

        Docs outside any folder yield an empty FoldersContainingPaperDoc.
        """
        envelope = self.rpc_request(
            self.url("get_folder_info"),
            RefPaperDoc(doc_id),
            FoldersContainingPaperDoc.from_dict,
            DocLookupError.from_dict,
        )
        return unwrap(envelope, DocLookupFailedError)

    def list(
        self,
        filter_by: ListPaperDocsFilterBy | None = None,
        sort_by: ListPaperDocsSortBy | None = None,
        sort_order: ListPaperDocsSortOrder | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> Response[ListPaperDocsResponse]:
        """List the ids of docs the user has access to.

        Raises:
            ContractViolationError: If the service returns an error, which
                this endpoint never should.
        """
        arg = ListPaperDocsArgs(
            limit=limit, filter_by=filter_by, sort_by=sort_by, sort_order=sort_order
        )
        envelope = self.rpc_request(self.url("list"), arg, ListPaperDocsResponse.from_dict, void)
        return unwrap_infallible(envelope, "paper/docs/list")

    def list_continue(self, cursor: str) -> Response[ListPaperDocsResponse]:
        """Fetch the next page of :meth:`list`.

        Args:
            cursor: ``cursor.value`` from the previous page.

        Raises:
            ListDocsCursorFailedError: If the cursor was rejected.
        """
        envelope = self.rpc_request(
            self.url("list/continue"),
            ListPaperDocsContinueArgs(cursor=cursor),
            ListPaperDocsResponse.from_dict,
            ListDocsCursorError.from_dict,
        )
        return unwrap(envelope, ListDocsCursorFailedError)

    def iter_doc_ids(
        self,
        filter_by: ListPaperDocsFilterBy | None = None,
        sort_by: ListPaperDocsSortBy | None = None,
        sort_order: ListPaperDocsSortOrder | None = None,
        page_size: int = DEFAULT_LIMIT,
    ) -> Iterator[str]:
        """Yield every doc id, following cursors until ``has_more`` is false."""
        page = self.list(filter_by, sort_by, sort_order, page_size).body
        yield from page.doc_ids

        while page.has_more:
            logger.debug(f"Fetching next page of doc ids (cursor expires {page.cursor.expiration})")
            page = self.list_continue(page.cursor.value).body
            yield from page.doc_ids

    def permanently_delete(self, doc_id: str) -> Response[None]:
        """Delete a doc for good. Only the doc owner can do this."""
        envelope = self.rpc_request(
            self.url("permanently_delete"), RefPaperDoc(doc_id), void, DocLookupError.from_dict
        )
        response = unwrap(envelope, DocLookupFailedError)
        logger.info(f"Permanently deleted doc {doc_id}")
        return response

    def update(
        self,
        doc_id: str,
        doc_update_policy: PaperDocUpdatePolicy,
        revision: int,
        import_format: ImportFormat,
        content: UploadContent,
    ) -> Response[PaperDocCreateUpdateResult]:
        """Update a doc with uploaded content.

        Args:
            doc_id: Doc to update.
            doc_update_policy: How ``content`` is merged into the doc.
            revision: Latest doc revision known to the caller.
            import_format: Format of ``content``.
            content: New content; ``str`` is sent UTF-8 encoded.

        Raises:
            DocUpdateFailedError: With a PaperDocUpdateError, e.g. revision_mismatch.
        """
        arg = PaperDocUpdateArgs(
            doc_id=doc_id,
            doc_update_policy=doc_update_policy,
            revision=revision,
            import_format=import_format,
        )
        envelope = self.content_upload_request(
            self.url("update"),
            arg,
            content,
            PaperDocCreateUpdateResult.from_dict,
            PaperDocUpdateError.from_dict,
        )
        return unwrap(envelope, DocUpdateFailedError)

    # =========================================================================
    # Sharing policy
    # =========================================================================

    def get_sharing_policy(self, doc_id: str) -> Response[SharingPolicy]:
        envelope = self.rpc_request(
            self.url("sharing_policy/get"),
            RefPaperDoc(doc_id),
            SharingPolicy.from_dict,
            DocLookupError.from_dict,
        )
        return unwrap(envelope, DocLookupFailedError)

    def set_sharing_policy(
        self,
        doc_id: str,
        public_sharing_policy: SharingPublicPolicyType | None = None,
        team_sharing_policy: SharingTeamPolicyType | None = None,
    ) -> Response[None]:
        """Set the doc's sharing policy; omitted parts are left unchanged."""
        arg = PaperDocSharingPolicy(
            doc_id=doc_id,
            sharing_policy=SharingPolicy(
                public_sharing_policy=public_sharing_policy,
                team_sharing_policy=team_sharing_policy,
            ),
        )
        envelope = self.rpc_request(
            self.url("sharing_policy/set"), arg, void, DocLookupError.from_dict
        )
        return unwrap(envelope, DocLookupFailedError)

    # =========================================================================
    # Folder users
    # =========================================================================

    def list_folder_users(
        self, doc_id: str, limit: int = DEFAULT_LIMIT
    ) -> Response[ListUsersOnFolderResponse]:
        """List users with access to the folder containing a doc."""
        envelope = self.rpc_request(
            self.url("folder_users/list"),
            ListUsersOnFolderArgs(doc_id=doc_id, limit=limit),
            ListUsersOnFolderResponse.from_dict,
            DocLookupError.from_dict,
        )
        return unwrap(envelope, DocLookupFailedError)

    def list_folder_users_continue(
        self, doc_id: str, cursor: str
    ) -> Response[ListUsersOnFolderResponse]:
        envelope = self.rpc_request(
            self.url("folder_users/list/continue"),
            ListUsersOnFolderContinueArgs(doc_id=doc_id, cursor=cursor),
            ListUsersOnFolderResponse.from_dict,
            ListUsersCursorError.from_dict,
        )
        return unwrap(envelope, ListUsersCursorFailedError)

    # =========================================================================
    # Doc users
    # =========================================================================

    def users_add(self, doc_id: str) -> AddPaperDocUserRequestBuilder:
        """Start adding users to a doc; call ``send()`` on the builder to submit."""
        return AddPaperDocUserRequestBuilder(self, doc_id)

    def users_list(
        self,
        doc_id: str,
        limit: int = DEFAULT_LIMIT,
        filter_by: UserOnPaperDocFilter = UserOnPaperDocFilter.SHARED,
    ) -> Response[ListUsersOnPaperDocResponse]:
        """List users who visited the doc or were explicitly shared on it."""
        envelope = self.rpc_request(
            self.url("users/list"),
            ListUsersOnPaperDocArgs(doc_id=doc_id, limit=limit, filter_by=filter_by),
            ListUsersOnPaperDocResponse.from_dict,
            DocLookupError.from_dict,
        )
        return unwrap(envelope, DocLookupFailedError)

    def users_list_continue(
        self, doc_id: str, cursor: str
    ) -> Response[ListUsersOnPaperDocResponse]:
        envelope = self.rpc_request(
            self.url("users/list/continue"),
            ListUsersOnPaperDocContinueArgs(doc_id=doc_id, cursor=cursor),
            ListUsersOnPaperDocResponse.from_dict,
            ListUsersCursorError.from_dict,
        )
        return unwrap(envelope, ListUsersCursorFailedError)

    def users_remove(self, doc_id: str, member: MemberSelector) -> Response[None]:
        """Remove a user from a doc. The doc owner cannot be removed."""
        envelope = self.rpc_request(
            self.url("users/remove"),
            RemovePaperDocUser(doc_id=doc_id, member=member),
            void,
            DocLookupError.from_dict,
        )
        return unwrap(envelope, DocLookupFailedError)
