"""Paper endpoint error unions and the exceptions that carry them.

Each endpoint declares the closed set of failures it can produce. The
cursor-continue unions nest a shared PaperApiCursorError under their
``cursor_error`` variant; that nesting is kept intact so callers can tell
cursor problems apart from lookup or permission problems.
"""

from __future__ import annotations

from paper_client.http.exceptions import OperationError
from paper_client.http.serialization import TaggedEnum, TaggedUnion


class DocLookupError(TaggedEnum):
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    DOC_NOT_FOUND = "doc_not_found"


class PaperDocCreateError(TaggedEnum):
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    CONTENT_MALFORMED = "content_malformed"
    FOLDER_NOT_FOUND = "folder_not_found"
    DOC_LENGTH_EXCEEDED = "doc_length_exceeded"
    IMAGE_SIZE_EXCEEDED = "image_size_exceeded"


class PaperDocUpdateError(TaggedEnum):
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    DOC_NOT_FOUND = "doc_not_found"
    CONTENT_MALFORMED = "content_malformed"
    REVISION_MISMATCH = "revision_mismatch"
    DOC_LENGTH_EXCEEDED = "doc_length_exceeded"
    IMAGE_SIZE_EXCEEDED = "image_size_exceeded"
    DOC_ARCHIVED = "doc_archived"
    DOC_DELETED = "doc_deleted"


class PaperApiCursorError(TaggedEnum):
    """Why a pagination cursor was rejected."""

    EXPIRED_CURSOR = "expired_cursor"
    INVALID_CURSOR = "invalid_cursor"
    WRONG_USER_IN_CURSOR = "wrong_user_in_cursor"
    RESET = "reset"


class _CursorErrorUnion(TaggedUnion):
    value_tags = {"cursor_error": PaperApiCursorError.from_dict}

    @classmethod
    def from_cursor_error(cls, cursor_error: PaperApiCursorError):
        return cls("cursor_error", cursor_error)

    @property
    def is_cursor_error(self) -> bool:
        return self.tag == "cursor_error"

    @property
    def cursor_error(self) -> PaperApiCursorError | None:
        """The nested cursor error, or None for other variants."""
        return self.value if self.is_cursor_error else None


class ListDocsCursorError(_CursorErrorUnion):
    """Error of docs/list/continue."""


class ListUsersCursorError(_CursorErrorUnion):
    """Error of docs/users/list/continue and docs/folder_users/list/continue."""

    void_tags = frozenset({"insufficient_permissions", "doc_not_found"})


class DocLookupFailedError(OperationError):
    """The doc could not be found or accessed (DocLookupError)."""

    operation = "Doc lookup"


class DocCreateFailedError(OperationError):
    """docs/create returned a PaperDocCreateError."""

    operation = "Doc create"


class DocUpdateFailedError(OperationError):
    """docs/update returned a PaperDocUpdateError."""

    operation = "Doc update"


class CursorFailedError(OperationError):
    """Base for errors of list/continue endpoints.

    Catch this to handle cursor problems the same way on every endpoint.
    """

    operation = "List continue"

    @property
    def cursor_error(self) -> PaperApiCursorError | None:
        """The nested cursor error, or None if the failure was not about the cursor."""
        return self.error.cursor_error


class ListDocsCursorFailedError(CursorFailedError):
    """docs/list/continue returned a ListDocsCursorError."""

    operation = "Docs list continue"


class ListUsersCursorFailedError(CursorFailedError):
    """A users list/continue endpoint returned a ListUsersCursorError."""

    operation = "Users list continue"
