"""Dropbox Paper docs endpoints."""

from paper_client.paper.client import Paper
from paper_client.paper.errors import (
    CursorFailedError,
    DocCreateFailedError,
    DocLookupError,
    DocLookupFailedError,
    DocUpdateFailedError,
    ListDocsCursorError,
    ListDocsCursorFailedError,
    ListUsersCursorError,
    ListUsersCursorFailedError,
    PaperApiCursorError,
    PaperDocCreateError,
    PaperDocUpdateError,
)
from paper_client.paper.models import (
    Cursor,
    ExportFormat,
    Folder,
    FoldersContainingPaperDoc,
    FolderSharingPolicyType,
    ImportFormat,
    InviteeInfo,
    ListPaperDocsFilterBy,
    ListPaperDocsResponse,
    ListPaperDocsSortBy,
    ListPaperDocsSortOrder,
    ListUsersOnFolderResponse,
    PaperDocCreateUpdateResult,
    PaperDocExportResult,
    PaperDocUpdatePolicy,
    SharingPolicy,
    SharingPublicPolicyType,
    SharingTeamPolicyType,
    UserInfo,
)
from paper_client.paper.users import (
    AddPaperDocUserMemberResult,
    AddPaperDocUserRequestBuilder,
    AddPaperDocUserResult,
    InviteeInfoWithPermissionLevel,
    ListUsersOnPaperDocResponse,
    MemberSelector,
    PaperDocPermissionLevel,
    UserInfoWithPermissionLevel,
    UserOnPaperDocFilter,
)

__all__ = [
    "AddPaperDocUserMemberResult",
    "AddPaperDocUserRequestBuilder",
    "AddPaperDocUserResult",
    "Cursor",
    "CursorFailedError",
    "DocCreateFailedError",
    "DocLookupError",
    "DocLookupFailedError",
    "DocUpdateFailedError",
    "ExportFormat",
    "Folder",
    "FolderSharingPolicyType",
    "FoldersContainingPaperDoc",
    "ImportFormat",
    "InviteeInfo",
    "InviteeInfoWithPermissionLevel",
    "ListDocsCursorError",
    "ListDocsCursorFailedError",
    "ListPaperDocsFilterBy",
    "ListPaperDocsResponse",
    "ListPaperDocsSortBy",
    "ListPaperDocsSortOrder",
    "ListUsersCursorError",
    "ListUsersCursorFailedError",
    "ListUsersOnFolderResponse",
    "ListUsersOnPaperDocResponse",
    "MemberSelector",
    "Paper",
    "PaperApiCursorError",
    "PaperDocCreateError",
    "PaperDocCreateUpdateResult",
    "PaperDocExportResult",
    "PaperDocPermissionLevel",
    "PaperDocUpdateError",
    "PaperDocUpdatePolicy",
    "SharingPolicy",
    "SharingPublicPolicyType",
    "SharingTeamPolicyType",
    "UserInfo",
    "UserInfoWithPermissionLevel",
    "UserOnPaperDocFilter",
]
