"""Paper docs argument and result types.

Argument types serialize through ``to_json_value``; every type that can
come back from the API has a ``from_dict`` decoder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from paper_client.http.serialization import TaggedEnum, optional

# =============================================================================
# Shared
# =============================================================================


@dataclass(frozen=True)
class RefPaperDoc:
    """Argument of endpoints that take just a doc id."""

    doc_id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RefPaperDoc:
        return cls(doc_id=data["doc_id"])


@dataclass(frozen=True)
class Cursor:
    """Opaque pagination token; ``expiration`` is informational only."""

    value: str
    expiration: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Cursor:
        return cls(value=data["value"], expiration=data["expiration"])


@dataclass(frozen=True)
class InviteeInfo:
    email: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InviteeInfo:
        return cls(email=data["email"])


@dataclass(frozen=True)
class UserInfo:
    account_id: str
    same_team: bool
    team_member_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserInfo:
        return cls(
            account_id=data["account_id"],
            same_team=data["same_team"],
            team_member_id=data.get("team_member_id"),
        )


# =============================================================================
# Create / Update
# =============================================================================


class ImportFormat(TaggedEnum):
    HTML = "html"
    MARKDOWN = "markdown"
    PLAIN_TEXT = "plain_text"


@dataclass(frozen=True)
class PaperDocCreateArgs:
    import_format: ImportFormat
    parent_folder_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperDocCreateArgs:
        return cls(
            import_format=ImportFormat.from_dict(data["import_format"]),
            parent_folder_id=data.get("parent_folder_id"),
        )


@dataclass(frozen=True)
class PaperDocCreateUpdateResult:
    doc_id: str
    revision: int
    title: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperDocCreateUpdateResult:
        return cls(doc_id=data["doc_id"], revision=data["revision"], title=data["title"])


class PaperDocUpdatePolicy(TaggedEnum):
    APPEND = "append"
    PREPEND = "prepend"
    OVERWRITE_ALL = "overwrite_all"


@dataclass(frozen=True)
class PaperDocUpdateArgs:
    doc_id: str
    doc_update_policy: PaperDocUpdatePolicy
    revision: int
    import_format: ImportFormat

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperDocUpdateArgs:
        return cls(
            doc_id=data["doc_id"],
            doc_update_policy=PaperDocUpdatePolicy.from_dict(data["doc_update_policy"]),
            revision=data["revision"],
            import_format=ImportFormat.from_dict(data["import_format"]),
        )


# =============================================================================
# Download
# =============================================================================


class ExportFormat(TaggedEnum):
    HTML = "html"
    MARKDOWN = "markdown"


@dataclass(frozen=True)
class PaperDocExport:
    doc_id: str
    export_format: ExportFormat

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperDocExport:
        return cls(
            doc_id=data["doc_id"],
            export_format=ExportFormat.from_dict(data["export_format"]),
        )


@dataclass(frozen=True)
class PaperDocExportResult:
    """Download metadata, carried in the Dropbox-API-Result header."""

    owner: str
    title: str
    revision: int
    mime_type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperDocExportResult:
        return cls(
            owner=data["owner"],
            title=data["title"],
            revision=data["revision"],
            mime_type=data["mime_type"],
        )


# =============================================================================
# List
# =============================================================================


class ListPaperDocsFilterBy(TaggedEnum):
    DOCS_ACCESSED = "docs_accessed"
    DOCS_CREATED = "docs_created"


class ListPaperDocsSortBy(TaggedEnum):
    ACCESSED = "accessed"
    MODIFIED = "modified"
    CREATED = "created"


class ListPaperDocsSortOrder(TaggedEnum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class ListPaperDocsArgs:
    limit: int = 1000
    filter_by: ListPaperDocsFilterBy | None = None
    sort_by: ListPaperDocsSortBy | None = None
    sort_order: ListPaperDocsSortOrder | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListPaperDocsArgs:
        return cls(
            limit=data["limit"],
            filter_by=optional(ListPaperDocsFilterBy.from_dict)(data.get("filter_by")),
            sort_by=optional(ListPaperDocsSortBy.from_dict)(data.get("sort_by")),
            sort_order=optional(ListPaperDocsSortOrder.from_dict)(data.get("sort_order")),
        )


@dataclass(frozen=True)
class ListPaperDocsContinueArgs:
    cursor: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListPaperDocsContinueArgs:
        return cls(cursor=data["cursor"])


@dataclass(frozen=True)
class ListPaperDocsResponse:
    doc_ids: list[str]
    cursor: Cursor
    has_more: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListPaperDocsResponse:
        return cls(
            doc_ids=list(data["doc_ids"]),
            cursor=Cursor.from_dict(data["cursor"]),
            has_more=data["has_more"],
        )


# =============================================================================
# Folder users and folder info
# =============================================================================


@dataclass(frozen=True)
class ListUsersOnFolderArgs:
    doc_id: str
    limit: int = 1000

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListUsersOnFolderArgs:
        return cls(doc_id=data["doc_id"], limit=data["limit"])


@dataclass(frozen=True)
class ListUsersOnFolderContinueArgs:
    doc_id: str
    cursor: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListUsersOnFolderContinueArgs:
        return cls(doc_id=data["doc_id"], cursor=data["cursor"])


@dataclass(frozen=True)
class ListUsersOnFolderResponse:
    invitees: list[InviteeInfo]
    users: list[UserInfo]
    cursor: Cursor
    has_more: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListUsersOnFolderResponse:
        return cls(
            invitees=[InviteeInfo.from_dict(item) for item in data["invitees"]],
            users=[UserInfo.from_dict(item) for item in data["users"]],
            cursor=Cursor.from_dict(data["cursor"]),
            has_more=data["has_more"],
        )


class FolderSharingPolicyType(TaggedEnum):
    TEAM = "team"
    INVITE_ONLY = "invite_only"


@dataclass(frozen=True)
class Folder:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Folder:
        return cls(id=data["id"], name=data["name"])


@dataclass(frozen=True)
class FoldersContainingPaperDoc:
    """Folder path of a doc, root first. Both fields are empty for unfiled docs."""

    folder_sharing_policy_type: FolderSharingPolicyType | None = None
    folders: list[Folder] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FoldersContainingPaperDoc:
        policy = data.get("folder_sharing_policy_type")
        return cls(
            folder_sharing_policy_type=optional(FolderSharingPolicyType.from_dict)(policy),
            folders=[Folder.from_dict(item) for item in data.get("folders") or []],
        )


# =============================================================================
# Sharing policy
# =============================================================================


class SharingPublicPolicyType(TaggedEnum):
    PEOPLE_WITH_LINK_CAN_EDIT = "people_with_link_can_edit"
    PEOPLE_WITH_LINK_CAN_VIEW_AND_COMMENT = "people_with_link_can_view_and_comment"
    INVITE_ONLY = "invite_only"
    # Can only be set from the team admin console
    DISABLED = "disabled"


class SharingTeamPolicyType(TaggedEnum):
    PEOPLE_WITH_LINK_CAN_EDIT = "people_with_link_can_edit"
    PEOPLE_WITH_LINK_CAN_VIEW_AND_COMMENT = "people_with_link_can_view_and_comment"
    INVITE_ONLY = "invite_only"


@dataclass(frozen=True)
class SharingPolicy:
    public_sharing_policy: SharingPublicPolicyType | None = None
    team_sharing_policy: SharingTeamPolicyType | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SharingPolicy:
        return cls(
            public_sharing_policy=optional(SharingPublicPolicyType.from_dict)(
                data.get("public_sharing_policy")
            ),
            team_sharing_policy=optional(SharingTeamPolicyType.from_dict)(
                data.get("team_sharing_policy")
            ),
        )


@dataclass(frozen=True)
class PaperDocSharingPolicy:
    doc_id: str
    sharing_policy: SharingPolicy

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperDocSharingPolicy:
        return cls(
            doc_id=data["doc_id"],
            sharing_policy=SharingPolicy.from_dict(data["sharing_policy"]),
        )
