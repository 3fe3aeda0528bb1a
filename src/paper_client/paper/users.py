"""Paper doc collaborators: adding, listing and removing users."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from paper_client.http.mapping import unwrap
from paper_client.http.response import Response
from paper_client.http.serialization import TaggedEnum, TaggedUnion, list_of, string
from paper_client.paper.errors import DocLookupError, DocLookupFailedError
from paper_client.paper.models import Cursor, InviteeInfo, UserInfo

if TYPE_CHECKING:
    from paper_client.paper.client import Paper

logger = logging.getLogger(__name__)


class MemberSelector(TaggedUnion):
    """A user picked by Dropbox account id or by email address.

    Example:
        >>> MemberSelector.email("ada@example.com").to_dict()
        {'.tag': 'email', 'email': 'ada@example.com'}
    """

    value_tags = {"dropbox_id": string, "email": string}

    @classmethod
    def dropbox_id(cls, dropbox_id: str) -> MemberSelector:
        return cls("dropbox_id", dropbox_id)

    @classmethod
    def email(cls, email: str) -> MemberSelector:
        return cls("email", email)


class PaperDocPermissionLevel(TaggedEnum):
    EDIT = "edit"
    VIEW_AND_COMMENT = "view_and_comment"


# =============================================================================
# Add
# =============================================================================


@dataclass(frozen=True)
class AddMember:
    member: MemberSelector
    permission_level: PaperDocPermissionLevel = PaperDocPermissionLevel.EDIT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AddMember:
        return cls(
            member=MemberSelector.from_dict(data["member"]),
            permission_level=PaperDocPermissionLevel.from_dict(data["permission_level"]),
        )


@dataclass(frozen=True)
class AddPaperDocUser:
    doc_id: str
    members: list[AddMember]
    quiet: bool = False
    custom_message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AddPaperDocUser:
        return cls(
            doc_id=data["doc_id"],
            members=[AddMember.from_dict(item) for item in data["members"]],
            quiet=data.get("quiet", False),
            custom_message=data.get("custom_message"),
        )


class AddPaperDocUserResult(TaggedEnum):
    SUCCESS = "success"
    UNKNOWN_ERROR = "unknown_error"
    SHARING_OUTSIDE_TEAM_DISABLED = "sharing_outside_team_disabled"
    DAILY_LIMIT_REACHED = "daily_limit_reached"
    USER_IS_OWNER = "user_is_owner"
    FAILED_USER_DATA_RETRIEVAL = "failed_user_data_retrieval"
    PERMISSION_ALREADY_GRANTED = "permission_already_granted"


@dataclass(frozen=True)
class AddPaperDocUserMemberResult:
    member: MemberSelector
    result: AddPaperDocUserResult

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AddPaperDocUserMemberResult:
        return cls(
            member=MemberSelector.from_dict(data["member"]),
            result=AddPaperDocUserResult.from_dict(data["result"]),
        )


class AddPaperDocUserRequestBuilder:
    """Accumulates the members to add to a doc; nothing is sent until :meth:`send`.

    Example:
        >>> results = (
        ...     paper.users_add(doc_id)
        ...     .add_member(MemberSelector.email("ada@example.com"))
        ...     .quiet(True)
        ...     .send()
        ... )
    """

    def __init__(self, client: Paper, doc_id: str):
        self._client = client
        self.doc_id = doc_id
        self.members: list[AddMember] = []
        self._quiet = False
        self._custom_message: str | None = None

    def add_member(
        self,
        member: MemberSelector,
        permission_level: PaperDocPermissionLevel = PaperDocPermissionLevel.EDIT,
    ) -> AddPaperDocUserRequestBuilder:
        self.members.append(AddMember(member=member, permission_level=permission_level))
        return self

    def quiet(self, quiet: bool = True) -> AddPaperDocUserRequestBuilder:
        """Don't notify the added users."""
        self._quiet = quiet
        return self

    def custom_message(self, message: str) -> AddPaperDocUserRequestBuilder:
        """Message included in the notification sent to the added users."""
        self._custom_message = message
        return self

    def build(self) -> AddPaperDocUser:
        return AddPaperDocUser(
            doc_id=self.doc_id,
            members=list(self.members),
            quiet=self._quiet,
            custom_message=self._custom_message,
        )

    def send(self) -> Response[list[AddPaperDocUserMemberResult]]:
        """Add the accumulated members to the doc.

        Returns:
            Response whose body holds one result per member.

        Raises:
            DocLookupFailedError: If the doc cannot be found or accessed.
        """
        arg = self.build()
        logger.debug(f"Adding {len(arg.members)} member(s) to doc {self.doc_id}")
        envelope = self._client.rpc_request(
            self._client.url("users/add"),
            arg,
            list_of(AddPaperDocUserMemberResult.from_dict),
            DocLookupError.from_dict,
        )
        return unwrap(envelope, DocLookupFailedError)


# =============================================================================
# List
# =============================================================================


class UserOnPaperDocFilter(TaggedEnum):
    VISITED = "visited"
    SHARED = "shared"


@dataclass(frozen=True)
class ListUsersOnPaperDocArgs:
    doc_id: str
    limit: int = 1000
    filter_by: UserOnPaperDocFilter = UserOnPaperDocFilter.SHARED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListUsersOnPaperDocArgs:
        return cls(
            doc_id=data["doc_id"],
            limit=data["limit"],
            filter_by=UserOnPaperDocFilter.from_dict(data["filter_by"]),
        )


@dataclass(frozen=True)
class InviteeInfoWithPermissionLevel:
    invitee: InviteeInfo
    permission_level: PaperDocPermissionLevel

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InviteeInfoWithPermissionLevel:
        return cls(
            invitee=InviteeInfo.from_dict(data["invitee"]),
            permission_level=PaperDocPermissionLevel.from_dict(data["permission_level"]),
        )


@dataclass(frozen=True)
class UserInfoWithPermissionLevel:
    user: UserInfo
    permission_level: PaperDocPermissionLevel

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserInfoWithPermissionLevel:
        return cls(
            user=UserInfo.from_dict(data["user"]),
            permission_level=PaperDocPermissionLevel.from_dict(data["permission_level"]),
        )


@dataclass(frozen=True)
class ListUsersOnPaperDocResponse:
    doc_owner: UserInfo
    cursor: Cursor
    has_more: bool
    invitees: list[InviteeInfoWithPermissionLevel] = field(default_factory=list)
    users: list[UserInfoWithPermissionLevel] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListUsersOnPaperDocResponse:
        return cls(
            doc_owner=UserInfo.from_dict(data["doc_owner"]),
            cursor=Cursor.from_dict(data["cursor"]),
            has_more=data["has_more"],
            invitees=[InviteeInfoWithPermissionLevel.from_dict(i) for i in data["invitees"]],
            users=[UserInfoWithPermissionLevel.from_dict(u) for u in data["users"]],
        )


@dataclass(frozen=True)
class ListUsersOnPaperDocContinueArgs:
    doc_id: str
    cursor: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListUsersOnPaperDocContinueArgs:
        return cls(doc_id=data["doc_id"], cursor=data["cursor"])


# =============================================================================
# Remove
# =============================================================================


@dataclass(frozen=True)
class RemovePaperDocUser:
    doc_id: str
    member: MemberSelector

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemovePaperDocUser:
        return cls(doc_id=data["doc_id"], member=MemberSelector.from_dict(data["member"]))
