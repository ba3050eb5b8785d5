"""Domain entity representing a user notification and its typed payloads.

Each :class:`NotificationKind` has exactly one payload dataclass. Payloads are
stored as JSON using the camelCase keys that connected clients consume, and
:func:`parse_payload` rebuilds the typed variant from a stored row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Union


class NotificationKind(str, Enum):
    """Kinds of events that produce notifications."""

    COMMENT_ADDED = "comment-added"
    TEAM_INVITATION = "team-invitation"
    ADDED_TO_TEAM = "added-to-team"
    EVENT_SCHEDULED = "event-scheduled"
    SECURITY_UPDATE = "security-update"


@dataclass(frozen=True)
class CommentAddedPayload:
    kind: ClassVar[NotificationKind] = NotificationKind.COMMENT_ADDED

    task_id: str
    comment_id: str
    commenter_name: str
    commenter_avatar: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "taskId": self.task_id,
            "commentId": self.comment_id,
            "commenterName": self.commenter_name,
            "commenterAvatar": self.commenter_avatar,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommentAddedPayload":
        return cls(
            task_id=data["taskId"],
            comment_id=data["commentId"],
            commenter_name=data["commenterName"],
            commenter_avatar=data.get("commenterAvatar"),
        )


@dataclass(frozen=True)
class TeamInvitationPayload:
    kind: ClassVar[NotificationKind] = NotificationKind.TEAM_INVITATION

    team_id: str
    team_name: str
    token: str
    invited_by: str
    sender_avatar: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "token": self.token,
            "invitedBy": self.invited_by,
            "senderAvatar": self.sender_avatar,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TeamInvitationPayload":
        return cls(
            team_id=data["teamId"],
            team_name=data["teamName"],
            token=data["token"],
            invited_by=data["invitedBy"],
            sender_avatar=data.get("senderAvatar"),
        )


@dataclass(frozen=True)
class AddedToTeamPayload:
    kind: ClassVar[NotificationKind] = NotificationKind.ADDED_TO_TEAM

    team_id: str
    team_name: str
    added_by: str
    sender_avatar: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "addedBy": self.added_by,
            "senderAvatar": self.sender_avatar,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AddedToTeamPayload":
        return cls(
            team_id=data["teamId"],
            team_name=data["teamName"],
            added_by=data["addedBy"],
            sender_avatar=data.get("senderAvatar"),
        )


@dataclass(frozen=True)
class EventScheduledPayload:
    kind: ClassVar[NotificationKind] = NotificationKind.EVENT_SCHEDULED

    event_id: str
    event_title: str
    start_time: datetime
    project_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "eventId": self.event_id,
            "eventTitle": self.event_title,
            "startTime": self.start_time.isoformat(),
            "projectId": self.project_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventScheduledPayload":
        return cls(
            event_id=data["eventId"],
            event_title=data["eventTitle"],
            start_time=datetime.fromisoformat(data["startTime"]),
            project_id=data.get("projectId"),
        )


@dataclass(frozen=True)
class SecurityUpdatePayload:
    kind: ClassVar[NotificationKind] = NotificationKind.SECURITY_UPDATE

    change: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"change": self.change, "timestamp": self.timestamp.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SecurityUpdatePayload":
        return cls(
            change=data["change"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


NotificationPayload = Union[
    CommentAddedPayload,
    TeamInvitationPayload,
    AddedToTeamPayload,
    EventScheduledPayload,
    SecurityUpdatePayload,
]

_PAYLOAD_TYPES: dict[NotificationKind, type] = {
    payload_type.kind: payload_type
    for payload_type in (
        CommentAddedPayload,
        TeamInvitationPayload,
        AddedToTeamPayload,
        EventScheduledPayload,
        SecurityUpdatePayload,
    )
}


def parse_payload(kind: NotificationKind | str, data: dict[str, Any]) -> NotificationPayload:
    """Return the typed payload for ``kind`` built from stored ``data``."""

    payload_type = _PAYLOAD_TYPES[NotificationKind(kind)]
    return payload_type.from_dict(data)


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str | None
    user_id: str
    kind: NotificationKind
    title: str
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None

    def typed_payload(self) -> NotificationPayload:
        return parse_payload(self.kind, self.payload)


__all__ = [
    "AddedToTeamPayload",
    "CommentAddedPayload",
    "EventScheduledPayload",
    "Notification",
    "NotificationKind",
    "NotificationPayload",
    "SecurityUpdatePayload",
    "TeamInvitationPayload",
    "parse_payload",
]
