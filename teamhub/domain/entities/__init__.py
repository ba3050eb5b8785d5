"""Domain entities exposed by the application."""

from .calendar_event import CalendarEvent, EventType
from .notification import (
    AddedToTeamPayload,
    CommentAddedPayload,
    EventScheduledPayload,
    Notification,
    NotificationKind,
    NotificationPayload,
    SecurityUpdatePayload,
    TeamInvitationPayload,
    parse_payload,
)
from .project import Comment, CommentAuthor, Project, Task, TaskPriority, TaskStatus
from .team import Invitation, InvitationStatus, Team, TeamMember
from .user import Principal, User, UserRole

__all__ = [
    "AddedToTeamPayload",
    "CalendarEvent",
    "Comment",
    "CommentAddedPayload",
    "CommentAuthor",
    "EventScheduledPayload",
    "EventType",
    "Invitation",
    "InvitationStatus",
    "Notification",
    "NotificationKind",
    "NotificationPayload",
    "Principal",
    "Project",
    "SecurityUpdatePayload",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "Team",
    "TeamInvitationPayload",
    "TeamMember",
    "User",
    "UserRole",
]
