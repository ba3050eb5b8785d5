"""ORM models used by the application infrastructure."""

from .calendar_event import CalendarEventModel, EventAttendeeModel
from .notification import NotificationModel
from .project import CommentModel, ProjectModel, TaskModel
from .team import InvitationModel, TeamMemberModel, TeamModel
from .user import UserModel

__all__ = [
    "CalendarEventModel",
    "CommentModel",
    "EventAttendeeModel",
    "InvitationModel",
    "NotificationModel",
    "ProjectModel",
    "TaskModel",
    "TeamMemberModel",
    "TeamModel",
    "UserModel",
]
