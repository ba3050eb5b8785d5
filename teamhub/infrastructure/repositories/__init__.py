"""Repository implementations for infrastructure layer."""

from .calendar_event_repository import CalendarEventRepository
from .comment_repository import CommentRepository
from .invitation_repository import InvitationRepository
from .notification_repository import NotificationRepository
from .project_repository import ProjectRepository, TaskRepository
from .team_repository import TeamRepository
from .user_repository import UserRepository

__all__ = [
    "CalendarEventRepository",
    "CommentRepository",
    "InvitationRepository",
    "NotificationRepository",
    "ProjectRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
]
