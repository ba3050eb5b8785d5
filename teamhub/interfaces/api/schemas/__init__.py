from .auth import MessageResponse, PasswordChangeRequest, RegisterRequest, Token
from .calendar import CalendarEventCreate, CalendarEventRead
from .comment import CommentAuthorRead, CommentCreate, CommentRead
from .notification import MarkedReadResponse, NotificationList, NotificationRead
from .project import (
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)
from .team import (
    InvitationAcceptResponse,
    InvitationBatchResponse,
    InvitationCreate,
    InvitationRead,
    InvitationResultRead,
    TeamCreate,
    TeamMemberRead,
    TeamRead,
)
from .user import MemberRoleUpdate, UserRead, UserSummaryRead

__all__ = [
    "CalendarEventCreate",
    "CalendarEventRead",
    "CommentAuthorRead",
    "CommentCreate",
    "CommentRead",
    "InvitationAcceptResponse",
    "InvitationBatchResponse",
    "InvitationCreate",
    "InvitationRead",
    "InvitationResultRead",
    "MarkedReadResponse",
    "MemberRoleUpdate",
    "MessageResponse",
    "NotificationList",
    "NotificationRead",
    "PasswordChangeRequest",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "RegisterRequest",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TeamCreate",
    "TeamMemberRead",
    "TeamRead",
    "Token",
    "UserRead",
    "UserSummaryRead",
]
