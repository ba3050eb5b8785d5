"""Compute who must be notified about a triggering event.

Every resolution unions its id sources into a set, so a user reachable
through several sources (team member and attendee, say) is counted once,
and the acting user is removed at the end.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from sqlalchemy.orm import Session

from teamhub.config import get_settings
from teamhub.domain.entities import NotificationKind
from teamhub.domain.errors import NotFoundError, ValidationError
from teamhub.infrastructure.repositories import (
    ProjectRepository,
    TaskRepository,
    TeamRepository,
)


@dataclass(frozen=True)
class RecipientPolicy:
    """Tunable parts of the recipient formula."""

    include_project_manager: bool = True
    broadcast_comments: bool = True

    @classmethod
    def from_settings(cls) -> "RecipientPolicy":
        settings = get_settings()
        return cls(
            include_project_manager=settings.comment_notify_manager,
            broadcast_comments=settings.comment_room_broadcast,
        )


@dataclass(frozen=True)
class CommentContext:
    task_id: str
    actor_id: str


@dataclass(frozen=True)
class TargetedContext:
    """Explicit list of users, as given by an invite or add-member request."""

    user_ids: tuple[str, ...]
    actor_id: str | None


@dataclass(frozen=True)
class EventContext:
    actor_id: str | None
    project_id: str | None = None
    attendee_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SecurityContext:
    """The affected user; the change is made on their behalf, so nobody is excluded."""

    user_id: str


RecipientContext = Union[CommentContext, TargetedContext, EventContext, SecurityContext]

_CONTEXT_FOR_KIND: dict[NotificationKind, tuple[type, ...]] = {
    NotificationKind.COMMENT_ADDED: (CommentContext,),
    NotificationKind.TEAM_INVITATION: (TargetedContext,),
    NotificationKind.ADDED_TO_TEAM: (TargetedContext,),
    NotificationKind.EVENT_SCHEDULED: (EventContext,),
    NotificationKind.SECURITY_UPDATE: (SecurityContext,),
}


def resolve_recipients(
    session: Session,
    kind: NotificationKind,
    context: RecipientContext,
    *,
    policy: RecipientPolicy | None = None,
) -> set[str]:
    """Return the deduplicated ids of the users to notify about ``kind``.

    Raises :class:`NotFoundError` when the task or project referenced by the
    context no longer exists.
    """

    policy = policy or RecipientPolicy()
    kind = NotificationKind(kind)
    if not isinstance(context, _CONTEXT_FOR_KIND[kind]):
        raise ValidationError(
            f"{type(context).__name__} cannot be used to resolve {kind.value} recipients"
        )

    if isinstance(context, CommentContext):
        recipients = _comment_recipients(session, context, policy)
        actor_id = context.actor_id
    elif isinstance(context, TargetedContext):
        recipients = _clean(context.user_ids)
        actor_id = context.actor_id
    elif isinstance(context, EventContext):
        recipients = _event_recipients(session, context)
        actor_id = context.actor_id
    else:
        recipients = _clean([context.user_id])
        actor_id = None

    if actor_id:
        recipients.discard(actor_id)
    return recipients


def _comment_recipients(
    session: Session, context: CommentContext, policy: RecipientPolicy
) -> set[str]:
    task = TaskRepository(session).get(context.task_id)
    if task is None:
        raise NotFoundError(f"Task {context.task_id} not found")
    project = ProjectRepository(session).get(task.project_id)
    if project is None:
        raise NotFoundError(f"Project {task.project_id} not found")

    recipients: set[str] = set()
    if project.team_id:
        recipients |= TeamRepository(session).member_ids(project.team_id)
    if policy.include_project_manager and project.manager_id:
        recipients.add(project.manager_id)
    return recipients


def _event_recipients(session: Session, context: EventContext) -> set[str]:
    recipients = _clean(context.attendee_ids)
    if context.project_id:
        project = ProjectRepository(session).get(context.project_id)
        if project is None:
            raise NotFoundError(f"Project {context.project_id} not found")
        if project.team_id:
            recipients |= TeamRepository(session).member_ids(project.team_id)
    return recipients


def _clean(user_ids: Iterable[str | None]) -> set[str]:
    return {user_id for user_id in user_ids if user_id}


__all__ = [
    "CommentContext",
    "EventContext",
    "RecipientContext",
    "RecipientPolicy",
    "SecurityContext",
    "TargetedContext",
    "resolve_recipients",
]
