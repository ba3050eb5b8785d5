"""Turn a committed domain action into per-recipient notifications.

The domain action (comment saved, team created, event scheduled...) is
committed by the caller before any helper here runs. From then on everything
is best effort: a resolution failure or a failed insert for one recipient is
logged and never reaches the caller, and live delivery is only scheduled
after the record for that recipient exists.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Iterable

from sqlalchemy.orm import Session

from teamhub.domain.entities import (
    AddedToTeamPayload,
    CalendarEvent,
    Comment,
    CommentAddedPayload,
    EventScheduledPayload,
    Invitation,
    Notification,
    NotificationPayload,
    SecurityUpdatePayload,
    Task,
    Team,
    TeamInvitationPayload,
    User,
)
from teamhub.domain.errors import NotFoundError
from teamhub.infrastructure.notifications import (
    NotificationPublisher,
    RealtimeEventPublisher,
    notification_publisher,
    realtime_event_publisher,
)
from teamhub.utils import iso_or_none, utcnow

from .recipients import (
    CommentContext,
    EventContext,
    RecipientContext,
    RecipientPolicy,
    SecurityContext,
    TargetedContext,
    resolve_recipients,
)
from .store import record_notification

logger = logging.getLogger(__name__)

COMMENT_ROOM_EVENT = "new_comment"


@dataclass(frozen=True)
class NotificationDraft:
    """Content shared by every notification produced for one event."""

    payload: NotificationPayload
    title: str
    message: str


def fan_out(
    session: Session,
    *,
    context: RecipientContext,
    draft: NotificationDraft,
    policy: RecipientPolicy | None = None,
    publisher: NotificationPublisher | None = None,
) -> list[Notification]:
    """Record one notification per resolved recipient and schedule its delivery.

    Returns the notifications that were stored; recipients whose record failed
    are left out.
    """

    publisher = publisher or notification_publisher
    kind = draft.payload.kind
    try:
        recipients = resolve_recipients(session, kind, context, policy=policy)
    except NotFoundError as exc:
        logger.warning("Skipping %s notifications: %s", kind.value, exc)
        return []
    except Exception:
        session.rollback()
        logger.exception("Could not resolve recipients for %s notifications", kind.value)
        return []

    stored: list[Notification] = []
    for recipient_id in sorted(recipients):
        try:
            notification = record_notification(
                session,
                recipient_id=recipient_id,
                payload=draft.payload,
                title=draft.title,
                message=draft.message,
            )
        except Exception:
            session.rollback()
            logger.exception(
                "Failed to record %s notification for user %s", kind.value, recipient_id
            )
            continue
        stored.append(notification)
        try:
            publisher.dispatch(notification)
        except Exception:
            logger.warning(
                "Live delivery of notification %s could not be scheduled",
                notification.id,
                exc_info=True,
            )
    return stored


def notify_comment_added(
    session: Session,
    *,
    comment: Comment,
    task: Task,
    author: User,
    origin_session: str | None = None,
    policy: RecipientPolicy | None = None,
    publisher: NotificationPublisher | None = None,
    room_publisher: RealtimeEventPublisher | None = None,
) -> list[Notification]:
    """Notify the task's team and manager, then refresh everyone viewing the task."""

    policy = policy or RecipientPolicy.from_settings()
    draft = NotificationDraft(
        payload=CommentAddedPayload(
            task_id=task.id,
            comment_id=comment.id,
            commenter_name=author.name,
            commenter_avatar=author.avatar,
        ),
        title="New Comment on Task",
        message=f'{author.name} commented on "{task.name}"',
    )
    stored = fan_out(
        session,
        context=CommentContext(task_id=task.id, actor_id=author.id),
        draft=draft,
        policy=policy,
        publisher=publisher,
    )

    if policy.broadcast_comments:
        room_publisher = room_publisher or realtime_event_publisher
        try:
            room_publisher.broadcast(
                task.id,
                event_type=COMMENT_ROOM_EVENT,
                payload={"taskId": task.id, "comment": serialize_comment(comment)},
                exclude_session=origin_session,
            )
        except Exception:
            logger.warning("Comment %s could not be broadcast", comment.id, exc_info=True)
    return stored


def notify_added_to_team(
    session: Session,
    *,
    team: Team,
    member_ids: Iterable[str],
    actor: User,
    publisher: NotificationPublisher | None = None,
) -> list[Notification]:
    draft = NotificationDraft(
        payload=AddedToTeamPayload(
            team_id=team.id,
            team_name=team.name,
            added_by=actor.name,
            sender_avatar=actor.avatar,
        ),
        title="New Team Access",
        message=f"{actor.name} added you to team: {team.name}",
    )
    return fan_out(
        session,
        context=TargetedContext(user_ids=tuple(member_ids), actor_id=actor.id),
        draft=draft,
        publisher=publisher,
    )


def notify_team_invitation(
    session: Session,
    *,
    team: Team,
    invitation: Invitation,
    recipient_id: str,
    actor: User,
    publisher: NotificationPublisher | None = None,
) -> list[Notification]:
    draft = NotificationDraft(
        payload=TeamInvitationPayload(
            team_id=team.id,
            team_name=team.name,
            token=invitation.token,
            invited_by=actor.name,
            sender_avatar=actor.avatar,
        ),
        title="Team Invitation",
        message=f"{actor.name} invited you to join team {team.name}",
    )
    return fan_out(
        session,
        context=TargetedContext(user_ids=(recipient_id,), actor_id=actor.id),
        draft=draft,
        publisher=publisher,
    )


def notify_event_scheduled(
    session: Session,
    *,
    event: CalendarEvent,
    actor: User,
    publisher: NotificationPublisher | None = None,
) -> list[Notification]:
    draft = NotificationDraft(
        payload=EventScheduledPayload(
            event_id=event.id,
            event_title=event.title,
            start_time=event.start_time,
            project_id=event.project_id,
        ),
        title="New Event Scheduled",
        message=f'{actor.name} scheduled "{event.title}"',
    )
    return fan_out(
        session,
        context=EventContext(
            actor_id=actor.id,
            project_id=event.project_id,
            attendee_ids=tuple(event.attendee_ids),
        ),
        draft=draft,
        publisher=publisher,
    )


def notify_security_update(
    session: Session,
    *,
    user: User,
    change: str = "password",
    publisher: NotificationPublisher | None = None,
) -> list[Notification]:
    draft = NotificationDraft(
        payload=SecurityUpdatePayload(change=change, timestamp=utcnow()),
        title="Password Changed",
        message="Your password was successfully updated.",
    )
    return fan_out(
        session,
        context=SecurityContext(user_id=user.id),
        draft=draft,
        publisher=publisher,
    )


def serialize_comment(comment: Comment) -> dict[str, Any]:
    author = comment.author
    return {
        "id": comment.id,
        "content": comment.content,
        "taskId": comment.task_id,
        "authorId": comment.author_id,
        "attachments": list(comment.attachments),
        "createdAt": iso_or_none(comment.created_at),
        "author": (
            {"id": author.id, "name": author.name, "avatar": author.avatar}
            if author
            else None
        ),
    }


__all__ = [
    "COMMENT_ROOM_EVENT",
    "NotificationDraft",
    "fan_out",
    "notify_added_to_team",
    "notify_comment_added",
    "notify_event_scheduled",
    "notify_security_update",
    "notify_team_invitation",
    "serialize_comment",
]
