"""Durable notification records and the owner-only operations on them."""

from __future__ import annotations

from sqlalchemy.orm import Session

from teamhub.domain.entities import Notification, NotificationKind, NotificationPayload
from teamhub.domain.errors import ForbiddenError, NotFoundError
from teamhub.infrastructure.repositories import NotificationRepository
from teamhub.utils import utcnow


def record_notification(
    session: Session,
    *,
    recipient_id: str,
    payload: NotificationPayload,
    title: str,
    message: str,
) -> Notification:
    """Persist an unread notification for ``recipient_id`` and return it with its id."""

    notification = Notification(
        id=None,
        user_id=recipient_id,
        kind=payload.kind,
        title=title,
        message=message,
        payload=payload.to_dict(),
        is_read=False,
        created_at=utcnow(),
    )
    return NotificationRepository(session).create(notification)


def list_notifications(
    session: Session,
    user_id: str,
    *,
    unread_only: bool = False,
    kind: NotificationKind | None = None,
    limit: int | None = None,
) -> list[Notification]:
    """Return the notifications of ``user_id``, newest first."""

    return list(
        NotificationRepository(session).list_for_user(
            user_id, unread_only=unread_only, kind=kind, limit=limit
        )
    )


def count_unread_notifications(session: Session, user_id: str) -> int:
    return NotificationRepository(session).count_unread(user_id)


def _get_owned(repository: NotificationRepository, notification_id: str, user_id: str) -> Notification:
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.user_id != user_id:
        raise ForbiddenError("Notification belongs to another user")
    return notification


def mark_notification_read(session: Session, notification_id: str, *, user_id: str) -> Notification:
    repository = NotificationRepository(session)
    notification = _get_owned(repository, notification_id, user_id)
    if notification.is_read:
        return notification
    return repository.set_read(notification_id)


def delete_notification(session: Session, notification_id: str, *, user_id: str) -> None:
    repository = NotificationRepository(session)
    _get_owned(repository, notification_id, user_id)
    repository.delete(notification_id)


def mark_notifications_read(session: Session, notification_ids: list[str], *, user_id: str) -> int:
    """Mark the given ids read, silently skipping ids owned by other users."""

    return NotificationRepository(session).mark_as_read(notification_ids, user_id=user_id)


def mark_all_notifications_read(session: Session, user_id: str) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


__all__ = [
    "count_unread_notifications",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notifications_read",
    "record_notification",
]
