"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy.orm import Session

from teamhub.domain.entities import Notification, NotificationKind
from teamhub.infrastructure.models import NotificationModel
from teamhub.utils import ensure_utc, ensure_utc_naive, utcnow


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        unread_only: bool = False,
        kind: NotificationKind | None = None,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        if kind is not None:
            query = query.filter(NotificationModel.type == NotificationKind(kind).value)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: str) -> int:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .count()
        )

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            type=NotificationKind(notification.kind).value,
            title=notification.title,
            message=notification.message,
            data=notification.payload or {},
            is_read=notification.is_read,
            created_at=ensure_utc_naive(notification.created_at or utcnow()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_read(self, notification_id: str) -> Notification:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise ValueError(msg)
        model.is_read = True
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[str], *, user_id: str) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: str) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def delete(self, notification_id: str) -> None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            kind=NotificationKind(model.type),
            title=model.title,
            message=model.message,
            payload=model.data or {},
            is_read=bool(model.is_read),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["NotificationRepository"]
