"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from teamhub.domain.entities import Notification


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    type: str
    title: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_entity(cls, notification: Notification) -> NotificationRead:
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.kind.value,
            title=notification.title,
            message=notification.message,
            data=dict(notification.payload or {}),
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class NotificationList(BaseModel):
    items: list[NotificationRead]
    unread_count: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarkedReadResponse(BaseModel):
    updated: int


__all__ = ["MarkedReadResponse", "NotificationList", "NotificationRead"]
