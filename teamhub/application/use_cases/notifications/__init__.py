"""Notification fan-out: recipient resolution, durable store and triggers."""

from .fanout import (
    COMMENT_ROOM_EVENT,
    NotificationDraft,
    fan_out,
    notify_added_to_team,
    notify_comment_added,
    notify_event_scheduled,
    notify_security_update,
    notify_team_invitation,
    serialize_comment,
)
from .recipients import (
    CommentContext,
    EventContext,
    RecipientPolicy,
    SecurityContext,
    TargetedContext,
    resolve_recipients,
)
from .store import (
    count_unread_notifications,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notifications_read,
    record_notification,
)

__all__ = [
    "COMMENT_ROOM_EVENT",
    "CommentContext",
    "EventContext",
    "NotificationDraft",
    "RecipientPolicy",
    "SecurityContext",
    "TargetedContext",
    "count_unread_notifications",
    "delete_notification",
    "fan_out",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notifications_read",
    "notify_added_to_team",
    "notify_comment_added",
    "notify_event_scheduled",
    "notify_security_update",
    "notify_team_invitation",
    "record_notification",
    "resolve_recipients",
    "serialize_comment",
]
