"""Realtime notification helpers for the infrastructure layer."""

from .presence import PresenceRouter, PresenceSession, presence_router
from .publisher import (
    NOTIFICATION_EVENT,
    NotificationPublisher,
    notification_publisher,
    schedule_delivery,
    serialize_notification,
)
from .realtime import RealtimeEventPublisher, realtime_event_publisher

__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "PresenceRouter",
    "PresenceSession",
    "RealtimeEventPublisher",
    "notification_publisher",
    "presence_router",
    "realtime_event_publisher",
    "schedule_delivery",
    "serialize_notification",
]
