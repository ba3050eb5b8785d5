"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable
import logging

from anyio import from_thread

from teamhub.domain.entities import Notification
from teamhub.utils import iso_or_none

from .presence import PresenceRouter, presence_router

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "new_notification"

_pending: set[asyncio.Task] = set()


def schedule_delivery(send: Callable[..., Awaitable[Any]], *args: Any) -> None:
    """Run ``send(*args)`` on the event loop without waiting for it.

    Works from coroutines running on the loop and from the worker threads that
    serve sync routes. Outside of both the push is dropped, which is acceptable
    because the notification is already stored.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        try:
            from_thread.run_sync(_spawn, send, args)
        except RuntimeError:
            logger.debug("No event loop available; skipping live push via %s", send)
    else:
        _spawn(send, args, loop=loop)


def _spawn(
    send: Callable[..., Awaitable[Any]],
    args: tuple[Any, ...],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> None:
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(send(*args))
    _pending.add(task)
    task.add_done_callback(_finish)


def _finish(task: asyncio.Task) -> None:
    _pending.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.warning("Live push failed", exc_info=task.exception())


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, router: PresenceRouter) -> None:
        self._router = router

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its recipient's sessions."""

        schedule_delivery(
            self._router.deliver,
            notification.user_id,
            NOTIFICATION_EVENT,
            serialize_notification(notification),
        )


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "userId": notification.user_id,
        "type": notification.kind.value,
        "title": notification.title,
        "message": notification.message,
        "data": dict(notification.payload or {}),
        "isRead": notification.is_read,
        "createdAt": iso_or_none(notification.created_at),
    }


notification_publisher = NotificationPublisher(presence_router)


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "notification_publisher",
    "schedule_delivery",
    "serialize_notification",
]
