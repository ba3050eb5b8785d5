"""Helpers to broadcast realtime events to collaboration rooms."""

from __future__ import annotations

import copy
from typing import Any

from .presence import PresenceRouter, presence_router
from .publisher import schedule_delivery


class RealtimeEventPublisher:
    """Dispatch structured realtime events to everyone viewing a room."""

    def __init__(self, router: PresenceRouter) -> None:
        self._router = router

    def broadcast(
        self,
        room_id: str,
        *,
        event_type: str,
        payload: Any,
        exclude_session: str | None = None,
    ) -> None:
        """Schedule ``event_type`` for every session in ``room_id``."""

        if not room_id:
            return
        schedule_delivery(
            self._broadcast, room_id, event_type, copy.deepcopy(payload), exclude_session
        )

    async def _broadcast(
        self, room_id: str, event_type: str, payload: Any, exclude_session: str | None
    ) -> int:
        return await self._router.broadcast_to_room(
            room_id, event_type, payload, exclude=exclude_session
        )


realtime_event_publisher = RealtimeEventPublisher(presence_router)


__all__ = [
    "RealtimeEventPublisher",
    "realtime_event_publisher",
]
