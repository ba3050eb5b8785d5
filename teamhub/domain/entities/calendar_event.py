"""Domain entity representing a scheduled calendar event."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EventType(str, Enum):
    MEETING = "MEETING"
    DEADLINE = "DEADLINE"
    EVENT = "EVENT"


@dataclass
class CalendarEvent:
    """Meeting, deadline or generic event with its attendees."""

    id: str | None
    title: str
    type: EventType
    start_time: datetime
    end_time: datetime
    description: str | None = None
    project_id: str | None = None
    attendee_ids: list[str] = field(default_factory=list)
    created_at: datetime | None = None


__all__ = ["CalendarEvent", "EventType"]
