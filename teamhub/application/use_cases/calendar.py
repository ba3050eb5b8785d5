"""Use cases for calendar events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from teamhub.application.use_cases.notifications import notify_event_scheduled
from teamhub.domain.entities import CalendarEvent, EventType, User
from teamhub.domain.errors import NotFoundError, ValidationError
from teamhub.infrastructure.repositories import (
    CalendarEventRepository,
    ProjectRepository,
    UserRepository,
)


def create_event(
    session: Session,
    *,
    title: str,
    event_type: EventType,
    start_time: datetime,
    end_time: datetime,
    creator: User,
    description: str | None = None,
    project_id: str | None = None,
    attendee_ids: list[str] | None = None,
) -> CalendarEvent:
    """Schedule an event; the creator always attends it."""

    if not title.strip():
        raise ValidationError("Event title is required")
    if end_time < start_time:
        raise ValidationError("Event cannot end before it starts")
    if project_id and ProjectRepository(session).get(project_id) is None:
        raise NotFoundError("Project not found")

    requested = [attendee_id for attendee_id in attendee_ids or [] if attendee_id]
    attendees = list(dict.fromkeys([*requested, creator.id]))
    known = {user.id for user in UserRepository(session).list_by_ids(attendees)}
    unknown = set(attendees) - known
    if unknown:
        raise ValidationError(f"Unknown user ids: {', '.join(sorted(unknown))}")

    event = CalendarEventRepository(session).create(
        CalendarEvent(
            id=None,
            title=title.strip(),
            type=EventType(event_type),
            start_time=start_time,
            end_time=end_time,
            description=description,
            project_id=project_id,
            attendee_ids=attendees,
        )
    )

    notify_event_scheduled(session, event=event, actor=creator)
    return event


def list_events(
    session: Session,
    *,
    user: User,
    start: datetime | None = None,
    end: datetime | None = None,
) -> Sequence[CalendarEvent]:
    return CalendarEventRepository(session).list_for_user(user.id, start=start, end=end)


def delete_event(session: Session, event_id: str) -> None:
    repository = CalendarEventRepository(session)
    if repository.get(event_id) is None:
        raise NotFoundError("Event not found")
    repository.delete(event_id)


__all__ = ["create_event", "delete_event", "list_events"]
