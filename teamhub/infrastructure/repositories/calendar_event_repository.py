"""Persistence helpers for calendar events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from teamhub.domain.entities import CalendarEvent, EventType
from teamhub.infrastructure.models import (
    CalendarEventModel,
    EventAttendeeModel,
    ProjectModel,
    TeamMemberModel,
)
from teamhub.utils import ensure_utc, ensure_utc_naive


class CalendarEventRepository:
    """Provide CRUD operations for :class:`CalendarEvent` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: str) -> CalendarEvent | None:
        model = self.session.get(CalendarEventModel, event_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: str,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> Sequence[CalendarEvent]:
        """Return events the user attends or that belong to one of their teams' projects."""

        attending = self.session.query(EventAttendeeModel.event_id).filter(
            EventAttendeeModel.user_id == user_id
        )
        team_projects = (
            self.session.query(ProjectModel.id)
            .join(TeamMemberModel, TeamMemberModel.team_id == ProjectModel.team_id)
            .filter(TeamMemberModel.user_id == user_id)
        )
        query = self.session.query(CalendarEventModel).filter(
            or_(
                CalendarEventModel.id.in_(attending),
                CalendarEventModel.project_id.in_(team_projects),
            )
        )
        if start is not None and end is not None:
            query = query.filter(
                CalendarEventModel.start_time >= ensure_utc_naive(start),
                CalendarEventModel.start_time <= ensure_utc_naive(end),
            )
        query = query.order_by(CalendarEventModel.start_time.asc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, event: CalendarEvent) -> CalendarEvent:
        model = CalendarEventModel(
            title=event.title,
            description=event.description,
            type=EventType(event.type).value,
            start_time=ensure_utc_naive(event.start_time),
            end_time=ensure_utc_naive(event.end_time),
            project_id=event.project_id,
        )
        for user_id in dict.fromkeys(event.attendee_ids):
            model.attendees.append(EventAttendeeModel(user_id=user_id))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, event_id: str) -> None:
        model = self.session.get(CalendarEventModel, event_id)
        if model is None:
            msg = f"Event with id {event_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: CalendarEventModel) -> CalendarEvent:
        return CalendarEvent(
            id=model.id,
            title=model.title,
            type=EventType(model.type),
            start_time=ensure_utc(model.start_time),
            end_time=ensure_utc(model.end_time),
            description=model.description,
            project_id=model.project_id,
            attendee_ids=[attendee.user_id for attendee in model.attendees],
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["CalendarEventRepository"]
