"""Routes for calendar events."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from teamhub.application.use_cases.calendar import create_event, delete_event, list_events
from teamhub.domain.entities import User
from teamhub.domain.errors import TeamHubError
from teamhub.infrastructure.database import get_db
from teamhub.interfaces.api.dependencies import get_current_user
from teamhub.interfaces.api.routes_helpers import to_http_error
from teamhub.interfaces.api.schemas import CalendarEventCreate, CalendarEventRead

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.post("/", response_model=CalendarEventRead, status_code=status.HTTP_201_CREATED)
def schedule_event(
    payload: CalendarEventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Schedule an event and notify its attendees and the project's team."""

    try:
        event = create_event(
            db,
            title=payload.title,
            event_type=payload.type,
            start_time=payload.start_time,
            end_time=payload.end_time,
            creator=current_user,
            description=payload.description,
            project_id=payload.project_id,
            attendee_ids=payload.attendee_ids,
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return CalendarEventRead.model_validate(event)


@router.get("/", response_model=list[CalendarEventRead])
def read_events(
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    events = list_events(db, user=current_user, start=start, end=end)
    return [CalendarEventRead.model_validate(event) for event in events]


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_event(
    event_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    try:
        delete_event(db, event_id)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
