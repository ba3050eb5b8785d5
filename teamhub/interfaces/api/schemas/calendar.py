"""Calendar event schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from teamhub.domain.entities import EventType


class CalendarEventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    type: EventType = EventType.MEETING
    start_time: datetime
    end_time: datetime
    description: str | None = None
    project_id: str | None = None
    attendee_ids: list[str] = Field(default_factory=list)


class CalendarEventRead(BaseModel):
    id: str
    title: str
    type: EventType
    start_time: datetime
    end_time: datetime
    description: str | None = None
    project_id: str | None = None
    attendee_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
