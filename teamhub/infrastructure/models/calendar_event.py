"""SQLAlchemy models for calendar events and their attendees."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from teamhub.infrastructure.database import Base, generate_id
from teamhub.utils import utcnow_naive


class CalendarEventModel(Base):
    """Database representation of a scheduled event."""

    __tablename__ = "calendar_event"

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False, default="EVENT")
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    project_id = Column(
        String(32), ForeignKey("project.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow_naive)

    attendees = relationship(
        "EventAttendeeModel",
        back_populates="event",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class EventAttendeeModel(Base):
    __tablename__ = "event_attendee"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_attendee"),)

    id = Column(String(32), primary_key=True, default=generate_id)
    event_id = Column(
        String(32),
        ForeignKey("calendar_event.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        String(32), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )

    event = relationship("CalendarEventModel", back_populates="attendees")


__all__ = ["CalendarEventModel", "EventAttendeeModel"]
