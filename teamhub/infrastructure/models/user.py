"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, String

from teamhub.infrastructure.database import Base, generate_id
from teamhub.utils import utcnow_naive


class UserModel(Base):
    """Database representation of the system user."""

    __tablename__ = "user"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="MEMBER")
    avatar = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utcnow_naive)


__all__ = ["UserModel"]
