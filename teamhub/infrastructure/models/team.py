"""SQLAlchemy models for teams, memberships and invitations."""

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from teamhub.infrastructure.database import Base, generate_id
from teamhub.utils import utcnow_naive


class TeamModel(Base):
    """Database representation of a team."""

    __tablename__ = "team"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(120), nullable=False, unique=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utcnow_naive)

    members = relationship(
        "TeamMemberModel",
        back_populates="team",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class TeamMemberModel(Base):
    """Membership of a user inside a team."""

    __tablename__ = "team_member"
    __table_args__ = (UniqueConstraint("user_id", "team_id", name="uq_team_member_user_team"),)

    id = Column(String(32), primary_key=True, default=generate_id)
    team_id = Column(
        String(32), ForeignKey("team.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        String(32), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role = Column(String(50), nullable=False, default="MEMBER")
    joined_at = Column(DateTime, nullable=False, default=utcnow_naive)

    team = relationship("TeamModel", back_populates="members")
    user = relationship("UserModel", lazy="joined")


class InvitationModel(Base):
    """Invitation sent to an email address to join a team."""

    __tablename__ = "invitation"
    __table_args__ = (UniqueConstraint("email", "team_id", name="uq_invitation_email_team"),)

    id = Column(String(32), primary_key=True, default=generate_id)
    email = Column(String(120), nullable=False, index=True)
    team_id = Column(
        String(32), ForeignKey("team.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role = Column(String(50), nullable=False)
    token = Column(String(64), nullable=False, unique=True, index=True)
    status = Column(String(20), nullable=False, default="PENDING")
    invited_by = Column(String(32), ForeignKey("user.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utcnow_naive)

    team = relationship("TeamModel", lazy="joined")


__all__ = ["TeamModel", "TeamMemberModel", "InvitationModel"]
