"""Domain entities for teams, memberships and invitations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class InvitationStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


@dataclass
class TeamMember:
    """Membership of a user inside a team."""

    id: str | None
    team_id: str
    user_id: str
    role: str = "MEMBER"
    joined_at: datetime | None = None


@dataclass
class Team:
    """Group of users sharing projects."""

    id: str | None
    name: str
    members: list[TeamMember] = field(default_factory=list)
    created_at: datetime | None = None

    def member_ids(self) -> set[str]:
        return {member.user_id for member in self.members}


@dataclass
class Invitation:
    """Pending, accepted or declined request for an email to join a team."""

    id: str | None
    email: str
    team_id: str
    role: str
    token: str
    status: InvitationStatus = InvitationStatus.PENDING
    invited_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Team", "TeamMember", "Invitation", "InvitationStatus"]
