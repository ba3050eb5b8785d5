"""Team and invitation schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from teamhub.domain.entities import InvitationStatus


class TeamMemberRead(BaseModel):
    user_id: str
    role: str
    joined_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    member_ids: list[str] = Field(default_factory=list)


class TeamRead(BaseModel):
    id: str
    name: str
    members: list[TeamMemberRead] = Field(default_factory=list)
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class InvitationCreate(BaseModel):
    emails: list[EmailStr] = Field(..., min_length=1)
    team_name: str
    role: str = "MEMBER"
    message: str | None = None


class InvitationResultRead(BaseModel):
    email: str
    status: str


class InvitationBatchResponse(BaseModel):
    message: str
    results: list[InvitationResultRead]


class InvitationRead(BaseModel):
    id: str
    email: str
    team_id: str
    role: str
    status: InvitationStatus

    model_config = ConfigDict(from_attributes=True)


class InvitationAcceptResponse(BaseModel):
    message: str
    team_id: str
    team_name: str
