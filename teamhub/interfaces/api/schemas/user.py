"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr

from teamhub.domain.entities import UserRole


class UserRead(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: UserRole
    avatar: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserSummaryRead(BaseModel):
    id: str
    name: str
    email: EmailStr
    avatar: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MemberRoleUpdate(BaseModel):
    role: UserRole
