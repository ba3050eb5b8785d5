"""Comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)
    attachments: list[str] = Field(default_factory=list)


class CommentAuthorRead(BaseModel):
    id: str
    name: str
    avatar: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentRead(BaseModel):
    id: str
    content: str
    task_id: str
    author_id: str
    attachments: list[str] = Field(default_factory=list)
    author: CommentAuthorRead | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
