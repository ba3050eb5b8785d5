"""Project and task schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from teamhub.domain.entities import TaskPriority, TaskStatus


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    team_id: str | None = None


class ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    status: str | None = Field(None, min_length=1, max_length=30)
    team_id: str | None = None


class ProjectRead(BaseModel):
    id: str
    name: str
    description: str | None = None
    status: str
    manager_id: str
    team_id: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class TaskCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    project_id: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assigned_to_id: str | None = None


class TaskUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assigned_to_id: str | None = None


class TaskRead(BaseModel):
    id: str
    name: str
    project_id: str
    created_by_id: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    assigned_to_id: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
