"""Domain entities for projects, tasks and comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class Project:
    """A body of work owned by a manager and optionally shared with a team."""

    id: str | None
    name: str
    manager_id: str
    team_id: str | None = None
    description: str | None = None
    status: str = "ACTIVE"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Task:
    """A unit of work inside a project."""

    id: str | None
    name: str
    project_id: str
    created_by_id: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assigned_to_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class CommentAuthor:
    id: str
    name: str
    avatar: str | None = None


@dataclass
class Comment:
    """Message left by a user on a task."""

    id: str | None
    content: str
    task_id: str
    author_id: str
    attachments: list[str] = field(default_factory=list)
    author: CommentAuthor | None = None
    created_at: datetime | None = None


__all__ = [
    "Comment",
    "CommentAuthor",
    "Project",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
