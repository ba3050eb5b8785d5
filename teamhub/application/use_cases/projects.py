"""Use cases for projects and their tasks."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from sqlalchemy.orm import Session

from teamhub.domain.entities import Project, Task, TaskPriority, TaskStatus, User
from teamhub.domain.errors import ForbiddenError, NotFoundError, ValidationError
from teamhub.infrastructure.repositories import (
    ProjectRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)


def create_project(
    session: Session,
    *,
    name: str,
    manager: User,
    description: str | None = None,
    team_id: str | None = None,
) -> Project:
    if not name.strip():
        raise ValidationError("Project name is required")
    if team_id and TeamRepository(session).get(team_id) is None:
        raise NotFoundError("Team not found")
    project = Project(
        id=None,
        name=name.strip(),
        manager_id=manager.id,
        team_id=team_id,
        description=description,
    )
    return ProjectRepository(session).create(project)


def list_projects(session: Session, *, user: User) -> Sequence[Project]:
    """Managers see every project; members see those shared with their teams."""

    visible_to = None if user.is_manager() else user.id
    return ProjectRepository(session).list(visible_to=visible_to)


def get_project(session: Session, project_id: str, *, user: User) -> Project:
    project = ProjectRepository(session).get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if not can_access_project(session, project, user):
        raise ForbiddenError("You do not have access to this project")
    return project


def update_project(
    session: Session,
    project_id: str,
    *,
    user: User,
    name: str | None = None,
    description: str | None = None,
    status: str | None = None,
    team_id: str | None = None,
) -> Project:
    """Apply the given changes; fields left as ``None`` keep their value."""

    repository = ProjectRepository(session)
    project = repository.get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if project.manager_id != user.id:
        raise ForbiddenError("Only the project manager can update the project")
    if name is not None and not name.strip():
        raise ValidationError("Project name is required")
    if team_id and TeamRepository(session).get(team_id) is None:
        raise NotFoundError("Team not found")

    updated = replace(
        project,
        name=name.strip() if name is not None else project.name,
        description=description if description is not None else project.description,
        status=status or project.status,
        team_id=team_id if team_id is not None else project.team_id,
    )
    return repository.update(updated)


def delete_project(session: Session, project_id: str, *, user: User) -> None:
    repository = ProjectRepository(session)
    project = repository.get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if project.manager_id != user.id:
        raise ForbiddenError("Only the project manager can delete the project")
    repository.delete(project_id)


def can_access_project(session: Session, project: Project, user: User) -> bool:
    if user.is_manager() or project.manager_id == user.id:
        return True
    return bool(project.team_id) and TeamRepository(session).is_member(project.team_id, user.id)


def create_task(
    session: Session,
    *,
    name: str,
    project_id: str,
    creator: User,
    description: str | None = None,
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.MEDIUM,
    due_date: datetime | None = None,
    assigned_to_id: str | None = None,
) -> Task:
    if not name.strip():
        raise ValidationError("Task name is required")
    get_project(session, project_id, user=creator)
    task = Task(
        id=None,
        name=name.strip(),
        project_id=project_id,
        created_by_id=creator.id,
        description=description,
        status=status,
        priority=priority,
        due_date=due_date,
        assigned_to_id=assigned_to_id,
    )
    return TaskRepository(session).create(task)


def list_tasks(session: Session, project_id: str, *, user: User) -> Sequence[Task]:
    get_project(session, project_id, user=user)
    return TaskRepository(session).list_for_project(project_id)


def list_tasks_for_user(
    session: Session,
    *,
    user: User,
    project_id: str | None = None,
    status: TaskStatus | None = None,
    priority: TaskPriority | None = None,
    assignee_id: str | None = None,
) -> Sequence[Task]:
    """List tasks across projects.

    Without a project filter, members only see tasks assigned to or created by
    them; managers see every task.
    """

    involving = None
    if project_id:
        get_project(session, project_id, user=user)
    elif not user.is_manager():
        involving = user.id
    return TaskRepository(session).list(
        project_id=project_id or None,
        status=status,
        priority=priority,
        assigned_to_id=assignee_id,
        involving=involving,
    )


def get_task(session: Session, task_id: str) -> Task:
    task = TaskRepository(session).get(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def update_task(
    session: Session,
    task_id: str,
    *,
    user: User,
    name: str | None = None,
    description: str | None = None,
    status: TaskStatus | None = None,
    priority: TaskPriority | None = None,
    due_date: datetime | None = None,
    assigned_to_id: str | None = None,
) -> Task:
    """Move a task through its workflow or change its details.

    Anyone with access to the project may update its tasks; fields left as
    ``None`` keep their value.
    """

    task = get_task(session, task_id)
    get_project(session, task.project_id, user=user)
    if name is not None and not name.strip():
        raise ValidationError("Task name is required")
    if assigned_to_id and UserRepository(session).get(assigned_to_id) is None:
        raise ValidationError(f"Unknown user id: {assigned_to_id}")

    updated = replace(
        task,
        name=name.strip() if name is not None else task.name,
        description=description if description is not None else task.description,
        status=TaskStatus(status) if status is not None else task.status,
        priority=TaskPriority(priority) if priority is not None else task.priority,
        due_date=due_date if due_date is not None else task.due_date,
        assigned_to_id=assigned_to_id if assigned_to_id is not None else task.assigned_to_id,
    )
    return TaskRepository(session).update(updated)


def delete_task(session: Session, task_id: str, *, user: User) -> None:
    task = get_task(session, task_id)
    project = ProjectRepository(session).get(task.project_id)
    if task.created_by_id != user.id and (project is None or project.manager_id != user.id):
        raise ForbiddenError("Only the creator or the project manager can delete the task")
    TaskRepository(session).delete(task_id)


__all__ = [
    "can_access_project",
    "create_project",
    "create_task",
    "delete_project",
    "delete_task",
    "get_project",
    "get_task",
    "list_projects",
    "list_tasks",
    "list_tasks_for_user",
    "update_project",
    "update_task",
]
