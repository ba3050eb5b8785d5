"""Persistence helpers for projects and tasks."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from teamhub.domain.entities import Project, Task, TaskPriority, TaskStatus
from teamhub.infrastructure.models import ProjectModel, TaskModel, TeamMemberModel
from teamhub.utils import ensure_utc, ensure_utc_naive


class ProjectRepository:
    """Provide CRUD operations for :class:`Project` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, project_id: str) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def list(self, *, visible_to: str | None = None) -> Sequence[Project]:
        """Return projects, restricted to those managed by or shared with ``visible_to``."""

        query = self.session.query(ProjectModel)
        if visible_to is not None:
            member_teams = self.session.query(TeamMemberModel.team_id).filter(
                TeamMemberModel.user_id == visible_to
            )
            query = query.filter(
                or_(
                    ProjectModel.manager_id == visible_to,
                    ProjectModel.team_id.in_(member_teams),
                )
            )
        query = query.order_by(ProjectModel.created_at.desc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, project: Project) -> Project:
        model = ProjectModel(
            name=project.name,
            description=project.description,
            status=project.status,
            manager_id=project.manager_id,
            team_id=project.team_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, project: Project) -> Project:
        model = self.session.get(ProjectModel, project.id)
        if model is None:
            msg = f"Project with id {project.id} not found"
            raise ValueError(msg)
        model.name = project.name
        model.description = project.description
        model.status = project.status
        model.team_id = project.team_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, project_id: str) -> None:
        model = self.session.get(ProjectModel, project_id)
        if model is None:
            msg = f"Project with id {project_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            name=model.name,
            manager_id=model.manager_id,
            team_id=model.team_id,
            description=model.description,
            status=model.status,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


class TaskRepository:
    """Provide CRUD operations for :class:`Task` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, task_id: str) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def list_for_project(self, project_id: str) -> Sequence[Task]:
        query = (
            self.session.query(TaskModel)
            .filter(TaskModel.project_id == project_id)
            .order_by(TaskModel.created_at.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list(
        self,
        *,
        project_id: str | None = None,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        assigned_to_id: str | None = None,
        involving: str | None = None,
    ) -> Sequence[Task]:
        """Return tasks newest first.

        ``involving`` keeps only tasks assigned to or created by that user.
        """

        query = self.session.query(TaskModel)
        if project_id is not None:
            query = query.filter(TaskModel.project_id == project_id)
        if status is not None:
            query = query.filter(TaskModel.status == TaskStatus(status).value)
        if priority is not None:
            query = query.filter(TaskModel.priority == TaskPriority(priority).value)
        if assigned_to_id is not None:
            query = query.filter(TaskModel.assigned_to_id == assigned_to_id)
        if involving is not None:
            query = query.filter(
                or_(TaskModel.assigned_to_id == involving, TaskModel.created_by_id == involving)
            )
        query = query.order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, task: Task) -> Task:
        model = TaskModel(
            name=task.name,
            description=task.description,
            status=TaskStatus(task.status).value,
            priority=TaskPriority(task.priority).value,
            due_date=ensure_utc_naive(task.due_date),
            project_id=task.project_id,
            assigned_to_id=task.assigned_to_id,
            created_by_id=task.created_by_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        model = self.session.get(TaskModel, task.id)
        if model is None:
            msg = f"Task with id {task.id} not found"
            raise ValueError(msg)
        model.name = task.name
        model.description = task.description
        model.status = TaskStatus(task.status).value
        model.priority = TaskPriority(task.priority).value
        model.due_date = ensure_utc_naive(task.due_date)
        model.assigned_to_id = task.assigned_to_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, task_id: str) -> None:
        model = self.session.get(TaskModel, task_id)
        if model is None:
            msg = f"Task with id {task_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            name=model.name,
            project_id=model.project_id,
            created_by_id=model.created_by_id,
            description=model.description,
            status=TaskStatus(model.status),
            priority=TaskPriority(model.priority),
            due_date=ensure_utc(model.due_date),
            assigned_to_id=model.assigned_to_id,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["ProjectRepository", "TaskRepository"]
