"""Routes for projects and their tasks."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from teamhub.application.use_cases import projects as project_use_cases
from teamhub.domain.entities import TaskPriority, TaskStatus, User
from teamhub.domain.errors import TeamHubError
from teamhub.infrastructure.database import get_db
from teamhub.interfaces.api.dependencies import get_current_user, require_manager
from teamhub.interfaces.api.routes_helpers import to_http_error
from teamhub.interfaces.api.schemas import (
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])
tasks_router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    try:
        project = project_use_cases.create_project(
            db,
            name=payload.name,
            manager=current_user,
            description=payload.description,
            team_id=payload.team_id,
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return ProjectRead.model_validate(project)


@router.get("/", response_model=list[ProjectRead])
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    projects = project_use_cases.list_projects(db, user=current_user)
    return [ProjectRead.model_validate(project) for project in projects]


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        project = project_use_cases.get_project(db, project_id, user=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return ProjectRead.model_validate(project)


@router.get("/{project_id}/tasks", response_model=list[TaskRead])
def read_project_tasks(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        tasks = project_use_cases.list_tasks(db, project_id, user=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return [TaskRead.model_validate(task) for task in tasks]


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    try:
        project = project_use_cases.update_project(
            db, project_id, user=current_user, **payload.model_dump(exclude_unset=True)
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        project_use_cases.delete_project(db, project_id, user=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@tasks_router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = project_use_cases.create_task(
            db,
            name=payload.name,
            project_id=payload.project_id,
            creator=current_user,
            description=payload.description,
            status=payload.status,
            priority=payload.priority,
            due_date=payload.due_date,
            assigned_to_id=payload.assigned_to_id,
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return TaskRead.model_validate(task)


@tasks_router.get("/", response_model=list[TaskRead])
def list_tasks(
    project_id: str | None = Query(None, alias="projectId"),
    task_status: TaskStatus | None = Query(None, alias="status"),
    priority: TaskPriority | None = Query(None),
    assignee_id: str | None = Query(None, alias="assigneeId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List tasks, optionally filtered by project, status, priority or assignee."""

    try:
        tasks = project_use_cases.list_tasks_for_user(
            db,
            user=current_user,
            project_id=project_id,
            status=task_status,
            priority=priority,
            assignee_id=assignee_id,
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return [TaskRead.model_validate(task) for task in tasks]


@tasks_router.get("/{task_id}", response_model=TaskRead)
def read_task(
    task_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    try:
        task = project_use_cases.get_task(db, task_id)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return TaskRead.model_validate(task)


@tasks_router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: str,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = project_use_cases.update_task(
            db, task_id, user=current_user, **payload.model_dump(exclude_unset=True)
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return TaskRead.model_validate(task)


@tasks_router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        project_use_cases.delete_task(db, task_id, user=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
