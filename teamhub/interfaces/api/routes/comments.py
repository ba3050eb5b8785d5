"""Routes for task comments."""

from fastapi import APIRouter, Depends, Header, Response, status
from sqlalchemy.orm import Session

from teamhub.application.use_cases.comments import (
    create_comment,
    delete_comment,
    list_comments,
)
from teamhub.domain.entities import User
from teamhub.domain.errors import TeamHubError
from teamhub.infrastructure.database import get_db
from teamhub.infrastructure.notifications import presence_router
from teamhub.interfaces.api.dependencies import get_current_user
from teamhub.interfaces.api.routes_helpers import to_http_error
from teamhub.interfaces.api.schemas import CommentCreate, CommentRead

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/task/{task_id}", response_model=list[CommentRead])
def read_task_comments(
    task_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return [CommentRead.model_validate(comment) for comment in list_comments(db, task_id)]


@router.post(
    "/task/{task_id}",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
def add_task_comment(
    task_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    x_session_id: str | None = Header(default=None),
):
    """Save a comment on the task.

    ``X-Session-Id`` names the websocket session of the author so the room
    update is not echoed back to it. A session owned by someone else is ignored.
    """

    try:
        comment = create_comment(
            db,
            task_id=task_id,
            author=current_user,
            content=payload.content,
            attachments=payload.attachments,
            origin_session=_own_session(x_session_id, current_user),
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return CommentRead.model_validate(comment)


def _own_session(session_id: str | None, user: User) -> str | None:
    if not session_id:
        return None
    session = presence_router.get_session(session_id)
    if session is None or session.user_id != user.id:
        return None
    return session.id


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_comment(db, comment_id, user=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
