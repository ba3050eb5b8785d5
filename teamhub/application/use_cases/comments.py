"""Use cases for task comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from teamhub.application.use_cases.notifications import notify_comment_added
from teamhub.domain.entities import Comment, User
from teamhub.domain.errors import ForbiddenError, NotFoundError, ValidationError
from teamhub.infrastructure.repositories import CommentRepository, TaskRepository


def create_comment(
    session: Session,
    *,
    task_id: str,
    author: User,
    content: str,
    attachments: list[str] | None = None,
    origin_session: str | None = None,
) -> Comment:
    """Save the comment, then notify the task's audience.

    The comment is committed before any notification work starts, and nothing
    that happens during fan-out changes the returned value.
    """

    if not content or not content.strip():
        raise ValidationError("Comment content is required")

    task = TaskRepository(session).get(task_id)
    if task is None:
        raise NotFoundError("Task not found")

    comment = CommentRepository(session).create(
        Comment(
            id=None,
            content=content,
            task_id=task.id,
            author_id=author.id,
            attachments=list(attachments or []),
        )
    )

    notify_comment_added(
        session,
        comment=comment,
        task=task,
        author=author,
        origin_session=origin_session,
    )
    return comment


def list_comments(session: Session, task_id: str) -> Sequence[Comment]:
    return CommentRepository(session).list_for_task(task_id)


def delete_comment(session: Session, comment_id: str, *, user: User) -> None:
    repository = CommentRepository(session)
    comment = repository.get(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    if comment.author_id != user.id:
        raise ForbiddenError("Unauthorized to delete this comment")
    repository.delete(comment_id)


__all__ = ["create_comment", "delete_comment", "list_comments"]
