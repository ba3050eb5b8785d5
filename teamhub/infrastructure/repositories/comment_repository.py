"""Persistence helpers for task comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from teamhub.domain.entities import Comment, CommentAuthor
from teamhub.infrastructure.models import CommentModel
from teamhub.utils import ensure_utc


class CommentRepository:
    """Provide CRUD operations for :class:`Comment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, comment_id: str) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._to_entity(model) if model else None

    def list_for_task(self, task_id: str) -> Sequence[Comment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.task_id == task_id)
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            content=comment.content,
            attachments=list(comment.attachments),
            task_id=comment.task_id,
            author_id=comment.author_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, comment_id: str) -> None:
        model = self.session.get(CommentModel, comment_id)
        if model is None:
            msg = f"Comment with id {comment_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        author = None
        if model.author is not None:
            author = CommentAuthor(
                id=model.author.id,
                name=model.author.name,
                avatar=model.author.avatar,
            )
        return Comment(
            id=model.id,
            content=model.content,
            task_id=model.task_id,
            author_id=model.author_id,
            attachments=list(model.attachments or []),
            author=author,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["CommentRepository"]
