"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from teamhub.domain.entities import User, UserRole
from teamhub.infrastructure.models import UserModel
from teamhub.utils import ensure_utc


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_by_ids(self, user_ids: Iterable[str]) -> Sequence[User]:
        ids = list({user_id for user_id in user_ids if user_id})
        if not ids:
            return []
        query = self.session.query(UserModel).filter(UserModel.id.in_(ids))
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            role=UserRole(user.role).value,
            avatar=user.avatar,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_password(self, user_id: str, hashed_password: str) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.password = hashed_password
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_role(self, user_id: str, role: UserRole) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.role = UserRole(role).value
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=UserRole(model.role),
            avatar=model.avatar,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["UserRepository"]
