"""Use case for promoting or demoting a member."""

from sqlalchemy.orm import Session

from teamhub.domain.entities import User, UserRole
from teamhub.domain.errors import NotFoundError, ValidationError
from teamhub.infrastructure.repositories import UserRepository


def update_member_role(session: Session, user_id: str, *, role: UserRole, actor: User) -> User:
    repository = UserRepository(session)
    if repository.get(user_id) is None:
        raise NotFoundError("User not found")
    if user_id == actor.id:
        raise ValidationError("You cannot change your own role")
    return repository.update_role(user_id, UserRole(role))
