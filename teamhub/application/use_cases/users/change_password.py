"""Use case for changing the password of the authenticated user."""

from sqlalchemy.orm import Session

from teamhub.application.use_cases.notifications import notify_security_update
from teamhub.domain.entities import User
from teamhub.domain.errors import NotFoundError, ValidationError
from teamhub.infrastructure.repositories import UserRepository
from teamhub.infrastructure.security import get_password_hash, verify_password

from .create_user import MIN_PASSWORD_LENGTH


def change_password(
    session: Session,
    user_id: str,
    *,
    current_password: str,
    new_password: str,
) -> User:
    """Replace the password and notify every session of the user about it."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None or not user.password:
        raise NotFoundError("User not found or using social login")
    if not verify_password(current_password, user.password):
        raise ValidationError("Current password is incorrect")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    updated = repository.update_password(user_id, get_password_hash(new_password))
    notify_security_update(session, user=updated, change="password")
    return updated
