"""Use case for registering users."""

from sqlalchemy.orm import Session

from teamhub.domain.entities import User, UserRole
from teamhub.domain.errors import ConflictError, ValidationError
from teamhub.infrastructure.repositories import UserRepository
from teamhub.infrastructure.security import get_password_hash

MIN_PASSWORD_LENGTH = 6


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.MEMBER,
    avatar: str | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    if not name.strip():
        raise ValidationError("Name is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ConflictError("Email is already registered")

    user = User(
        id=None,
        name=name.strip(),
        email=email,
        password=get_password_hash(password),
        role=UserRole(role),
        avatar=avatar,
    )
    return repository.create(user)
