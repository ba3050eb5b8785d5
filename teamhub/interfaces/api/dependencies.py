"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from teamhub.domain.entities import User
from teamhub.domain.errors import UnauthenticatedError
from teamhub.infrastructure.database import get_db
from teamhub.infrastructure.repositories import UserRepository
from teamhub.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str | None, db: Session) -> User:
    """Resolve the authenticated user for the provided token.

    Tokens issued before the user's last password change are rejected.
    """

    if not token:
        raise _unauthorized("Authentication required")
    try:
        payload = decode_access_token(token)
    except UnauthenticatedError as exc:
        raise _unauthorized(exc.message) from exc

    user_id = payload.get("sub")
    signature = payload.get("pwd_sig")
    if not isinstance(user_id, str) or not isinstance(signature, str):
        raise _unauthorized("Invalid or expired token")

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    if signature != password_signature(user):
        raise _unauthorized("Invalid or expired token")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def require_manager(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has the manager role."""

    if not current_user.is_manager():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Manager access required",
        )
    return current_user
