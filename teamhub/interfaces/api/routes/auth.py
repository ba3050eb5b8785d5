"""Endpoints for registration, login and password management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from teamhub.application.use_cases.users import authenticate_user, change_password, create_user
from teamhub.domain.entities import User
from teamhub.domain.errors import TeamHubError
from teamhub.infrastructure.database import get_db
from teamhub.infrastructure.security import create_access_token
from teamhub.interfaces.api.dependencies import get_current_user
from teamhub.interfaces.api.routes_helpers import to_http_error
from teamhub.interfaces.api.schemas import (
    MessageResponse,
    PasswordChangeRequest,
    RegisterRequest,
    Token,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account with email and password."""

    try:
        user = create_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            avatar=payload.avatar,
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    logger.info("Registered user %s", user.id)
    return UserRead.model_validate(user)


# The form is expected by OAuth2PasswordRequestForm; ``username`` carries the email.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and return a bearer token."""

    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {
        "access_token": create_access_token(user),
        "token_type": "bearer",
        "role": user.role.value,
    }


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)):
    return UserRead.model_validate(current_user)


@router.put("/password", response_model=MessageResponse)
def update_password(
    payload: PasswordChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Change the password; every open session of the user is told about it."""

    try:
        change_password(
            db,
            current_user.id,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return MessageResponse(message="Password updated successfully")
