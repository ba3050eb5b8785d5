"""Use cases for managing users."""

from .authenticate_user import authenticate_user
from .change_password import change_password
from .create_user import create_user
from .get_user import get_user
from .update_member_role import update_member_role

__all__ = [
    "authenticate_user",
    "change_password",
    "create_user",
    "get_user",
    "update_member_role",
]
