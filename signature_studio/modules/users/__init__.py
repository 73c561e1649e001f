"""User management module."""

from .models import Role, User, UserCreateInput, UserListQuery, UserSummary, UserUpdateInput, UNSET
from .repository import UserRepository

__all__ = [
    "Role",
    "User",
    "UserCreateInput",
    "UserListQuery",
    "UserSummary",
    "UserUpdateInput",
    "UNSET",
    "UserRepository",
]
