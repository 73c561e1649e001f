"""Domain models for tenant users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        if isinstance(value, Role):
            return value
        # older rows and clients use "user" for plain members
        if value == "user":
            return cls.MEMBER
        return cls(value)


@dataclass(slots=True)
class User:
    id: str
    tenant_id: str
    email: str
    role: Role
    password_hash: str = field(repr=False)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    token_version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass(slots=True)
class UserCreateInput:
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    role: Role = Role.MEMBER
    password: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class UserUpdateInput:
    email: str | object = UNSET
    first_name: Optional[str] | object = UNSET
    last_name: Optional[str] | object = UNSET
    title: Optional[str] | object = UNSET
    department: Optional[str] | object = UNSET
    role: Role | object = UNSET
    password: str | object = UNSET


@dataclass(slots=True)
class UserListQuery:
    page: int = 1
    limit: int = 20
    sort: str = "created_at"
    order: str = "desc"
    search: Optional[str] = None
    role: Optional[Role] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True)
class UserSummary:
    user: User
    assignment_count: int = 0
