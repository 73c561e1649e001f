"""Repository protocol for users."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import User, UserListQuery, UserSummary


class UserRepository(Protocol):
    """Abstract repository interface for user persistence."""

    async def get_by_id(self, user_id: str) -> User | None:
        ...

    async def get_in_tenant(self, tenant_id: str, user_id: str) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def list_users(self, tenant_id: str, query: UserListQuery) -> tuple[Sequence[UserSummary], int]:
        ...

    async def count_users(self, tenant_id: str) -> int:
        ...

    async def existing_ids(self, tenant_id: str, user_ids: Sequence[str]) -> set[str]:
        ...

    async def create_user(
        self,
        *,
        tenant_id: str,
        email: str,
        password_hash: str,
        role: str,
        first_name: str | None,
        last_name: str | None,
        title: str | None,
        department: str | None,
    ) -> User:
        ...

    async def update_user(self, user_id: str, values: dict[str, Any]) -> User:
        ...

    async def increment_token_version(self, user_id: str) -> int | None:
        ...

    async def count_authored_templates(self, user_id: str) -> int:
        ...

    async def delete_user(self, user_id: str) -> None:
        ...
