"""Domain services for user management inside a tenant."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.crypto import generate_temporary_password, hash_password
from signature_studio.core.errors import PermissionDeniedError, UserNotFoundError
from signature_studio.infrastructure.database.repositories.user_repository import SqlUserRepository
from signature_studio.modules.tenants.models import Tenant
from signature_studio.modules.tenants.service import ensure_within_limit

from .exceptions import CannotDeleteSelfError, EmailAlreadyRegisteredError, UserHasTemplatesError
from .models import Role, User, UserCreateInput, UserListQuery, UserSummary, UserUpdateInput, UNSET
from .repository import UserRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(slots=True)
class UserService:
    repository: UserRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "UserService":
        return cls(SqlUserRepository(session))

    async def get_user(self, tenant_id: str, user_id: str) -> User:
        user = await self.repository.get_in_tenant(tenant_id, user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def list_users(self, tenant_id: str, query: UserListQuery) -> tuple[Sequence[UserSummary], int]:
        return await self.repository.list_users(tenant_id, query)

    async def ensure_email_available(self, email: str, *, exclude_user_id: Optional[str] = None) -> None:
        existing = await self.repository.get_by_email(normalize_email(email))
        if existing is not None and existing.id != exclude_user_id:
            raise EmailAlreadyRegisteredError()

    async def create_user(self, tenant: Tenant, payload: UserCreateInput) -> tuple[User, Optional[str]]:
        """Create a user; returns the temporary password when one had to be generated."""
        await self.ensure_email_available(payload.email)
        current = await self.repository.count_users(tenant.id)
        ensure_within_limit(tenant.max_users, current, "users")

        temporary_password = None
        password = payload.password
        if not password:
            password = temporary_password = generate_temporary_password()

        user = await self.repository.create_user(
            tenant_id=tenant.id,
            email=normalize_email(payload.email),
            password_hash=hash_password(password),
            role=payload.role.value,
            first_name=payload.first_name,
            last_name=payload.last_name,
            title=payload.title,
            department=payload.department,
        )
        logger.info("User %s created in tenant %s with role %s", user.id, tenant.id, user.role.value)
        return user, temporary_password

    async def update_user(
        self,
        tenant_id: str,
        user_id: str,
        actor: User,
        payload: UserUpdateInput,
    ) -> User:
        if not actor.is_admin() and actor.id != user_id:
            raise PermissionDeniedError("You can only update your own profile")
        current = await self.get_user(tenant_id, user_id)

        values: dict[str, Any] = {}
        for name in ("first_name", "last_name", "title", "department"):
            value = getattr(payload, name)
            if value is not UNSET:
                values[name] = value

        if payload.email is not UNSET and normalize_email(payload.email) != current.email:
            await self.ensure_email_available(payload.email, exclude_user_id=current.id)
            values["email"] = normalize_email(payload.email)

        if payload.role is not UNSET:
            role = Role.parse(payload.role)
            if role is not current.role:
                if not actor.is_admin():
                    raise PermissionDeniedError("Only administrators can change user roles")
                values["role"] = role.value

        bump_version = False
        if payload.password is not UNSET and payload.password:
            values["password_hash"] = hash_password(payload.password)
            bump_version = True

        user = await self.repository.update_user(current.id, values) if values else current
        if bump_version:
            # password change invalidates every outstanding refresh token
            await self.repository.increment_token_version(current.id)
            user = await self.get_user(tenant_id, current.id)
        return user

    async def delete_user(self, tenant_id: str, user_id: str, actor: User) -> User:
        if actor.id == user_id:
            raise CannotDeleteSelfError()
        user = await self.get_user(tenant_id, user_id)
        authored = await self.repository.count_authored_templates(user.id)
        if authored:
            raise UserHasTemplatesError(details={"templates": authored})
        await self.repository.delete_user(user.id)
        logger.info("User %s deleted from tenant %s", user.id, tenant_id)
        return user

    async def reset_password(self, tenant_id: str, user_id: str, password: Optional[str] = None) -> tuple[User, Optional[str]]:
        user = await self.get_user(tenant_id, user_id)
        temporary_password = None
        if not password:
            password = temporary_password = generate_temporary_password()
        await self.repository.update_user(user.id, {"password_hash": hash_password(password)})
        await self.repository.increment_token_version(user.id)
        logger.info("Password reset for user %s in tenant %s", user.id, tenant_id)
        return await self.get_user(tenant_id, user.id), temporary_password

    async def existing_ids(self, tenant_id: str, user_ids: Sequence[str]) -> set[str]:
        return await self.repository.existing_ids(tenant_id, user_ids)
