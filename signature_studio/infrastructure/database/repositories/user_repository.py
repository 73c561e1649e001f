"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.errors import UserNotFoundError
from signature_studio.db.models import SignatureTemplate as SignatureTemplateModel
from signature_studio.db.models import TemplateAssignment as TemplateAssignmentModel
from signature_studio.db.models import User as UserModel
from signature_studio.modules.users.models import Role, User, UserListQuery, UserSummary
from signature_studio.modules.users.repository import UserRepository

_SORT_COLUMNS = {
    "created_at": UserModel.created_at,
    "email": UserModel.email,
    "first_name": UserModel.first_name,
    "last_name": UserModel.last_name,
    "role": UserModel.role,
}


class SqlUserRepository(UserRepository):
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch_one(self, *conditions) -> User | None:
        stmt = select(UserModel).where(*conditions).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._fetch_one(UserModel.id == user_id)

    async def get_in_tenant(self, tenant_id: str, user_id: str) -> User | None:
        return await self._fetch_one(UserModel.id == user_id, UserModel.tenant_id == tenant_id)

    async def get_by_email(self, email: str) -> User | None:
        return await self._fetch_one(UserModel.email == email)

    async def list_users(self, tenant_id: str, query: UserListQuery) -> tuple[Sequence[UserSummary], int]:
        conditions = [UserModel.tenant_id == tenant_id]
        if query.search:
            pattern = f"%{query.search.strip()}%"
            conditions.append(
                or_(
                    UserModel.email.ilike(pattern),
                    UserModel.first_name.ilike(pattern),
                    UserModel.last_name.ilike(pattern),
                )
            )
        if query.role is Role.MEMBER:
            # rows written before the rename still carry "user"
            conditions.append(UserModel.role.in_((Role.MEMBER.value, "user")))
        elif query.role is not None:
            conditions.append(UserModel.role == query.role.value)

        total = await self._session.scalar(select(func.count()).select_from(UserModel).where(*conditions))

        column = _SORT_COLUMNS.get(query.sort, UserModel.created_at)
        ordering = column.asc() if query.order == "asc" else column.desc()
        stmt = (
            select(UserModel, func.count(TemplateAssignmentModel.id))
            .outerjoin(TemplateAssignmentModel, TemplateAssignmentModel.user_id == UserModel.id)
            .where(*conditions)
            .group_by(UserModel.id)
            .order_by(ordering, UserModel.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        result = await self._session.execute(stmt)
        items = [UserSummary(user=self._to_domain(model), assignment_count=count) for model, count in result.all()]
        return items, int(total or 0)

    async def count_users(self, tenant_id: str) -> int:
        stmt = select(func.count()).select_from(UserModel).where(UserModel.tenant_id == tenant_id)
        return int(await self._session.scalar(stmt) or 0)

    async def existing_ids(self, tenant_id: str, user_ids: Sequence[str]) -> set[str]:
        if not user_ids:
            return set()
        stmt = select(UserModel.id).where(UserModel.tenant_id == tenant_id, UserModel.id.in_(list(user_ids)))
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

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
        model = UserModel(
            tenant_id=tenant_id,
            email=email,
            password_hash=password_hash,
            role=role,
            first_name=first_name,
            last_name=last_name,
            title=title,
            department=department,
            token_version=0,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_user(self, user_id: str, values: dict[str, Any]) -> User:
        model = await self._session.get(UserModel, user_id, populate_existing=True)
        if model is None:
            raise UserNotFoundError()
        for key, value in values.items():
            setattr(model, key, value)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def increment_token_version(self, user_id: str) -> int | None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(token_version=UserModel.token_version + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        version = await self._session.scalar(select(UserModel.token_version).where(UserModel.id == user_id))
        return int(version)

    async def count_authored_templates(self, user_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(SignatureTemplateModel)
            .where(SignatureTemplateModel.created_by == user_id)
        )
        return int(await self._session.scalar(stmt) or 0)

    async def delete_user(self, user_id: str) -> None:
        await self._session.execute(
            delete(UserModel).where(UserModel.id == user_id).execution_options(synchronize_session=False)
        )

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=str(model.id),
            tenant_id=model.tenant_id,
            email=model.email,
            role=Role.parse(model.role or Role.MEMBER.value),
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            title=model.title,
            department=model.department,
            token_version=int(model.token_version or 0),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
