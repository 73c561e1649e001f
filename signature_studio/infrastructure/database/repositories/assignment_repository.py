"""SQLAlchemy implementation of the assignment repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.db.models import SignatureTemplate as SignatureTemplateModel
from signature_studio.db.models import TemplateAssignment as TemplateAssignmentModel
from signature_studio.db.models import User as UserModel
from signature_studio.modules.assignments.models import TemplateAssignment
from signature_studio.modules.assignments.repository import AssignmentRepository


class SqlAssignmentRepository(AssignmentRepository):
    """Assignments are tenant scoped through the assigned user."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _select():
        return (
            select(TemplateAssignmentModel, UserModel, SignatureTemplateModel)
            .join(UserModel, UserModel.id == TemplateAssignmentModel.user_id)
            .join(SignatureTemplateModel, SignatureTemplateModel.id == TemplateAssignmentModel.template_id)
        )

    async def get(self, tenant_id: str, assignment_id: str) -> TemplateAssignment | None:
        stmt = self._select().where(
            TemplateAssignmentModel.id == assignment_id,
            UserModel.tenant_id == tenant_id,
        )
        row = (await self._session.execute(stmt)).first()
        return self._to_domain(*row) if row else None

    async def list_assignments(
        self, tenant_id: str, *, offset: int, limit: int
    ) -> tuple[Sequence[TemplateAssignment], int]:
        total = await self._session.scalar(
            select(func.count())
            .select_from(TemplateAssignmentModel)
            .join(UserModel, UserModel.id == TemplateAssignmentModel.user_id)
            .where(UserModel.tenant_id == tenant_id)
        )
        stmt = (
            self._select()
            .where(UserModel.tenant_id == tenant_id)
            .order_by(TemplateAssignmentModel.created_at.desc(), TemplateAssignmentModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(*row) for row in result.all()], int(total or 0)

    async def list_for_user(self, user_id: str) -> Sequence[TemplateAssignment]:
        stmt = (
            self._select()
            .where(TemplateAssignmentModel.user_id == user_id)
            .order_by(TemplateAssignmentModel.created_at.desc(), TemplateAssignmentModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(*row) for row in result.all()]

    async def list_for_template(self, template_id: str) -> Sequence[TemplateAssignment]:
        stmt = (
            self._select()
            .where(TemplateAssignmentModel.template_id == template_id)
            .order_by(TemplateAssignmentModel.created_at.desc(), TemplateAssignmentModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(*row) for row in result.all()]

    async def assigned_user_ids(self, template_id: str, user_ids: Sequence[str]) -> set[str]:
        if not user_ids:
            return set()
        stmt = select(TemplateAssignmentModel.user_id).where(
            TemplateAssignmentModel.template_id == template_id,
            TemplateAssignmentModel.user_id.in_(list(user_ids)),
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def create(self, *, user_id: str, template_id: str, assigned_by: str | None) -> TemplateAssignment:
        model = TemplateAssignmentModel(user_id=user_id, template_id=template_id, assigned_by=assigned_by)
        self._session.add(model)
        await self._session.flush()
        row = (await self._session.execute(self._select().where(TemplateAssignmentModel.id == model.id))).one()
        return self._to_domain(*row)

    async def ids_in_tenant(self, tenant_id: str, assignment_ids: Sequence[str]) -> set[str]:
        if not assignment_ids:
            return set()
        stmt = (
            select(TemplateAssignmentModel.id)
            .join(UserModel, UserModel.id == TemplateAssignmentModel.user_id)
            .where(UserModel.tenant_id == tenant_id, TemplateAssignmentModel.id.in_(list(assignment_ids)))
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def delete(self, assignment_ids: Sequence[str]) -> int:
        if not assignment_ids:
            return 0
        stmt = (
            delete(TemplateAssignmentModel)
            .where(TemplateAssignmentModel.id.in_(list(assignment_ids)))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return int(result.rowcount or 0)

    @staticmethod
    def _to_domain(
        model: TemplateAssignmentModel,
        user: UserModel | None = None,
        template: SignatureTemplateModel | None = None,
    ) -> TemplateAssignment:
        user_name = None
        if user is not None:
            user_name = " ".join(part for part in (user.first_name, user.last_name) if part) or None
        return TemplateAssignment(
            id=str(model.id),
            user_id=model.user_id,
            template_id=model.template_id,
            assigned_by=model.assigned_by,
            created_at=model.created_at,
            user_email=user.email if user is not None else None,
            user_name=user_name,
            template_name=template.name if template is not None else None,
        )
