"""Domain services for assigning templates to users."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.errors import AssignmentNotFoundError, PermissionDeniedError, TemplateNotFoundError, UserNotFoundError
from signature_studio.infrastructure.database.repositories.assignment_repository import SqlAssignmentRepository
from signature_studio.infrastructure.database.repositories.template_repository import SqlSignatureTemplateRepository
from signature_studio.infrastructure.database.repositories.user_repository import SqlUserRepository
from signature_studio.modules.templates.repository import SignatureTemplateRepository
from signature_studio.modules.users.models import User
from signature_studio.modules.users.repository import UserRepository

from .exceptions import AllAssignmentsExistError, AssignmentExistsError, AssignmentsNotFoundError, UsersNotFoundError
from .models import BulkAssignResult, TemplateAssignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AssignmentService:
    repository: AssignmentRepository
    users: UserRepository
    templates: SignatureTemplateRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AssignmentService":
        return cls(
            SqlAssignmentRepository(session),
            SqlUserRepository(session),
            SqlSignatureTemplateRepository(session),
        )

    async def list_assignments(
        self, tenant_id: str, *, page: int, limit: int
    ) -> tuple[Sequence[TemplateAssignment], int]:
        return await self.repository.list_assignments(tenant_id, offset=(page - 1) * limit, limit=limit)

    async def get_assignment(self, tenant_id: str, assignment_id: str, actor: User) -> TemplateAssignment:
        assignment = await self.repository.get(tenant_id, assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError()
        if not actor.is_admin() and assignment.user_id != actor.id:
            raise PermissionDeniedError()
        return assignment

    async def assign(
        self,
        tenant_id: str,
        *,
        user_id: str,
        template_id: str,
        assigned_by: Optional[str],
    ) -> TemplateAssignment:
        if await self.users.get_in_tenant(tenant_id, user_id) is None:
            raise UserNotFoundError()
        await self._require_template(tenant_id, template_id)
        if await self.repository.assigned_user_ids(template_id, [user_id]):
            raise AssignmentExistsError()
        assignment = await self.repository.create(user_id=user_id, template_id=template_id, assigned_by=assigned_by)
        logger.info("Template %s assigned to user %s", template_id, user_id)
        return assignment

    async def bulk_assign(
        self,
        tenant_id: str,
        *,
        template_id: str,
        user_ids: Sequence[str],
        assigned_by: Optional[str],
    ) -> BulkAssignResult:
        await self._require_template(tenant_id, template_id)
        unique_ids = list(dict.fromkeys(user_ids))
        found = await self.users.existing_ids(tenant_id, unique_ids)
        missing = [user_id for user_id in unique_ids if user_id not in found]
        if missing:
            raise UsersNotFoundError(details={"missingUserIds": missing})

        already = await self.repository.assigned_user_ids(template_id, unique_ids)
        pending = [user_id for user_id in unique_ids if user_id not in already]
        if not pending:
            raise AllAssignmentsExistError()

        created = [
            await self.repository.create(user_id=user_id, template_id=template_id, assigned_by=assigned_by)
            for user_id in pending
        ]
        logger.info("Template %s bulk assigned to %d users (%d skipped)", template_id, len(created), len(already))
        return BulkAssignResult(created=created, skipped_user_ids=[uid for uid in unique_ids if uid in already])

    async def unassign(self, tenant_id: str, assignment_id: str) -> None:
        if not await self.repository.ids_in_tenant(tenant_id, [assignment_id]):
            raise AssignmentNotFoundError()
        await self.repository.delete([assignment_id])

    async def bulk_unassign(self, tenant_id: str, assignment_ids: Sequence[str]) -> int:
        unique_ids = list(dict.fromkeys(assignment_ids))
        found = await self.repository.ids_in_tenant(tenant_id, unique_ids)
        missing = [assignment_id for assignment_id in unique_ids if assignment_id not in found]
        if missing:
            raise AssignmentsNotFoundError(details={"missingAssignmentIds": missing})
        return await self.repository.delete(unique_ids)

    async def for_user(self, tenant_id: str, user_id: str, actor: User) -> Sequence[TemplateAssignment]:
        if not actor.is_admin() and actor.id != user_id:
            raise PermissionDeniedError()
        if await self.users.get_in_tenant(tenant_id, user_id) is None:
            raise UserNotFoundError()
        return await self.repository.list_for_user(user_id)

    async def for_template(self, tenant_id: str, template_id: str) -> Sequence[TemplateAssignment]:
        await self._require_template(tenant_id, template_id)
        return await self.repository.list_for_template(template_id)

    async def _require_template(self, tenant_id: str, template_id: str) -> None:
        if await self.templates.get(tenant_id, template_id) is None:
            raise TemplateNotFoundError()
