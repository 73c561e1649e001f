"""Repository protocol for template assignments."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import TemplateAssignment


class AssignmentRepository(Protocol):
    async def get(self, tenant_id: str, assignment_id: str) -> TemplateAssignment | None:
        ...

    async def list_assignments(
        self, tenant_id: str, *, offset: int, limit: int
    ) -> tuple[Sequence[TemplateAssignment], int]:
        ...

    async def list_for_user(self, user_id: str) -> Sequence[TemplateAssignment]:
        ...

    async def list_for_template(self, template_id: str) -> Sequence[TemplateAssignment]:
        ...

    async def assigned_user_ids(self, template_id: str, user_ids: Sequence[str]) -> set[str]:
        ...

    async def create(self, *, user_id: str, template_id: str, assigned_by: str | None) -> TemplateAssignment:
        ...

    async def ids_in_tenant(self, tenant_id: str, assignment_ids: Sequence[str]) -> set[str]:
        ...

    async def delete(self, assignment_ids: Sequence[str]) -> int:
        ...
