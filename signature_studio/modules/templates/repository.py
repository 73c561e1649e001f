"""Repository protocol for signature templates."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import SignatureTemplate, TemplateListQuery, TemplateVersion


class SignatureTemplateRepository(Protocol):
    async def get(self, tenant_id: str, template_id: str) -> SignatureTemplate | None:
        ...

    async def list_templates(
        self, tenant_id: str, query: TemplateListQuery
    ) -> tuple[Sequence[SignatureTemplate], int]:
        ...

    async def count_templates(self, tenant_id: str) -> int:
        ...

    async def get_default(self, tenant_id: str) -> SignatureTemplate | None:
        ...

    async def create_template(self, *, tenant_id: str, created_by: str, values: dict[str, Any]) -> SignatureTemplate:
        ...

    async def update_template(self, template_id: str, values: dict[str, Any]) -> SignatureTemplate:
        ...

    async def clear_default(self, tenant_id: str, *, keep_id: str) -> int:
        ...

    async def delete_template(self, template_id: str) -> None:
        ...

    async def count_assignments(self, template_id: str) -> int:
        ...

    async def add_version(
        self, template_id: str, *, name: str, html_content: str, created_by: str | None
    ) -> TemplateVersion:
        ...

    async def list_versions(self, template_id: str) -> Sequence[TemplateVersion]:
        ...
