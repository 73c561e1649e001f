"""Application service handling signature template workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.config import get_settings
from signature_studio.core.errors import TemplateNotFoundError
from signature_studio.infrastructure.database.repositories.template_repository import SqlSignatureTemplateRepository
from signature_studio.modules.signatures import CustomStyle, SignatureFields, SignatureRenderer
from signature_studio.modules.tenants.models import Tenant
from signature_studio.modules.tenants.service import ensure_within_limit

from .exceptions import TemplateHasAssignmentsError
from .models import (
    SignatureTemplate,
    TemplateCreateInput,
    TemplateListQuery,
    TemplateStatus,
    TemplateUpdateInput,
    TemplateVersion,
    UNSET,
)
from .repository import SignatureTemplateRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SignatureTemplateService:
    repository: SignatureTemplateRepository
    renderer: SignatureRenderer

    @classmethod
    def with_session(
        cls, session: AsyncSession, renderer: Optional[SignatureRenderer] = None
    ) -> "SignatureTemplateService":
        if renderer is None:
            settings = get_settings()
            renderer = SignatureRenderer(
                escape_html=settings.renderer.escape_html,
                default_preset=settings.renderer.default_preset,
            )
        return cls(SqlSignatureTemplateRepository(session), renderer)

    def render(
        self,
        content: dict[str, Any] | None,
        formatting: str | None,
        custom_styles: dict[str, Any] | None = None,
    ) -> str:
        return self.renderer.render(
            SignatureFields.from_content(content),
            formatting,
            CustomStyle.from_dict(custom_styles),
        )

    async def list_templates(
        self, tenant_id: str, query: TemplateListQuery
    ) -> tuple[Sequence[SignatureTemplate], int]:
        return await self.repository.list_templates(tenant_id, query)

    async def get_template(self, tenant_id: str, template_id: str) -> SignatureTemplate:
        template = await self.repository.get(tenant_id, template_id)
        if template is None:
            raise TemplateNotFoundError()
        return template

    async def get_default(self, tenant_id: str) -> SignatureTemplate | None:
        return await self.repository.get_default(tenant_id)

    async def create_template(
        self, tenant: Tenant, author_id: str, payload: TemplateCreateInput
    ) -> SignatureTemplate:
        current = await self.repository.count_templates(tenant.id)
        ensure_within_limit(tenant.max_templates, current, "templates")

        html_content = payload.html_content
        if html_content is None:
            html_content = self.render(payload.content, payload.formatting, payload.custom_styles)

        template = await self.repository.create_template(
            tenant_id=tenant.id,
            created_by=author_id,
            values={
                "name": payload.name,
                "description": payload.description,
                "content": payload.content,
                "formatting": payload.formatting,
                "custom_styles": payload.custom_styles,
                "html_content": html_content,
                "status": payload.status.value,
                "is_default": payload.is_default,
                "is_shared": payload.is_shared,
            },
        )
        if template.is_default:
            await self._make_sole_default(template)
        await self.repository.add_version(
            template.id,
            name=template.name,
            html_content=template.html_content,
            created_by=author_id,
        )
        logger.info("Template %s created in tenant %s", template.id, tenant.id)
        return template

    async def update_template(
        self,
        tenant_id: str,
        template_id: str,
        actor_id: str,
        payload: TemplateUpdateInput,
    ) -> SignatureTemplate:
        current = await self.get_template(tenant_id, template_id)

        values: dict[str, Any] = {}
        for name in ("name", "description", "content", "formatting", "custom_styles", "is_default", "is_shared"):
            value = getattr(payload, name)
            if value is not UNSET:
                values[name] = value
        if payload.status is not UNSET:
            values["status"] = TemplateStatus(payload.status).value

        if payload.html_content is not UNSET:
            values["html_content"] = payload.html_content
        elif payload.touches_rendering():
            values["html_content"] = self.render(
                values.get("content", current.content),
                values.get("formatting", current.formatting),
                values.get("custom_styles", current.custom_styles),
            )

        template = await self.repository.update_template(template_id, values) if values else current
        if values.get("is_default"):
            await self._make_sole_default(template)

        if template.html_content != current.html_content or template.name != current.name:
            await self.repository.add_version(
                template.id,
                name=template.name,
                html_content=template.html_content,
                created_by=actor_id,
            )
        return template

    async def delete_template(self, tenant_id: str, template_id: str) -> SignatureTemplate:
        template = await self.get_template(tenant_id, template_id)
        assignments = await self.repository.count_assignments(template.id)
        if assignments:
            raise TemplateHasAssignmentsError(details={"assignments": assignments})
        await self.repository.delete_template(template.id)
        logger.info("Template %s deleted from tenant %s", template.id, tenant_id)
        return template

    async def duplicate_template(
        self,
        tenant: Tenant,
        template_id: str,
        actor_id: str,
        name: Optional[str] = None,
    ) -> SignatureTemplate:
        source = await self.get_template(tenant.id, template_id)
        return await self.create_template(
            tenant,
            actor_id,
            TemplateCreateInput(
                name=name or f"{source.name} (Copy)",
                description=source.description,
                content=dict(source.content),
                formatting=source.formatting,
                custom_styles=dict(source.custom_styles) if source.custom_styles else None,
                status=TemplateStatus.DRAFT,
                is_default=False,
                is_shared=source.is_shared,
                html_content=source.html_content,
            ),
        )

    async def list_versions(self, tenant_id: str, template_id: str) -> Sequence[TemplateVersion]:
        template = await self.get_template(tenant_id, template_id)
        return await self.repository.list_versions(template.id)

    async def _make_sole_default(self, template: SignatureTemplate) -> None:
        cleared = await self.repository.clear_default(template.tenant_id, keep_id=template.id)
        if cleared:
            logger.info("Template %s is now the default for tenant %s", template.id, template.tenant_id)
