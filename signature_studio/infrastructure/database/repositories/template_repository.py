"""SQLAlchemy implementation of the signature template repository."""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.errors import TemplateNotFoundError
from signature_studio.db.models import SignatureTemplate as SignatureTemplateModel
from signature_studio.db.models import SignatureTemplateVersion as TemplateVersionModel
from signature_studio.db.models import TemplateAssignment as TemplateAssignmentModel
from signature_studio.db.models import User as UserModel
from signature_studio.modules.templates.models import (
    SignatureTemplate,
    TemplateListQuery,
    TemplateStatus,
    TemplateVersion,
)
from signature_studio.modules.templates.repository import SignatureTemplateRepository

_JSON_FIELDS = ("content", "custom_styles")

_SORT_COLUMNS = {
    "updated_at": func.coalesce(SignatureTemplateModel.updated_at, SignatureTemplateModel.created_at),
    "created_at": SignatureTemplateModel.created_at,
    "name": SignatureTemplateModel.name,
    "status": SignatureTemplateModel.status,
}


def _dump(value: Optional[dict[str, Any]]) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def _load(raw: Optional[str]) -> Optional[dict[str, Any]]:
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def _author_name(author: UserModel | None) -> Optional[str]:
    if author is None:
        return None
    name = " ".join(part for part in (author.first_name, author.last_name) if part)
    return name or author.email


class SqlSignatureTemplateRepository(SignatureTemplateRepository):
    """Template repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select(self):
        return (
            select(SignatureTemplateModel, UserModel)
            .outerjoin(UserModel, UserModel.id == SignatureTemplateModel.created_by)
            .execution_options(populate_existing=True)
        )

    async def get(self, tenant_id: str, template_id: str) -> SignatureTemplate | None:
        stmt = self._select().where(
            SignatureTemplateModel.id == template_id,
            SignatureTemplateModel.tenant_id == tenant_id,
        )
        row = (await self._session.execute(stmt)).first()
        if row is None:
            return None
        return self._to_domain(*row)

    async def list_templates(
        self, tenant_id: str, query: TemplateListQuery
    ) -> tuple[Sequence[SignatureTemplate], int]:
        conditions = [SignatureTemplateModel.tenant_id == tenant_id]
        if query.search:
            pattern = f"%{query.search.strip()}%"
            conditions.append(
                or_(
                    SignatureTemplateModel.name.ilike(pattern),
                    SignatureTemplateModel.description.ilike(pattern),
                )
            )
        if query.filter == "default":
            conditions.append(SignatureTemplateModel.is_default.is_(True))
        elif query.filter in {status.value for status in TemplateStatus}:
            conditions.append(SignatureTemplateModel.status == query.filter)

        total = await self._session.scalar(
            select(func.count()).select_from(SignatureTemplateModel).where(*conditions)
        )
        column = _SORT_COLUMNS.get(query.sort, _SORT_COLUMNS["updated_at"])
        ordering = column.asc() if query.order == "asc" else column.desc()
        stmt = (
            self._select()
            .where(*conditions)
            .order_by(ordering, SignatureTemplateModel.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model, author) for model, author in result.all()], int(total or 0)

    async def count_templates(self, tenant_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(SignatureTemplateModel)
            .where(SignatureTemplateModel.tenant_id == tenant_id)
        )
        return int(await self._session.scalar(stmt) or 0)

    async def get_default(self, tenant_id: str) -> SignatureTemplate | None:
        stmt = self._select().where(
            SignatureTemplateModel.tenant_id == tenant_id,
            SignatureTemplateModel.is_default.is_(True),
        )
        row = (await self._session.execute(stmt)).first()
        return self._to_domain(*row) if row else None

    async def create_template(self, *, tenant_id: str, created_by: str, values: dict[str, Any]) -> SignatureTemplate:
        payload = dict(values)
        for key in _JSON_FIELDS:
            if key in payload:
                payload[key] = _dump(payload[key])
        model = SignatureTemplateModel(tenant_id=tenant_id, created_by=created_by, **payload)
        self._session.add(model)
        await self._session.flush()
        template = await self.get(tenant_id, model.id)
        assert template is not None
        return template

    async def update_template(self, template_id: str, values: dict[str, Any]) -> SignatureTemplate:
        model = await self._session.get(SignatureTemplateModel, template_id)
        if model is None:
            raise TemplateNotFoundError()
        for key, value in values.items():
            setattr(model, key, _dump(value) if key in _JSON_FIELDS else value)
        await self._session.flush()
        template = await self.get(model.tenant_id, template_id)
        assert template is not None
        return template

    async def clear_default(self, tenant_id: str, *, keep_id: str) -> int:
        stmt = (
            update(SignatureTemplateModel)
            .where(
                SignatureTemplateModel.tenant_id == tenant_id,
                SignatureTemplateModel.id != keep_id,
                SignatureTemplateModel.is_default.is_(True),
            )
            .values(is_default=False)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return int(result.rowcount or 0)

    async def delete_template(self, template_id: str) -> None:
        await self._session.execute(
            delete(TemplateVersionModel)
            .where(TemplateVersionModel.template_id == template_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(
            delete(SignatureTemplateModel)
            .where(SignatureTemplateModel.id == template_id)
            .execution_options(synchronize_session=False)
        )

    async def count_assignments(self, template_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(TemplateAssignmentModel)
            .where(TemplateAssignmentModel.template_id == template_id)
        )
        return int(await self._session.scalar(stmt) or 0)

    async def add_version(
        self, template_id: str, *, name: str, html_content: str, created_by: str | None
    ) -> TemplateVersion:
        latest = await self._session.scalar(
            select(func.max(TemplateVersionModel.version)).where(TemplateVersionModel.template_id == template_id)
        )
        model = TemplateVersionModel(
            template_id=template_id,
            version=int(latest or 0) + 1,
            name=name,
            html_content=html_content,
            created_by=created_by,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._version_to_domain(model)

    async def list_versions(self, template_id: str) -> Sequence[TemplateVersion]:
        stmt = (
            select(TemplateVersionModel)
            .where(TemplateVersionModel.template_id == template_id)
            .order_by(TemplateVersionModel.version.desc())
        )
        result = await self._session.execute(stmt)
        return [self._version_to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: SignatureTemplateModel, author: UserModel | None = None) -> SignatureTemplate:
        return SignatureTemplate(
            id=str(model.id),
            tenant_id=model.tenant_id,
            created_by=model.created_by,
            name=model.name,
            content=_load(model.content) or {},
            formatting=model.formatting or "modern",
            html_content=model.html_content or "",
            status=TemplateStatus(model.status or TemplateStatus.DRAFT.value),
            is_default=bool(model.is_default),
            is_shared=bool(model.is_shared),
            description=model.description,
            custom_styles=_load(model.custom_styles),
            author_name=_author_name(author),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _version_to_domain(model: TemplateVersionModel) -> TemplateVersion:
        return TemplateVersion(
            id=str(model.id),
            template_id=model.template_id,
            version=int(model.version),
            name=model.name,
            html_content=model.html_content,
            created_by=model.created_by,
            created_at=model.created_at,
        )
