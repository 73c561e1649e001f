"""SQLAlchemy implementation of the tenant repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.errors import TenantNotFoundError
from signature_studio.db.models import Tenant as TenantModel
from signature_studio.modules.tenants.models import Plan, PlanLimits, Tenant
from signature_studio.modules.tenants.repository import TenantRepository


class SqlTenantRepository(TenantRepository):
    """Tenant repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, tenant_id: str) -> Tenant | None:
        model = await self._session.get(TenantModel, tenant_id)
        return self._to_domain(model)

    async def get_by_domain(self, domain: str) -> Tenant | None:
        stmt = select(TenantModel).where(TenantModel.domain == domain)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create_tenant(self, *, name: str, domain: str, plan: Plan, limits: PlanLimits) -> Tenant:
        model = TenantModel(
            name=name,
            domain=domain,
            plan=plan.value,
            max_users=limits.max_users,
            max_templates=limits.max_templates,
            max_storage_mb=limits.max_storage_mb,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def change_plan(self, tenant_id: str, plan: Plan, limits: PlanLimits) -> Tenant:
        model = await self._session.get(TenantModel, tenant_id)
        if model is None:
            raise TenantNotFoundError()
        model.plan = plan.value
        model.max_users = limits.max_users
        model.max_templates = limits.max_templates
        model.max_storage_mb = limits.max_storage_mb
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: TenantModel | None) -> Tenant | None:
        if model is None:
            return None
        return Tenant(
            id=str(model.id),
            name=model.name,
            domain=model.domain,
            plan=Plan(model.plan or Plan.STARTER.value),
            max_users=model.max_users,
            max_templates=model.max_templates,
            max_storage_mb=model.max_storage_mb,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
