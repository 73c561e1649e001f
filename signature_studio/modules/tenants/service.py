"""Domain services for tenants and their plan quotas."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.errors import PlanLimitExceededError, TenantNotFoundError
from signature_studio.infrastructure.database.repositories.tenant_repository import SqlTenantRepository

from .exceptions import DomainAlreadyRegisteredError
from .models import PLAN_LIMITS, Plan, Tenant
from .repository import TenantRepository

logger = logging.getLogger(__name__)


def normalize_domain(domain: str) -> str:
    return domain.strip().lower()


def ensure_within_limit(limit: Optional[int], current: int, resource: str, adding: int = 1) -> None:
    """Raise when ``current + adding`` would exceed ``limit``; ``None`` is unlimited."""
    if limit is None:
        return
    if current + adding > limit:
        raise PlanLimitExceededError(
            f"Plan limit reached for {resource}",
            details={"resource": resource, "limit": limit, "current": current},
        )


@dataclass(slots=True)
class TenantService:
    repository: TenantRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TenantService":
        return cls(SqlTenantRepository(session))

    async def get(self, tenant_id: str) -> Tenant:
        tenant = await self.repository.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError()
        return tenant

    async def get_by_domain(self, domain: str) -> Tenant | None:
        return await self.repository.get_by_domain(normalize_domain(domain))

    async def create_tenant(self, *, name: str, domain: str, plan: Plan = Plan.STARTER) -> Tenant:
        domain = normalize_domain(domain)
        if await self.repository.get_by_domain(domain) is not None:
            raise DomainAlreadyRegisteredError()
        tenant = await self.repository.create_tenant(
            name=name.strip(),
            domain=domain,
            plan=plan,
            limits=PLAN_LIMITS[plan],
        )
        logger.info("Created tenant %s (%s) on plan %s", tenant.id, tenant.domain, plan.value)
        return tenant

    async def change_plan(self, tenant_id: str, plan: Plan) -> Tenant:
        await self.get(tenant_id)
        tenant = await self.repository.change_plan(tenant_id, plan, PLAN_LIMITS[plan])
        logger.info("Tenant %s moved to plan %s", tenant_id, plan.value)
        return tenant
