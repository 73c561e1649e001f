"""Repository protocol for tenants."""

from __future__ import annotations

from typing import Protocol

from .models import Plan, PlanLimits, Tenant


class TenantRepository(Protocol):
    async def get_by_id(self, tenant_id: str) -> Tenant | None:
        ...

    async def get_by_domain(self, domain: str) -> Tenant | None:
        ...

    async def create_tenant(self, *, name: str, domain: str, plan: Plan, limits: PlanLimits) -> Tenant:
        ...

    async def change_plan(self, tenant_id: str, plan: Plan, limits: PlanLimits) -> Tenant:
        ...
