"""Domain models for tenants and subscription plans."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Plan(str, Enum):
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


@dataclass(frozen=True, slots=True)
class PlanLimits:
    """Per-plan quotas; ``None`` means unlimited."""

    max_users: Optional[int]
    max_templates: Optional[int]
    max_storage_mb: Optional[int]


PLAN_LIMITS: dict[Plan, PlanLimits] = {
    Plan.STARTER: PlanLimits(max_users=5, max_templates=10, max_storage_mb=100),
    Plan.PROFESSIONAL: PlanLimits(max_users=25, max_templates=100, max_storage_mb=1024),
    Plan.ENTERPRISE: PlanLimits(max_users=None, max_templates=None, max_storage_mb=None),
}


@dataclass(slots=True)
class Tenant:
    id: str
    name: str
    domain: str
    plan: Plan
    max_users: Optional[int]
    max_templates: Optional[int]
    max_storage_mb: Optional[int]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def max_storage_bytes(self) -> Optional[int]:
        if self.max_storage_mb is None:
            return None
        return self.max_storage_mb * 1024 * 1024
