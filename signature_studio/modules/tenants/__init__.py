"""Tenant (organisation) module."""

from .exceptions import DomainAlreadyRegisteredError
from .models import PLAN_LIMITS, Plan, PlanLimits, Tenant
from .repository import TenantRepository

__all__ = [
    "PLAN_LIMITS",
    "DomainAlreadyRegisteredError",
    "Plan",
    "PlanLimits",
    "Tenant",
    "TenantRepository",
]
