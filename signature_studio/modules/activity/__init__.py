"""Tenant activity log."""

from .models import ActivityAction, ActivityEntry, EntityType
from .repository import ActivityRepository

__all__ = ["ActivityAction", "ActivityEntry", "ActivityRepository", "EntityType"]
