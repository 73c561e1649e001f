"""Domain service for tenant activity logging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.infrastructure.database.repositories.activity_repository import SqlActivityRepository

from .models import ActivityAction, ActivityEntry, EntityType
from .repository import ActivityRepository


@dataclass(slots=True)
class ActivityService:
    repository: ActivityRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ActivityService":
        return cls(SqlActivityRepository(session))

    async def record(
        self,
        *,
        tenant_id: str,
        user_id: Optional[str],
        action: ActivityAction,
        entity_type: EntityType,
        entity_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> ActivityEntry:
        return await self.repository.add(
            tenant_id=tenant_id,
            user_id=user_id,
            action=action.value,
            entity_type=entity_type.value,
            entity_id=entity_id,
            details=details,
        )

    async def recent(
        self, tenant_id: str, *, limit: int = 50, entity_type: Optional[EntityType] = None
    ) -> Sequence[ActivityEntry]:
        return await self.repository.list_recent(
            tenant_id,
            limit=limit,
            entity_type=entity_type.value if entity_type else None,
        )
