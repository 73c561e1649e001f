"""SQLAlchemy implementation of the activity log repository."""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.db.models import ActivityLog as ActivityLogModel
from signature_studio.modules.activity.models import ActivityEntry
from signature_studio.modules.activity.repository import ActivityRepository


class SqlActivityRepository(ActivityRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        tenant_id: str,
        user_id: Optional[str],
        action: str,
        entity_type: str,
        entity_id: Optional[str],
        details: Optional[dict[str, Any]],
    ) -> ActivityEntry:
        model = ActivityLogModel(
            tenant_id=tenant_id,
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=json.dumps(details, ensure_ascii=False, sort_keys=True) if details is not None else None,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def list_recent(
        self, tenant_id: str, *, limit: int, entity_type: Optional[str] = None
    ) -> Sequence[ActivityEntry]:
        stmt = select(ActivityLogModel).where(ActivityLogModel.tenant_id == tenant_id)
        if entity_type:
            stmt = stmt.where(ActivityLogModel.entity_type == entity_type)
        stmt = stmt.order_by(ActivityLogModel.id.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: ActivityLogModel) -> ActivityEntry:
        details = None
        if model.details:
            try:
                details = json.loads(model.details)
            except json.JSONDecodeError:
                details = None
        return ActivityEntry(
            id=int(model.id),
            tenant_id=model.tenant_id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            user_id=model.user_id,
            details=details,
            created_at=model.created_at,
        )
