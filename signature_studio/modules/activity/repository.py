"""Repository protocol for the activity log."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .models import ActivityEntry


class ActivityRepository(Protocol):
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
        ...

    async def list_recent(
        self, tenant_id: str, *, limit: int, entity_type: Optional[str] = None
    ) -> Sequence[ActivityEntry]:
        ...
