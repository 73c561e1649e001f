"""Activity (audit) log domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ActivityAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class EntityType(str, Enum):
    TEMPLATE = "template"
    USER = "user"
    ASSIGNMENT = "assignment"
    ASSET = "asset"


@dataclass(slots=True)
class ActivityEntry:
    id: int
    tenant_id: str
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    user_id: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
