"""Domain models for template assignments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class TemplateAssignment:
    id: str
    user_id: str
    template_id: str
    assigned_by: Optional[str] = None
    created_at: Optional[datetime] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    template_name: Optional[str] = None


@dataclass(slots=True)
class BulkAssignResult:
    created: list[TemplateAssignment]
    skipped_user_ids: list[str]
