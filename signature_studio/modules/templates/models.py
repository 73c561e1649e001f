"""Domain models for signature templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class TemplateStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


@dataclass(slots=True)
class SignatureTemplate:
    id: str
    tenant_id: str
    created_by: str
    name: str
    content: dict[str, Any]
    formatting: str
    html_content: str
    status: TemplateStatus
    is_default: bool = False
    is_shared: bool = False
    description: Optional[str] = None
    custom_styles: Optional[dict[str, Any]] = None
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class TemplateVersion:
    id: str
    template_id: str
    version: int
    name: str
    html_content: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class TemplateCreateInput:
    name: str
    content: dict[str, Any] = field(default_factory=dict)
    formatting: str = "modern"
    description: Optional[str] = None
    custom_styles: Optional[dict[str, Any]] = None
    status: TemplateStatus = TemplateStatus.DRAFT
    is_default: bool = False
    is_shared: bool = False
    html_content: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class TemplateUpdateInput:
    name: str | object = UNSET
    description: Optional[str] | object = UNSET
    content: dict[str, Any] | object = UNSET
    formatting: str | object = UNSET
    custom_styles: Optional[dict[str, Any]] | object = UNSET
    status: TemplateStatus | object = UNSET
    is_default: bool | object = UNSET
    is_shared: bool | object = UNSET
    html_content: str | object = UNSET

    def touches_rendering(self) -> bool:
        return any(value is not UNSET for value in (self.content, self.formatting, self.custom_styles))


TEMPLATE_FILTERS = ("all", "default", "draft", "active", "archived")


@dataclass(slots=True)
class TemplateListQuery:
    page: int = 1
    limit: int = 20
    search: Optional[str] = None
    filter: str = "all"
    sort: str = "updated_at"
    order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
