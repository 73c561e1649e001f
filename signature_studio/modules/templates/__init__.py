"""Public exports for signature template domain services."""

from .exceptions import TemplateHasAssignmentsError
from .models import (
    TEMPLATE_FILTERS,
    SignatureTemplate,
    TemplateCreateInput,
    TemplateListQuery,
    TemplateStatus,
    TemplateUpdateInput,
    TemplateVersion,
    UNSET,
)
from .repository import SignatureTemplateRepository

__all__ = [
    "TEMPLATE_FILTERS",
    "SignatureTemplate",
    "SignatureTemplateRepository",
    "TemplateCreateInput",
    "TemplateHasAssignmentsError",
    "TemplateListQuery",
    "TemplateStatus",
    "TemplateUpdateInput",
    "TemplateVersion",
    "UNSET",
]
