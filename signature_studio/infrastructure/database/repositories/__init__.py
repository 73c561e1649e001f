"""SQLAlchemy-backed repository implementations."""

from .activity_repository import SqlActivityRepository
from .asset_repository import SqlAssetRepository
from .assignment_repository import SqlAssignmentRepository
from .template_repository import SqlSignatureTemplateRepository
from .tenant_repository import SqlTenantRepository
from .user_repository import SqlUserRepository

__all__ = [
    "SqlActivityRepository",
    "SqlAssetRepository",
    "SqlAssignmentRepository",
    "SqlSignatureTemplateRepository",
    "SqlTenantRepository",
    "SqlUserRepository",
]
