"""Reusable FastAPI dependencies."""

from .auth import TenantContext, get_tenant_context, get_token_claims, require_admin
from .container import get_app_settings, get_container, get_rate_limit_store, get_renderer, get_token_service
from .database import get_db_session
from .rate_limit import rate_limit
from .services import (
    get_activity_service,
    get_asset_service,
    get_assignment_service,
    get_auth_service,
    get_template_service,
    get_user_service,
)

__all__ = [
    "TenantContext",
    "get_activity_service",
    "get_app_settings",
    "get_asset_service",
    "get_assignment_service",
    "get_auth_service",
    "get_container",
    "get_db_session",
    "get_rate_limit_store",
    "get_renderer",
    "get_template_service",
    "get_tenant_context",
    "get_token_claims",
    "get_token_service",
    "get_user_service",
    "rate_limit",
    "require_admin",
]
