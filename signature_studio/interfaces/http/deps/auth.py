"""Request guard: authenticate, resolve the tenant, optionally require the admin role.

Each stage depends on the previous one, so FastAPI runs them in order and the first failure
ends the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.errors import (
    ApiError,
    InsufficientRoleError,
    TenantMismatchError,
    TenantNotFoundError,
    TenantValidationError,
    TokenMissingError,
    UserNotFoundError,
)
from signature_studio.core.security import AccessTokenClaims, TokenService
from signature_studio.infrastructure.database.repositories.tenant_repository import SqlTenantRepository
from signature_studio.infrastructure.database.repositories.user_repository import SqlUserRepository
from signature_studio.modules.tenants.models import Tenant
from signature_studio.modules.users.models import Role, User

from .container import get_token_service
from .database import get_db_session

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Access token issued by /auth/login")


@dataclass(slots=True)
class TenantContext:
    claims: AccessTokenClaims
    user: User
    tenant: Tenant

    @property
    def is_admin(self) -> bool:
        return self.claims.role is Role.ADMIN


async def get_token_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> AccessTokenClaims:
    if credentials is None or not credentials.credentials:
        raise TokenMissingError()
    claims = tokens.verify_access_token(credentials.credentials)
    request.state.claims = claims
    return claims


async def get_tenant_context(
    request: Request,
    claims: AccessTokenClaims = Depends(get_token_claims),
    db: AsyncSession = Depends(get_db_session),
) -> TenantContext:
    try:
        user = await SqlUserRepository(db).get_by_id(claims.user_id)
        if user is None:
            raise UserNotFoundError()
        tenant = await SqlTenantRepository(db).get_by_id(user.tenant_id)
        if tenant is None:
            raise TenantNotFoundError()
    except ApiError:
        raise
    except Exception as exc:
        logger.exception("Tenant validation failed for user %s", claims.user_id)
        raise TenantValidationError() from exc

    if user.tenant_id != claims.tenant_id:
        logger.warning(
            "Tenant mismatch for user %s: token tenant %s, current tenant %s",
            user.id,
            claims.tenant_id,
            user.tenant_id,
        )
        raise TenantMismatchError()

    context = TenantContext(claims=claims, user=user, tenant=tenant)
    request.state.tenant = tenant
    return context


async def require_admin(context: TenantContext = Depends(get_tenant_context)) -> TenantContext:
    match context.claims.role:
        case Role.ADMIN:
            return context
        case Role.MEMBER:
            raise InsufficientRoleError()


__all__ = [
    "TenantContext",
    "bearer_scheme",
    "get_tenant_context",
    "get_token_claims",
    "require_admin",
]
