"""Authentication use cases: registration, login, refresh and revocation."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.crypto import hash_password, verify_password
from signature_studio.core.errors import InvalidCredentialsError, TokenInvalidError
from signature_studio.core.security import AccessTokenClaims, RefreshTokenClaims, TokenPair, TokenService
from signature_studio.infrastructure.database.repositories.tenant_repository import SqlTenantRepository
from signature_studio.infrastructure.database.repositories.user_repository import SqlUserRepository
from signature_studio.modules.tenants.models import Plan
from signature_studio.modules.tenants.exceptions import DomainAlreadyRegisteredError
from signature_studio.modules.tenants.repository import TenantRepository
from signature_studio.modules.tenants.service import TenantService
from signature_studio.modules.users.models import Role, User
from signature_studio.modules.users.repository import UserRepository
from signature_studio.modules.users.service import normalize_email
from signature_studio.modules.users.exceptions import EmailAlreadyRegisteredError

from .models import AuthSession, RegistrationInput

logger = logging.getLogger(__name__)


class AuthService:
    """Encapsulates credential checks and the token lifecycle for users."""

    def __init__(self, users: UserRepository, tenants: TenantRepository, tokens: TokenService) -> None:
        self._users = users
        self._tenants = TenantService(tenants)
        self._tokens = tokens

    @classmethod
    def with_session(cls, session: AsyncSession, tokens: Optional[TokenService] = None) -> "AuthService":
        return cls(SqlUserRepository(session), SqlTenantRepository(session), tokens or TokenService.from_settings())

    @staticmethod
    def access_claims(user: User) -> AccessTokenClaims:
        return AccessTokenClaims(user_id=user.id, tenant_id=user.tenant_id, email=user.email, role=user.role)

    def issue_token_pair(self, user: User) -> TokenPair:
        return TokenPair(
            access_token=self._tokens.issue_access_token(self.access_claims(user)),
            refresh_token=self._tokens.issue_refresh_token(
                RefreshTokenClaims(user_id=user.id, token_version=user.token_version)
            ),
        )

    async def register_tenant(self, payload: RegistrationInput) -> AuthSession:
        if await self._tenants.get_by_domain(payload.domain) is not None:
            raise DomainAlreadyRegisteredError()
        email = normalize_email(payload.email)
        if await self._users.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError()

        tenant = await self._tenants.create_tenant(
            name=payload.organization_name,
            domain=payload.domain,
            plan=Plan.STARTER,
        )
        user = await self._users.create_user(
            tenant_id=tenant.id,
            email=email,
            password_hash=hash_password(payload.password),
            role=Role.ADMIN.value,
            first_name=payload.first_name,
            last_name=payload.last_name,
            title="Administrator",
            department="Management",
        )
        logger.info("Registered tenant %s with admin %s", tenant.id, user.id)
        return AuthSession(user=user, tenant=tenant, tokens=self.issue_token_pair(user))

    async def authenticate(self, email: str, password: str) -> AuthSession:
        user = await self._users.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        tenant = await self._tenants.get(user.tenant_id)
        return AuthSession(user=user, tenant=tenant, tokens=self.issue_token_pair(user))

    async def refresh_access_token(self, refresh_token: str) -> tuple[str, User]:
        """Mint a new access token from the user's current state.

        Fails with ``TokenInvalidError`` once the user's token version moved past the one
        captured in the refresh token.
        """
        claims = self._tokens.verify_refresh_token(refresh_token)
        user = await self._users.get_by_id(claims.user_id)
        if user is None or user.token_version != claims.token_version:
            raise TokenInvalidError()
        return self._tokens.issue_access_token(self.access_claims(user)), user

    async def revoke_all_tokens(self, user_id: str) -> Optional[int]:
        """Bump the user's token version; ``None`` when the user no longer exists."""
        version = await self._users.increment_token_version(user_id)
        if version is None:
            logger.info("No user %s to revoke tokens for", user_id)
            return None
        logger.info("Revoked all refresh tokens for user %s", user_id)
        return version

    async def revoke_with_refresh_token(self, refresh_token: str) -> Optional[int]:
        claims = self._tokens.verify_refresh_token(refresh_token)
        return await self.revoke_all_tokens(claims.user_id)
