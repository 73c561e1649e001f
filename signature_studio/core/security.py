"""JWT access/refresh token issuance and verification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from signature_studio.core.config import Settings, get_settings
from signature_studio.core.errors import TokenInvalidError
from signature_studio.modules.users.models import Role

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True, slots=True)
class AccessTokenClaims:
    user_id: str
    tenant_id: str
    email: str
    role: Role


@dataclass(frozen=True, slots=True)
class RefreshTokenClaims:
    user_id: str
    token_version: int


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """Signs and verifies the two token kinds.

    Access and refresh tokens are signed with distinct secrets so one can never be
    presented in place of the other. Issuing is pure: no I/O, no persistence.
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ) -> None:
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TokenService":
        settings = settings or get_settings()
        return cls(
            access_secret=settings.security.access_secret,
            refresh_secret=settings.security.refresh_secret,
            algorithm=settings.algorithm,
            access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_ttl=timedelta(days=settings.refresh_token_expire_days),
        )

    def issue_access_token(self, claims: AccessTokenClaims, *, issued_at: Optional[datetime] = None) -> str:
        now = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": claims.user_id,
            "tenantId": claims.tenant_id,
            "email": claims.email,
            "role": claims.role.value,
            "type": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": now + self.access_ttl,
        }
        return jwt.encode(payload, self._access_secret, algorithm=self._algorithm)

    def issue_refresh_token(self, claims: RefreshTokenClaims, *, issued_at: Optional[datetime] = None) -> str:
        now = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": claims.user_id,
            "tokenVersion": claims.token_version,
            "type": REFRESH_TOKEN_TYPE,
            "iat": now,
            "exp": now + self.refresh_ttl,
        }
        return jwt.encode(payload, self._refresh_secret, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> AccessTokenClaims:
        payload = self._decode(token, self._access_secret, ACCESS_TOKEN_TYPE)
        try:
            return AccessTokenClaims(
                user_id=str(payload["sub"]),
                tenant_id=str(payload["tenantId"]),
                email=str(payload["email"]),
                role=Role.parse(payload["role"]),
            )
        except (KeyError, ValueError) as exc:
            raise TokenInvalidError() from exc

    def verify_refresh_token(self, token: str) -> RefreshTokenClaims:
        payload = self._decode(token, self._refresh_secret, REFRESH_TOKEN_TYPE)
        try:
            return RefreshTokenClaims(
                user_id=str(payload["sub"]),
                token_version=int(payload["tokenVersion"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenInvalidError() from exc

    def _decode(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        # expired and tampered tokens deliberately collapse into one error kind
        try:
            payload = jwt.decode(token, secret, algorithms=[self._algorithm])
        except JWTError as exc:
            raise TokenInvalidError() from exc
        if payload.get("type") != expected_type:
            raise TokenInvalidError()
        return payload


__all__ = [
    "AccessTokenClaims",
    "RefreshTokenClaims",
    "TokenPair",
    "TokenService",
]
