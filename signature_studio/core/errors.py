"""API error taxonomy shared by the guard, services and routers.

Every error carries an HTTP status, a stable machine readable ``code`` and a human readable
message. ``signature_studio.interfaces.http.errors`` turns them into JSON responses.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import status


class ApiError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = details
        super().__init__(self.message)


# -- authentication -------------------------------------------------------------------


class TokenMissingError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "TOKEN_MISSING"
    message = "Access token required"


class TokenInvalidError(ApiError):
    """Malformed, tampered and expired tokens all end up here."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "TOKEN_INVALID"
    message = "Invalid or expired token"


class InvalidCredentialsError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class RefreshTokenMissingError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "REFRESH_TOKEN_MISSING"
    message = "Refresh token required"


# -- authorization --------------------------------------------------------------------


class TenantMismatchError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "TENANT_MISMATCH"
    message = "Tenant access denied"


class InsufficientRoleError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "ADMIN_REQUIRED"
    message = "Admin access required"


class PermissionDeniedError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "INSUFFICIENT_PERMISSIONS"
    message = "You do not have permission to perform this action"


class PlanLimitExceededError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "PLAN_LIMIT_EXCEEDED"
    message = "Your subscription plan limit has been reached"


# -- lookups --------------------------------------------------------------------------


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "RECORD_NOT_FOUND"
    message = "Record not found"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    message = "User not found"


class TenantNotFoundError(NotFoundError):
    code = "TENANT_NOT_FOUND"
    message = "Tenant not found"


class TemplateNotFoundError(NotFoundError):
    code = "TEMPLATE_NOT_FOUND"
    message = "Template not found"


class AssetNotFoundError(NotFoundError):
    code = "ASSET_NOT_FOUND"
    message = "Asset not found"


class AssignmentNotFoundError(NotFoundError):
    code = "ASSIGNMENT_NOT_FOUND"
    message = "Template assignment not found"


# -- input and integrity --------------------------------------------------------------


class ValidationFailedError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Validation failed"


class DuplicateRecordError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    code = "DUPLICATE_RECORD"
    message = "A record with these values already exists"


class RelationConstraintError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    code = "RELATION_CONSTRAINT"
    message = "Cannot delete record due to existing references"


class RateLimitExceededError(ApiError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMIT_EXCEEDED"
    message = "Too many authentication attempts"

    def __init__(self, retry_after: int) -> None:
        super().__init__(details={"retryAfter": retry_after})
        self.retry_after = retry_after


class TenantValidationError(ApiError):
    """Unexpected failure while resolving the tenant for a request."""

    code = "TENANT_VALIDATION_ERROR"
    message = "Failed to validate tenant access"


__all__ = [
    "ApiError",
    "TokenMissingError",
    "TokenInvalidError",
    "InvalidCredentialsError",
    "RefreshTokenMissingError",
    "TenantMismatchError",
    "InsufficientRoleError",
    "PermissionDeniedError",
    "PlanLimitExceededError",
    "NotFoundError",
    "UserNotFoundError",
    "TenantNotFoundError",
    "TemplateNotFoundError",
    "AssetNotFoundError",
    "AssignmentNotFoundError",
    "ValidationFailedError",
    "DuplicateRecordError",
    "RelationConstraintError",
    "RateLimitExceededError",
    "TenantValidationError",
]
