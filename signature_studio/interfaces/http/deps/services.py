"""Domain service providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.config import Settings
from signature_studio.core.security import TokenService
from signature_studio.modules.activity.service import ActivityService
from signature_studio.modules.assets.service import AssetService
from signature_studio.modules.assignments.service import AssignmentService
from signature_studio.modules.auth.service import AuthService
from signature_studio.modules.signatures import SignatureRenderer
from signature_studio.modules.templates.service import SignatureTemplateService
from signature_studio.modules.users.service import UserService

from .container import get_app_settings, get_renderer, get_token_service
from .database import get_db_session


def get_auth_service(
    db: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService.with_session(db, tokens)


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService.with_session(db)


def get_template_service(
    db: AsyncSession = Depends(get_db_session),
    renderer: SignatureRenderer = Depends(get_renderer),
) -> SignatureTemplateService:
    return SignatureTemplateService.with_session(db, renderer)


def get_assignment_service(db: AsyncSession = Depends(get_db_session)) -> AssignmentService:
    return AssignmentService.with_session(db)


def get_asset_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> AssetService:
    return AssetService.with_session(db, settings)


def get_activity_service(db: AsyncSession = Depends(get_db_session)) -> ActivityService:
    return ActivityService.with_session(db)


__all__ = [
    "get_activity_service",
    "get_asset_service",
    "get_assignment_service",
    "get_auth_service",
    "get_template_service",
    "get_user_service",
]
