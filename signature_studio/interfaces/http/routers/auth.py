"""Authentication endpoints: registration, login and the refresh token lifecycle."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.config import Settings
from signature_studio.core.errors import RefreshTokenMissingError, TokenInvalidError
from signature_studio.interfaces.http.deps import (
    TenantContext,
    get_app_settings,
    get_auth_service,
    get_db_session,
    get_tenant_context,
    rate_limit,
)
from signature_studio.interfaces.http.errors import error_response
from signature_studio.modules.auth.models import RegistrationInput
from signature_studio.modules.auth.service import AuthService
from signature_studio.schemas import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    TenantResponse,
    UserResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _set_refresh_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        settings.security.refresh_cookie_name,
        token,
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.security.cookie_secure,
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.security.refresh_cookie_name,
        httponly=True,
        secure=settings.security.cookie_secure,
        samesite="strict",
    )


def _refresh_token_from(request: Request, settings: Settings, payload: Optional[RefreshRequest]) -> Optional[str]:
    token = request.cookies.get(settings.security.refresh_cookie_name)
    if not token and payload is not None:
        token = payload.refresh_token
    return token or None


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("register"))],
    summary="Register an organization and its first administrator",
)
async def register(
    payload: RegisterRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
):
    session = await service.register_tenant(
        RegistrationInput(
            organization_name=payload.organization_name,
            domain=payload.domain,
            email=payload.email,
            password=payload.password,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
    )
    await db.commit()
    _set_refresh_cookie(response, settings, session.tokens.refresh_token)
    return AuthResponse(
        access_token=session.tokens.access_token,
        user=UserResponse.model_validate(session.user),
        tenant=TenantResponse.model_validate(session.tenant),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    dependencies=[Depends(rate_limit("login"))],
    summary="Log in with email and password",
)
async def login(
    payload: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
):
    session = await service.authenticate(payload.email, payload.password)
    logger.info("User %s logged in to tenant %s", session.user.id, session.tenant.id)
    _set_refresh_cookie(response, settings, session.tokens.refresh_token)
    return AuthResponse(
        access_token=session.tokens.access_token,
        user=UserResponse.model_validate(session.user),
        tenant=TenantResponse.model_validate(session.tenant),
    )


@router.post("/refresh", response_model=RefreshResponse, summary="Exchange a refresh token for an access token")
async def refresh(
    request: Request,
    payload: Optional[RefreshRequest] = Body(default=None),
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
):
    token = _refresh_token_from(request, settings, payload)
    if token is None:
        raise RefreshTokenMissingError()
    try:
        access_token, user = await service.refresh_access_token(token)
    except TokenInvalidError as exc:
        logger.warning("Rejected refresh token from %s", request.client.host if request.client else "unknown")
        failure = error_response(
            request,
            status_code=exc.status_code,
            message=exc.message,
            code=exc.code,
        )
        _clear_refresh_cookie(failure, settings)
        return failure
    return RefreshResponse(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse, summary="Log out on this device")
async def logout(settings: Settings = Depends(get_app_settings)):
    response = JSONResponse(content={"message": "Logged out successfully"})
    _clear_refresh_cookie(response, settings)
    return response


@router.post("/logout-all", response_model=MessageResponse, summary="Revoke every refresh token of the user")
async def logout_all(
    request: Request,
    payload: Optional[RefreshRequest] = Body(default=None),
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
):
    token = _refresh_token_from(request, settings, payload)
    if token is not None:
        try:
            revoked = await service.revoke_with_refresh_token(token)
        except TokenInvalidError:
            # nothing left to revoke; the cookie is still cleared
            logger.info("logout-all called with an unusable refresh token")
        else:
            if revoked is not None:
                await db.commit()
    response = JSONResponse(content={"message": "Logged out from all devices successfully"})
    _clear_refresh_cookie(response, settings)
    return response


@router.get("/me", response_model=MeResponse, summary="Current user and tenant")
async def me(context: TenantContext = Depends(get_tenant_context)):
    return MeResponse(
        user=UserResponse.model_validate(context.user),
        tenant=TenantResponse.model_validate(context.tenant),
    )
