"""Tenant user management endpoints."""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.interfaces.http.deps import (
    TenantContext,
    get_activity_service,
    get_assignment_service,
    get_db_session,
    get_template_service,
    get_tenant_context,
    get_user_service,
    require_admin,
)
from signature_studio.modules.activity.models import ActivityAction, EntityType
from signature_studio.modules.activity.service import ActivityService
from signature_studio.modules.assignments.service import AssignmentService
from signature_studio.modules.templates.service import SignatureTemplateService
from signature_studio.modules.users.models import Role, UserCreateInput, UserListQuery, UserUpdateInput
from signature_studio.modules.users.service import UserService
from signature_studio.schemas import (
    AssignmentResponse,
    MessageResponse,
    Pagination,
    ResetPasswordRequest,
    ResetPasswordResponse,
    TenantResponse,
    UserCreateRequest,
    UserCreateResponse,
    UserListItem,
    UserListResponse,
    UserProfileResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter()
logger = logging.getLogger(__name__)

_ROLE_FILTERS = {"all": None, "admin": Role.ADMIN, "member": Role.MEMBER}


@router.get("/", response_model=UserListResponse, summary="List users in the tenant")
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: Literal["created_at", "email", "first_name", "last_name", "role"] = "created_at",
    order: Literal["asc", "desc"] = "desc",
    q: str | None = Query(None, max_length=100),
    filter: Literal["all", "admin", "member"] = "all",
    context: TenantContext = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    summaries, total = await service.list_users(
        context.tenant.id,
        UserListQuery(page=page, limit=limit, sort=sort, order=order, search=q, role=_ROLE_FILTERS[filter]),
    )
    return UserListResponse(
        users=[
            UserListItem(
                **UserResponse.model_validate(summary.user).model_dump(),
                assignment_count=summary.assignment_count,
            )
            for summary in summaries
        ],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get("/me", response_model=UserProfileResponse, summary="Current user profile with assigned templates")
async def my_profile(
    context: TenantContext = Depends(get_tenant_context),
    assignments: AssignmentService = Depends(get_assignment_service),
):
    items = await assignments.for_user(context.tenant.id, context.user.id, context.user)
    return UserProfileResponse(
        user=UserResponse.model_validate(context.user),
        tenant=TenantResponse.model_validate(context.tenant),
        assignments=[AssignmentResponse.model_validate(item) for item in items],
    )


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(
    user_id: str,
    context: TenantContext = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.model_validate(await service.get_user(context.tenant.id, user_id))


@router.post("/", response_model=UserCreateResponse, status_code=status.HTTP_201_CREATED, summary="Create a user")
async def create_user(
    payload: UserCreateRequest,
    context: TenantContext = Depends(require_admin),
    service: UserService = Depends(get_user_service),
    templates: SignatureTemplateService = Depends(get_template_service),
    assignments: AssignmentService = Depends(get_assignment_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    user, temporary_password = await service.create_user(
        context.tenant,
        UserCreateInput(
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            title=payload.title,
            department=payload.department,
            role=payload.role,
            password=payload.password,
        ),
    )
    default_template = await templates.get_default(context.tenant.id)
    if default_template is not None:
        await assignments.assign(
            context.tenant.id,
            user_id=user.id,
            template_id=default_template.id,
            assigned_by=context.user.id,
        )
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.CREATE,
        entity_type=EntityType.USER,
        entity_id=user.id,
        details={"email": user.email, "role": user.role.value},
    )
    await db.commit()
    return UserCreateResponse(user=UserResponse.model_validate(user), temporary_password=temporary_password)


@router.put("/{user_id}", response_model=UserResponse, summary="Update a user")
async def update_user(
    user_id: str,
    payload: UserUpdateRequest,
    context: TenantContext = Depends(get_tenant_context),
    service: UserService = Depends(get_user_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    changes = payload.model_dump(exclude_unset=True)
    # email, role and password cannot be cleared
    for name in ("email", "role", "password"):
        if changes.get(name, ...) is None:
            changes.pop(name)
    user = await service.update_user(context.tenant.id, user_id, context.user, UserUpdateInput(**changes))
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.UPDATE,
        entity_type=EntityType.USER,
        entity_id=user.id,
        details={"fields": sorted(changes)},
    )
    await db.commit()
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete a user")
async def delete_user(
    user_id: str,
    context: TenantContext = Depends(require_admin),
    service: UserService = Depends(get_user_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    user = await service.delete_user(context.tenant.id, user_id, context.user)
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.DELETE,
        entity_type=EntityType.USER,
        entity_id=user.id,
        details={"email": user.email},
    )
    await db.commit()
    return MessageResponse(message="User deleted successfully")


@router.post("/{user_id}/reset-password", response_model=ResetPasswordResponse, summary="Reset a user's password")
async def reset_password(
    user_id: str,
    payload: ResetPasswordRequest | None = None,
    context: TenantContext = Depends(require_admin),
    service: UserService = Depends(get_user_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    user, temporary_password = await service.reset_password(
        context.tenant.id,
        user_id,
        payload.password if payload else None,
    )
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.UPDATE,
        entity_type=EntityType.USER,
        entity_id=user.id,
        details={"passwordReset": True},
    )
    await db.commit()
    return ResetPasswordResponse(message="Password reset successfully", temporary_password=temporary_password)
