"""Template assignment endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.interfaces.http.deps import (
    TenantContext,
    get_activity_service,
    get_assignment_service,
    get_db_session,
    get_tenant_context,
    require_admin,
)
from signature_studio.modules.activity.models import ActivityAction, EntityType
from signature_studio.modules.activity.service import ActivityService
from signature_studio.modules.assignments.service import AssignmentService
from signature_studio.schemas import (
    AssignmentCreateRequest,
    AssignmentListResponse,
    AssignmentResponse,
    BulkAssignRequest,
    BulkAssignResponse,
    BulkDeleteResponse,
    BulkUnassignRequest,
    MessageResponse,
    Pagination,
)

router = APIRouter()


@router.get("/", response_model=AssignmentListResponse, summary="List template assignments in the tenant")
async def list_assignments(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    context: TenantContext = Depends(require_admin),
    service: AssignmentService = Depends(get_assignment_service),
):
    items, total = await service.list_assignments(context.tenant.id, page=page, limit=limit)
    return AssignmentListResponse(
        assignments=[AssignmentResponse.model_validate(item) for item in items],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.post("/", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED, summary="Assign a template")
async def create_assignment(
    payload: AssignmentCreateRequest,
    context: TenantContext = Depends(require_admin),
    service: AssignmentService = Depends(get_assignment_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    assignment = await service.assign(
        context.tenant.id,
        user_id=payload.user_id,
        template_id=payload.template_id,
        assigned_by=context.user.id,
    )
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.CREATE,
        entity_type=EntityType.ASSIGNMENT,
        entity_id=assignment.id,
        details={"userId": assignment.user_id, "templateId": assignment.template_id},
    )
    await db.commit()
    return AssignmentResponse.model_validate(assignment)


@router.post("/bulk", response_model=BulkAssignResponse, status_code=status.HTTP_201_CREATED, summary="Assign a template to many users")
async def bulk_assign(
    payload: BulkAssignRequest,
    context: TenantContext = Depends(require_admin),
    service: AssignmentService = Depends(get_assignment_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    result = await service.bulk_assign(
        context.tenant.id,
        template_id=payload.template_id,
        user_ids=payload.user_ids,
        assigned_by=context.user.id,
    )
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.CREATE,
        entity_type=EntityType.ASSIGNMENT,
        details={
            "templateId": payload.template_id,
            "created": len(result.created),
            "skipped": len(result.skipped_user_ids),
        },
    )
    await db.commit()
    return BulkAssignResponse(
        created=[AssignmentResponse.model_validate(item) for item in result.created],
        skipped_user_ids=result.skipped_user_ids,
    )


@router.delete("/bulk", response_model=BulkDeleteResponse, summary="Remove many assignments")
async def bulk_unassign(
    payload: BulkUnassignRequest,
    context: TenantContext = Depends(require_admin),
    service: AssignmentService = Depends(get_assignment_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    deleted = await service.bulk_unassign(context.tenant.id, payload.assignment_ids)
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.DELETE,
        entity_type=EntityType.ASSIGNMENT,
        details={"assignmentIds": payload.assignment_ids, "deleted": deleted},
    )
    await db.commit()
    return BulkDeleteResponse(deleted=deleted)


@router.get("/user/{user_id}", response_model=list[AssignmentResponse], summary="Assignments of a user")
async def assignments_for_user(
    user_id: str,
    context: TenantContext = Depends(get_tenant_context),
    service: AssignmentService = Depends(get_assignment_service),
):
    items = await service.for_user(context.tenant.id, user_id, context.user)
    return [AssignmentResponse.model_validate(item) for item in items]


@router.get("/template/{template_id}", response_model=list[AssignmentResponse], summary="Assignments of a template")
async def assignments_for_template(
    template_id: str,
    context: TenantContext = Depends(require_admin),
    service: AssignmentService = Depends(get_assignment_service),
):
    items = await service.for_template(context.tenant.id, template_id)
    return [AssignmentResponse.model_validate(item) for item in items]


@router.get("/{assignment_id}", response_model=AssignmentResponse, summary="Get an assignment")
async def get_assignment(
    assignment_id: str,
    context: TenantContext = Depends(get_tenant_context),
    service: AssignmentService = Depends(get_assignment_service),
):
    return AssignmentResponse.model_validate(
        await service.get_assignment(context.tenant.id, assignment_id, context.user)
    )


@router.delete("/{assignment_id}", response_model=MessageResponse, summary="Remove an assignment")
async def delete_assignment(
    assignment_id: str,
    context: TenantContext = Depends(require_admin),
    service: AssignmentService = Depends(get_assignment_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    await service.unassign(context.tenant.id, assignment_id)
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.DELETE,
        entity_type=EntityType.ASSIGNMENT,
        entity_id=assignment_id,
    )
    await db.commit()
    return MessageResponse(message="Assignment removed successfully")
