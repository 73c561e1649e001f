"""Tenant activity log endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from signature_studio.interfaces.http.deps import TenantContext, get_activity_service, require_admin
from signature_studio.modules.activity.models import EntityType
from signature_studio.modules.activity.service import ActivityService
from signature_studio.schemas import ActivityListResponse, ActivityResponse

router = APIRouter()


@router.get("/", response_model=ActivityListResponse, summary="Recent activity in the tenant")
async def recent_activity(
    limit: int = Query(50, ge=1, le=200),
    entity_type: Optional[EntityType] = None,
    context: TenantContext = Depends(require_admin),
    service: ActivityService = Depends(get_activity_service),
):
    entries = await service.recent(context.tenant.id, limit=limit, entity_type=entity_type)
    return ActivityListResponse(activity=[ActivityResponse.model_validate(entry) for entry in entries])
