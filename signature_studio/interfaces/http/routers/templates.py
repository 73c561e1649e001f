"""Signature template endpoints."""

import logging
from typing import Any, Literal

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.security import AccessTokenClaims
from signature_studio.interfaces.http.deps import (
    TenantContext,
    get_activity_service,
    get_assignment_service,
    get_db_session,
    get_renderer,
    get_template_service,
    get_tenant_context,
    get_token_claims,
    require_admin,
)
from signature_studio.modules.activity.models import ActivityAction, EntityType
from signature_studio.modules.activity.service import ActivityService
from signature_studio.modules.assignments.service import AssignmentService
from signature_studio.modules.signatures import CUSTOM_PRESET, SignatureRenderer, preset_names
from signature_studio.modules.templates.models import TemplateCreateInput, TemplateListQuery, TemplateUpdateInput
from signature_studio.modules.templates.service import SignatureTemplateService
from signature_studio.schemas import (
    AssignmentResponse,
    Pagination,
    PresetListResponse,
    PreviewRequest,
    PreviewResponse,
    TemplateCreateRequest,
    TemplateDetailResponse,
    TemplateDuplicateRequest,
    TemplateListResponse,
    TemplateResponse,
    TemplateUpdateRequest,
    TemplateVersionResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _update_input(payload: TemplateUpdateRequest) -> TemplateUpdateInput:
    changes: dict[str, Any] = {}
    for name in payload.model_fields_set:
        value = getattr(payload, name)
        if name == "content":
            changes[name] = value.to_content() if value is not None else {}
        elif name == "custom_styles":
            changes[name] = value.to_styles() if value is not None else None
        elif name == "description":
            changes[name] = value
        elif value is not None:
            changes[name] = value
    return TemplateUpdateInput(**changes)


@router.get("/presets", response_model=PresetListResponse, summary="List style presets")
async def list_presets(
    claims: AccessTokenClaims = Depends(get_token_claims),
    renderer: SignatureRenderer = Depends(get_renderer),
):
    return PresetListResponse(presets=preset_names(), default=renderer.default_preset)


@router.post("/preview", response_model=PreviewResponse, summary="Render a signature without saving it")
async def preview(
    payload: PreviewRequest,
    context: TenantContext = Depends(get_tenant_context),
    service: SignatureTemplateService = Depends(get_template_service),
    renderer: SignatureRenderer = Depends(get_renderer),
):
    custom_styles = payload.custom_styles.to_styles() if payload.custom_styles else None
    html_content = service.render(payload.content.to_content(), payload.formatting, custom_styles)
    formatting = payload.formatting
    if formatting != CUSTOM_PRESET and formatting not in renderer.presets:
        formatting = renderer.default_preset
    return PreviewResponse(html_content=html_content, formatting=formatting)


@router.get("/", response_model=TemplateListResponse, summary="List templates in the tenant")
async def list_templates(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    q: str | None = Query(None, max_length=100),
    filter: Literal["all", "default", "draft", "active", "archived"] = "all",
    sort: Literal["updated_at", "created_at", "name"] = "updated_at",
    order: Literal["asc", "desc"] = "desc",
    context: TenantContext = Depends(get_tenant_context),
    service: SignatureTemplateService = Depends(get_template_service),
):
    templates, total = await service.list_templates(
        context.tenant.id,
        TemplateListQuery(page=page, limit=limit, search=q, filter=filter, sort=sort, order=order),
    )
    return TemplateListResponse(
        templates=[TemplateResponse.model_validate(template) for template in templates],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get("/{template_id}", response_model=TemplateDetailResponse, summary="Get a template with its assignments")
async def get_template(
    template_id: str,
    context: TenantContext = Depends(get_tenant_context),
    service: SignatureTemplateService = Depends(get_template_service),
    assignments: AssignmentService = Depends(get_assignment_service),
):
    template = await service.get_template(context.tenant.id, template_id)
    items = await assignments.for_template(context.tenant.id, template.id)
    return TemplateDetailResponse(
        **TemplateResponse.model_validate(template).model_dump(),
        assignments=[AssignmentResponse.model_validate(item) for item in items],
    )


@router.post("/", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED, summary="Create a template")
async def create_template(
    payload: TemplateCreateRequest,
    context: TenantContext = Depends(get_tenant_context),
    service: SignatureTemplateService = Depends(get_template_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    template = await service.create_template(
        context.tenant,
        context.user.id,
        TemplateCreateInput(
            name=payload.name,
            description=payload.description,
            content=payload.content.to_content(),
            formatting=payload.formatting,
            custom_styles=payload.custom_styles.to_styles() if payload.custom_styles else None,
            status=payload.status,
            is_default=payload.is_default,
            is_shared=payload.is_shared,
            html_content=payload.html_content,
        ),
    )
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.CREATE,
        entity_type=EntityType.TEMPLATE,
        entity_id=template.id,
        details={"name": template.name},
    )
    await db.commit()
    return TemplateResponse.model_validate(template)


@router.put("/{template_id}", response_model=TemplateResponse, summary="Update a template")
async def update_template(
    template_id: str,
    payload: TemplateUpdateRequest,
    context: TenantContext = Depends(get_tenant_context),
    service: SignatureTemplateService = Depends(get_template_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    template = await service.update_template(context.tenant.id, template_id, context.user.id, _update_input(payload))
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.UPDATE,
        entity_type=EntityType.TEMPLATE,
        entity_id=template.id,
        details={"fields": sorted(payload.model_fields_set)},
    )
    await db.commit()
    return TemplateResponse.model_validate(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a template")
async def delete_template(
    template_id: str,
    context: TenantContext = Depends(require_admin),
    service: SignatureTemplateService = Depends(get_template_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    template = await service.delete_template(context.tenant.id, template_id)
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.DELETE,
        entity_type=EntityType.TEMPLATE,
        entity_id=template.id,
        details={"name": template.name},
    )
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{template_id}/duplicate",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate a template",
)
async def duplicate_template(
    template_id: str,
    payload: TemplateDuplicateRequest | None = None,
    context: TenantContext = Depends(get_tenant_context),
    service: SignatureTemplateService = Depends(get_template_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    template = await service.duplicate_template(
        context.tenant,
        template_id,
        context.user.id,
        name=payload.name if payload else None,
    )
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.CREATE,
        entity_type=EntityType.TEMPLATE,
        entity_id=template.id,
        details={"name": template.name, "duplicatedFrom": template_id},
    )
    await db.commit()
    return TemplateResponse.model_validate(template)


@router.get("/{template_id}/versions", response_model=list[TemplateVersionResponse], summary="Template version history")
async def list_versions(
    template_id: str,
    context: TenantContext = Depends(get_tenant_context),
    service: SignatureTemplateService = Depends(get_template_service),
):
    versions = await service.list_versions(context.tenant.id, template_id)
    return [TemplateVersionResponse.model_validate(version) for version in versions]
