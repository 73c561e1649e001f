"""Image asset upload and management endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.config import Settings
from signature_studio.interfaces.http.deps import (
    TenantContext,
    get_activity_service,
    get_app_settings,
    get_asset_service,
    get_db_session,
    get_tenant_context,
)
from signature_studio.modules.activity.models import ActivityAction, EntityType
from signature_studio.modules.activity.service import ActivityService
from signature_studio.modules.assets.models import Asset, AssetType, format_size
from signature_studio.modules.assets.service import AssetService
from signature_studio.schemas import (
    AssetListResponse,
    AssetResponse,
    AssetStatsResponse,
    AssetTypeStats,
    MessageResponse,
    MultipleUploadResponse,
    Pagination,
)

router = APIRouter()


async def _record_upload(activity: ActivityService, context: TenantContext, asset: Asset) -> None:
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.CREATE,
        entity_type=EntityType.ASSET,
        entity_id=asset.id,
        details={"name": asset.name, "size": asset.size, "type": asset.type.value},
    )


@router.post("/single", response_model=AssetResponse, status_code=status.HTTP_201_CREATED, summary="Upload one image")
async def upload_single(
    file: UploadFile = File(...),
    type: AssetType = Form(AssetType.IMAGE),
    description: Optional[str] = Form(None, max_length=500),
    context: TenantContext = Depends(get_tenant_context),
    service: AssetService = Depends(get_asset_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    asset = await service.store_upload(
        context.tenant,
        context.user.id,
        file,
        asset_type=type,
        description=description,
    )
    await _record_upload(activity, context, asset)
    await db.commit()
    return AssetResponse.model_validate(asset)


@router.post(
    "/multiple",
    response_model=MultipleUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload several images",
)
async def upload_multiple(
    files: list[UploadFile] = File(...),
    type: AssetType = Form(AssetType.IMAGE),
    description: Optional[str] = Form(None, max_length=500),
    context: TenantContext = Depends(get_tenant_context),
    service: AssetService = Depends(get_asset_service),
    activity: ActivityService = Depends(get_activity_service),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
):
    assets = await service.store_uploads(
        context.tenant,
        context.user.id,
        files,
        max_files=settings.storage.max_files_per_request,
        asset_type=type,
        description=description,
    )
    for asset in assets:
        await _record_upload(activity, context, asset)
    await db.commit()
    return MultipleUploadResponse(assets=[AssetResponse.model_validate(asset) for asset in assets])


@router.get("/assets", response_model=AssetListResponse, summary="List uploaded assets")
async def list_assets(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[AssetType] = None,
    q: Optional[str] = Query(None, max_length=100),
    context: TenantContext = Depends(get_tenant_context),
    service: AssetService = Depends(get_asset_service),
):
    assets, total = await service.list_assets(
        context.tenant.id,
        asset_type=type,
        search=q,
        page=page,
        limit=limit,
    )
    return AssetListResponse(
        assets=[AssetResponse.model_validate(asset) for asset in assets],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get("/assets/{asset_id}", response_model=AssetResponse, summary="Asset metadata")
async def get_asset(
    asset_id: str,
    context: TenantContext = Depends(get_tenant_context),
    service: AssetService = Depends(get_asset_service),
):
    return AssetResponse.model_validate(await service.get_asset(context.tenant.id, asset_id))


@router.get("/assets/{asset_id}/file", summary="Download an asset")
async def download_asset(
    asset_id: str,
    context: TenantContext = Depends(get_tenant_context),
    service: AssetService = Depends(get_asset_service),
):
    asset = await service.get_asset(context.tenant.id, asset_id)
    return FileResponse(
        service.file_path(asset),
        media_type=asset.mime_type or "application/octet-stream",
        filename=asset.name,
    )


@router.delete("/assets/{asset_id}", response_model=MessageResponse, summary="Delete an asset")
async def delete_asset(
    asset_id: str,
    context: TenantContext = Depends(get_tenant_context),
    service: AssetService = Depends(get_asset_service),
    activity: ActivityService = Depends(get_activity_service),
    db: AsyncSession = Depends(get_db_session),
):
    asset = await service.delete_asset(context.tenant.id, asset_id, context.user)
    await activity.record(
        tenant_id=context.tenant.id,
        user_id=context.user.id,
        action=ActivityAction.DELETE,
        entity_type=EntityType.ASSET,
        entity_id=asset.id,
        details={"name": asset.name},
    )
    await db.commit()
    return MessageResponse(message="Asset deleted successfully")


@router.get("/stats", response_model=AssetStatsResponse, summary="Storage usage for the tenant")
async def asset_stats(
    context: TenantContext = Depends(get_tenant_context),
    service: AssetService = Depends(get_asset_service),
):
    stats = await service.stats(context.tenant)
    return AssetStatsResponse(
        total_assets=stats.total_assets,
        total_size=stats.total_size,
        total_size_formatted=format_size(stats.total_size),
        storage_limit=stats.storage_limit,
        storage_limit_formatted=format_size(stats.storage_limit) if stats.storage_limit is not None else None,
        by_type={
            name: AssetTypeStats(count=usage.count, size=usage.size, size_formatted=format_size(usage.size))
            for name, usage in stats.by_type.items()
        },
    )
