"""SQLAlchemy implementation of the asset repository."""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.db.models import Asset as AssetModel
from signature_studio.modules.assets.models import Asset, AssetStats, AssetType, AssetTypeUsage
from signature_studio.modules.assets.repository import AssetRepository


class SqlAssetRepository(AssetRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        tenant_id: str,
        uploaded_by: str | None,
        name: str,
        filename: str,
        mime_type: str,
        size: int,
        url: str,
        type: AssetType,
        description: str | None,
        storage_path: str,
        checksum_sha256: str,
    ) -> Asset:
        model = AssetModel(
            tenant_id=tenant_id,
            uploaded_by=uploaded_by,
            name=name,
            filename=filename,
            mime_type=mime_type,
            size=size,
            url=url,
            type=type.value,
            description=description,
            storage_path=storage_path,
            checksum_sha256=checksum_sha256,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get(self, tenant_id: str, asset_id: str) -> Asset | None:
        stmt = select(AssetModel).where(AssetModel.id == asset_id, AssetModel.tenant_id == tenant_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_assets(
        self,
        tenant_id: str,
        *,
        asset_type: Optional[AssetType],
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[Sequence[Asset], int]:
        conditions = [AssetModel.tenant_id == tenant_id]
        if asset_type is not None:
            conditions.append(AssetModel.type == asset_type.value)
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(or_(AssetModel.name.ilike(pattern), AssetModel.description.ilike(pattern)))

        total = await self._session.scalar(select(func.count()).select_from(AssetModel).where(*conditions))
        stmt = (
            select(AssetModel)
            .where(*conditions)
            .order_by(AssetModel.created_at.desc(), AssetModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()], int(total or 0)

    async def total_size(self, tenant_id: str) -> int:
        stmt = select(func.coalesce(func.sum(AssetModel.size), 0)).where(AssetModel.tenant_id == tenant_id)
        return int(await self._session.scalar(stmt) or 0)

    async def stats(self, tenant_id: str) -> AssetStats:
        stmt = (
            select(AssetModel.type, func.count(AssetModel.id), func.coalesce(func.sum(AssetModel.size), 0))
            .where(AssetModel.tenant_id == tenant_id)
            .group_by(AssetModel.type)
        )
        result = await self._session.execute(stmt)
        by_type = {asset_type.value: AssetTypeUsage() for asset_type in AssetType}
        for type_name, count, size in result.all():
            by_type[type_name] = AssetTypeUsage(count=int(count), size=int(size))
        return AssetStats(
            total_assets=sum(usage.count for usage in by_type.values()),
            total_size=sum(usage.size for usage in by_type.values()),
            by_type=by_type,
        )

    async def delete(self, asset_id: str) -> None:
        stmt = delete(AssetModel).where(AssetModel.id == asset_id).execution_options(synchronize_session=False)
        await self._session.execute(stmt)

    @staticmethod
    def _to_domain(model: AssetModel) -> Asset:
        return Asset(
            id=str(model.id),
            tenant_id=model.tenant_id,
            name=model.name,
            filename=model.filename,
            mime_type=model.mime_type,
            size=int(model.size),
            url=model.url,
            type=AssetType(model.type),
            storage_path=model.storage_path,
            checksum_sha256=model.checksum_sha256 or "",
            uploaded_by=model.uploaded_by,
            description=model.description,
            created_at=model.created_at,
        )
