"""Repository protocol for uploaded assets."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .models import Asset, AssetStats, AssetType


class AssetRepository(Protocol):
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
        ...

    async def get(self, tenant_id: str, asset_id: str) -> Asset | None:
        ...

    async def list_assets(
        self,
        tenant_id: str,
        *,
        asset_type: Optional[AssetType],
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[Sequence[Asset], int]:
        ...

    async def total_size(self, tenant_id: str) -> int:
        ...

    async def stats(self, tenant_id: str) -> AssetStats:
        ...

    async def delete(self, asset_id: str) -> None:
        ...
