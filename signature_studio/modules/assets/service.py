"""Asset service handling image storage and retrieval."""

from __future__ import annotations

import hashlib
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from signature_studio.core.config import Settings, get_settings
from signature_studio.core.errors import AssetNotFoundError, PermissionDeniedError
from signature_studio.infrastructure.database.repositories.asset_repository import SqlAssetRepository
from signature_studio.modules.tenants.models import Tenant
from signature_studio.modules.tenants.service import ensure_within_limit
from signature_studio.modules.users.models import User

from .exceptions import EmptyFileError, FileTooLargeError, TooManyFilesError, UnsupportedFileTypeError
from .models import ALLOWED_MIME_TYPES, Asset, AssetStats, AssetType
from .repository import AssetRepository

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(slots=True)
class AssetService:
    repository: AssetRepository
    storage_root: Path
    public_prefix: str
    max_upload_bytes: int

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Optional[Settings] = None) -> "AssetService":
        settings = settings or get_settings()
        return cls(
            SqlAssetRepository(session),
            Path(settings.asset_storage_dir).resolve(),
            settings.storage.public_prefix.rstrip("/"),
            settings.storage.max_upload_bytes,
        )

    async def store_upload(
        self,
        tenant: Tenant,
        uploader_id: str,
        upload: UploadFile,
        *,
        asset_type: AssetType = AssetType.IMAGE,
        description: Optional[str] = None,
    ) -> Asset:
        original_name = _sanitize_filename(upload.filename) or "asset"
        suffix = Path(original_name).suffix.lower()
        mime_type = (upload.content_type or "").lower()
        if suffix not in ALLOWED_MIME_TYPES.get(mime_type, set()):
            await upload.close()
            raise UnsupportedFileTypeError(details={"filename": original_name, "mimeType": mime_type})

        storage_dir = self.storage_root / tenant.id
        storage_dir.mkdir(parents=True, exist_ok=True)
        stored_name = f"{Path(original_name).stem[:50]}-{os.urandom(8).hex()}{suffix}"
        target_path = storage_dir / stored_name

        hasher = hashlib.sha256()
        total_size = 0
        try:
            with target_path.open("wb") as buffer:
                while True:
                    chunk = await upload.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    total_size += len(chunk)
                    if total_size > self.max_upload_bytes:
                        raise FileTooLargeError(details={"filename": original_name, "limit": self.max_upload_bytes})
                    buffer.write(chunk)
                    hasher.update(chunk)
            if total_size == 0:
                raise EmptyFileError(details={"filename": original_name})
            used = await self.repository.total_size(tenant.id)
            ensure_within_limit(tenant.max_storage_bytes, used, "storage", adding=total_size)
        except Exception:
            target_path.unlink(missing_ok=True)
            raise
        finally:
            await upload.close()

        asset = await self.repository.create(
            tenant_id=tenant.id,
            uploaded_by=uploader_id,
            name=original_name,
            filename=stored_name,
            mime_type=mime_type,
            size=total_size,
            url=f"{self.public_prefix}/{tenant.id}/{stored_name}",
            type=asset_type,
            description=description,
            storage_path=str(target_path),
            checksum_sha256=hasher.hexdigest(),
        )
        logger.info("Stored asset %s (%d bytes) for tenant %s", asset.id, total_size, tenant.id)
        return asset

    async def store_uploads(
        self,
        tenant: Tenant,
        uploader_id: str,
        uploads: Sequence[UploadFile],
        *,
        max_files: int,
        asset_type: AssetType = AssetType.IMAGE,
        description: Optional[str] = None,
    ) -> list[Asset]:
        """Store a batch of uploads; files already written are removed if a later one fails."""
        if len(uploads) > max_files:
            raise TooManyFilesError(details={"limit": max_files, "received": len(uploads)})
        stored: list[Asset] = []
        try:
            for upload in uploads:
                stored.append(
                    await self.store_upload(
                        tenant,
                        uploader_id,
                        upload,
                        asset_type=asset_type,
                        description=description,
                    )
                )
        except Exception:
            for asset in stored:
                Path(asset.storage_path).unlink(missing_ok=True)
            raise
        return stored

    async def list_assets(
        self,
        tenant_id: str,
        *,
        asset_type: Optional[AssetType] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[Asset], int]:
        return await self.repository.list_assets(
            tenant_id,
            asset_type=asset_type,
            search=search,
            offset=(page - 1) * limit,
            limit=limit,
        )

    async def get_asset(self, tenant_id: str, asset_id: str) -> Asset:
        asset = await self.repository.get(tenant_id, asset_id)
        if asset is None:
            raise AssetNotFoundError()
        return asset

    def file_path(self, asset: Asset) -> Path:
        path = Path(asset.storage_path)
        if not path.is_file():
            logger.warning("Asset %s is missing its file at %s", asset.id, path)
            raise AssetNotFoundError("Asset file not found")
        return path

    async def delete_asset(self, tenant_id: str, asset_id: str, actor: User) -> Asset:
        asset = await self.get_asset(tenant_id, asset_id)
        if not actor.is_admin() and asset.uploaded_by != actor.id:
            raise PermissionDeniedError("Only administrators or the uploader can delete this asset")
        await self.repository.delete(asset.id)
        Path(asset.storage_path).unlink(missing_ok=True)
        logger.info("Deleted asset %s from tenant %s", asset.id, tenant_id)
        return asset

    async def stats(self, tenant: Tenant) -> AssetStats:
        stats = await self.repository.stats(tenant.id)
        stats.storage_limit = tenant.max_storage_bytes
        return stats


def _sanitize_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    name = os.path.basename(filename.replace("\\", "/")).replace("\0", "").strip()
    return _UNSAFE_CHARS.sub("_", name) or None
