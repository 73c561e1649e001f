"""Domain models for uploaded image assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class AssetType(str, Enum):
    LOGO = "logo"
    IMAGE = "image"
    AVATAR = "avatar"


ALLOWED_MIME_TYPES = {
    "image/jpeg": {".jpg", ".jpeg"},
    "image/jpg": {".jpg", ".jpeg"},
    "image/png": {".png"},
    "image/gif": {".gif"},
    "image/svg+xml": {".svg"},
    "image/webp": {".webp"},
}


@dataclass(slots=True)
class Asset:
    id: str
    tenant_id: str
    name: str
    filename: str
    mime_type: str
    size: int
    url: str
    type: AssetType
    storage_path: str = field(repr=False)
    checksum_sha256: str = ""
    uploaded_by: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class AssetTypeUsage:
    count: int = 0
    size: int = 0


@dataclass(slots=True)
class AssetStats:
    total_assets: int
    total_size: int
    by_type: dict[str, AssetTypeUsage]
    storage_limit: Optional[int] = None


def format_size(size: int) -> str:
    """Human readable byte count, e.g. ``1.5 MB``."""
    if size <= 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB")
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"
