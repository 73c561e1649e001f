"""Uploaded asset domain exports."""

from .exceptions import EmptyFileError, FileTooLargeError, TooManyFilesError, UnsupportedFileTypeError
from .models import ALLOWED_MIME_TYPES, Asset, AssetStats, AssetType, AssetTypeUsage, format_size
from .repository import AssetRepository

__all__ = [
    "ALLOWED_MIME_TYPES",
    "Asset",
    "AssetRepository",
    "AssetStats",
    "AssetType",
    "AssetTypeUsage",
    "EmptyFileError",
    "FileTooLargeError",
    "TooManyFilesError",
    "UnsupportedFileTypeError",
    "format_size",
]
