"""Data models for NexusClient."""

from nexusclient.models.app_config import AppConfig
from nexusclient.models.asset import (
    Asset,
    AssetArtifact,
    AssetType,
    BlueprintAsset,
    DownloadInfo,
    ModAsset,
    ModInformation,
    SavegameAsset,
    StoreResult,
)
from nexusclient.models.updates import CachedUpdateInfo, UpdateCacheRecord, UpdateCheckResult

__all__ = [
    "AppConfig",
    "Asset",
    "AssetArtifact",
    "AssetType",
    "BlueprintAsset",
    "CachedUpdateInfo",
    "DownloadInfo",
    "ModAsset",
    "ModInformation",
    "SavegameAsset",
    "StoreResult",
    "UpdateCacheRecord",
    "UpdateCheckResult",
]
