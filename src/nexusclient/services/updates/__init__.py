"""Update tracking services."""

from .manager import UPDATES_CACHE_KEY, AssetUpdatesManager
from .remote import GitHubRemoteAssetRepository, RemoteAssetRepository

__all__ = [
    "UPDATES_CACHE_KEY",
    "AssetUpdatesManager",
    "GitHubRemoteAssetRepository",
    "RemoteAssetRepository",
]
