"""
Asset updates manager.

Tracks which installed assets have a newer version online. A full check queries the
remote repository for every tracked mod and persists the result; all other reads are
answered from memory, lazily loaded from the persisted record, so a consumer never waits
on the network unless it asks for an online answer explicitly.
"""

import asyncio
import threading
from collections.abc import Callable
from datetime import datetime, timedelta

from nexusclient.logger import get_logger
from nexusclient.models.app_config import AppConfig
from nexusclient.models.asset import (
    Asset,
    AssetType,
    BlueprintAsset,
    ModAsset,
    SavegameAsset,
    unsupported_asset_type,
)
from nexusclient.models.updates import UpdateCacheRecord, UpdateCheckResult
from nexusclient.services.cache import CacheManager
from nexusclient.services.game import GameInstallation

from .remote import GitHubRemoteAssetRepository, RemoteAssetRepository

logger = get_logger(__name__)

UPDATES_CACHE_KEY = "updates_check"
DEFAULT_CHECK_INTERVAL = timedelta(hours=1)

AssetKey = tuple[AssetType, str]
UpdateFoundCallback = Callable[[Asset, str], None]


class AssetUpdatesManager:
    """
    Owns the in-memory view of available updates and the persisted update cache record.

    Create one instance per process and hand it to every consumer. All state transitions
    happen under a single re-entrant lock; remote queries run outside of it.
    """

    def __init__(
        self,
        remote: RemoteAssetRepository,
        game: GameInstallation,
        cache: CacheManager,
        check_interval: timedelta = DEFAULT_CHECK_INTERVAL,
    ) -> None:
        """
        Initialize the manager.

        Args:
            remote: Remote repository answering latest-version queries
            game: Installation whose assets are tracked
            cache: Cache holding the persisted update record
            check_interval: Age after which the persisted record is considered stale
        """
        self.remote = remote
        self.game = game
        self.cache = cache
        self.check_interval = check_interval

        self._lock = threading.RLock()
        self._updates_available: dict[AssetKey, tuple[Asset, str]] = {}
        self._has_checked = False
        self._is_checking = False
        self._subscribers: list[UpdateFoundCallback] = []

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        game: GameInstallation,
        remote: RemoteAssetRepository | None = None,
    ) -> "AssetUpdatesManager":
        """Build a manager backed by the configured cache directory and GitHub releases."""
        assert config.paths.cache_dir is not None
        return cls(
            remote=remote or GitHubRemoteAssetRepository(config.updates),
            game=game,
            cache=CacheManager(config.paths.cache_dir),
            check_interval=timedelta(minutes=config.updates.check_interval_minutes),
        )

    @property
    def has_checked(self) -> bool:
        with self._lock:
            return self._has_checked

    @property
    def is_checking(self) -> bool:
        with self._lock:
            return self._is_checking

    @property
    def updates_available(self) -> list[tuple[Asset, str]]:
        """Snapshot of (asset, latest tag) pairs currently known to be updatable."""
        with self._lock:
            return list(self._updates_available.values())

    def should_check_for_updates(self) -> bool:
        """
        Determine whether a full remote check is due.

        Returns:
            True if no record was ever persisted or it is older than the check interval,
            False while a check is running, otherwise whether nothing has been loaded yet
        """
        record = self.cache.get_item(UPDATES_CACHE_KEY, UpdateCacheRecord)
        if record is None or datetime.now() - record.checked_date > self.check_interval:
            return True

        with self._lock:
            if self._is_checking:
                return False

            self._read_from_cache(record)
            return not self._has_checked

    async def check_for_updates(self) -> UpdateCheckResult:
        """
        Query the remote repository for every tracked mod and persist the result.

        Development mods and mods without a repository are skipped. A failing query is
        logged and recorded in the result; the scan continues with the next mod. If the
        installed mods cannot be listed, the error is logged and recorded instead. Either
        way whatever was collected is persisted and has_checked becomes True.

        Returns:
            Number of mods with a newer version, the ids of mods that could not be checked
            and the listing error, if any
        """
        with self._lock:
            self._is_checking = True

        try:
            updates: dict[AssetKey, tuple[Asset, str]] = {}
            failed: list[str] = []
            error: str | None = None

            try:
                mods = await asyncio.to_thread(self.game.get_assets, AssetType.MOD)
            except Exception as e:
                logger.error(f"Could not list installed mods: {e}")
                error = str(e) or type(e).__name__
                mods = []

            for mod in mods:
                if not isinstance(mod, ModAsset) or not mod.repository or mod.is_development:
                    continue

                try:
                    latest_tag = await self.remote.get_latest_mod_tag(mod)
                except Exception as e:
                    logger.warning(f"Update check failed for {mod.id}: {e}")
                    failed.append(mod.id)
                    continue

                if latest_tag is not None and latest_tag != mod.tag:
                    logger.info(f"Update available for {mod.id}: {mod.tag} -> {latest_tag}")
                    updates[mod.key] = (mod, latest_tag)

            checked_date = datetime.now()
            record = UpdateCacheRecord.from_updates(
                ((asset.type, asset.id, tag) for asset, tag in updates.values()), checked_date
            )
            await asyncio.to_thread(self.cache.set_item, UPDATES_CACHE_KEY, record)

            with self._lock:
                previous = self._updates_available
                self._updates_available = updates
                self._has_checked = True

                for key, (asset, tag) in updates.items():
                    if key not in previous or previous[key][1] != tag:
                        self._notify(asset, tag)
        finally:
            with self._lock:
                self._is_checking = False

        logger.info(f"Update check completed: {len(updates)} available, {len(failed)} failed")
        return UpdateCheckResult(count=len(updates), failed=failed, error=error, checked_date=checked_date)

    async def is_update_available_online(self, asset: Asset) -> bool:
        """
        Ask the remote repository whether a newer version of the asset exists, bypassing the cache.

        Raises:
            InvalidAssetTypeError: If the asset type is not supported
            RemoteQueryFailedError: If the remote could not be queried
        """
        match asset:
            case BlueprintAsset() | SavegameAsset():
                return False
            case ModAsset():
                latest_tag = await self.remote.get_latest_mod_tag(asset)
                return latest_tag is not None and latest_tag != asset.tag
            case _:
                unsupported_asset_type(asset)

    def is_update_available_in_memory(self, asset: Asset) -> bool:
        """
        Answer from the in-memory view without contacting the remote.

        Returns:
            False for assets that are not tracked or when no check has been loaded yet

        Raises:
            InvalidAssetTypeError: If the asset type is not supported
        """
        self._read_from_cache()

        match asset:
            case BlueprintAsset() | SavegameAsset():
                return False
            case ModAsset():
                with self._lock:
                    return self._has_checked and asset.key in self._updates_available
            case _:
                unsupported_asset_type(asset)

    async def get_latest_version_name(self, asset: Asset) -> str | None:
        """
        Get the name of the latest known version of an asset.

        Falls through to a live remote query only when no check has ever been loaded.

        Raises:
            InvalidAssetTypeError: If the asset type is not supported
            RemoteQueryFailedError: If a live query was needed and failed
        """
        self._read_from_cache()

        match asset:
            case BlueprintAsset() | SavegameAsset():
                return None
            case ModAsset():
                with self._lock:
                    has_checked = self._has_checked
                    known = self._updates_available.get(asset.key)

                if not has_checked:
                    return await self.remote.get_latest_mod_tag(asset)
                return known[1] if known is not None else asset.tag
            case _:
                unsupported_asset_type(asset)

    def subscribe(self, callback: UpdateFoundCallback) -> Callable[[], None]:
        """
        Subscribe to update-found notifications.

        Updates that are already known are replayed to the new subscriber before this
        returns; afterwards it receives every newly discovered update.

        Args:
            callback: Called with (asset, latest tag)

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            if self._has_checked:
                for asset, tag in list(self._updates_available.values()):
                    self._invoke(callback, asset, tag)
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, asset: Asset, tag: str) -> None:
        for callback in list(self._subscribers):
            self._invoke(callback, asset, tag)

    @staticmethod
    def _invoke(callback: UpdateFoundCallback, asset: Asset, tag: str) -> None:
        try:
            callback(asset, tag)
        except Exception as e:
            logger.error(f"Update subscriber failed for {asset.id}: {e}")

    def _read_from_cache(self, record: UpdateCacheRecord | None = None) -> None:
        """Populate the in-memory view from the persisted record, once."""
        with self._lock:
            if self._has_checked:
                return

            if record is None:
                record = self.cache.get_item(UPDATES_CACHE_KEY, UpdateCacheRecord)
            if record is None:
                return

            self._updates_available = self._resolve_record(record)
            self._has_checked = True
            logger.debug(f"Loaded {len(self._updates_available)} cached updates from {record.checked_date}")

            for asset, tag in self._updates_available.values():
                self._notify(asset, tag)

    def _resolve_record(self, record: UpdateCacheRecord) -> dict[AssetKey, tuple[Asset, str]]:
        """Map cached entries back to installed assets; entries no longer installed are dropped."""
        installed: dict[AssetType, dict[str, Asset]] = {}
        result: dict[AssetKey, tuple[Asset, str]] = {}

        for info in record.updates:
            if info.type not in installed:
                installed[info.type] = {a.id: a for a in self.game.get_assets(info.type)}
            asset = installed[info.type].get(info.id)
            if asset is not None:
                result[asset.key] = (asset, info.tag)

        return result
