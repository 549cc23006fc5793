"""
Asset store service.

Commits downloaded artifacts to the game directory:
- Blueprints and savegames are plain files, deduplicated by content digest and
  disambiguated as "name (2).ext", "name (3).ext", ... when names collide.
- Mods are ZIP archives, extracted into a staging directory and swapped into
  place so an old version and a new version never share a directory.
"""

import asyncio
import os
import re
import shutil
import uuid
import weakref
from pathlib import Path

from nexusclient.exceptions import ValidationError
from nexusclient.logger import get_logger
from nexusclient.models.asset import (
    AssetArtifact,
    AssetType,
    ModAsset,
    StoreResult,
    unsupported_asset_type,
)
from nexusclient.services.game import GameInstallation

from .archive import ModArchive
from .hashing import compute_digest, same_content
from .hooks import LoggingPostInstallHooks, ModPostInstallHooks

logger = get_logger(__name__)

_REPOSITORY_PART = re.compile(r"^[A-Za-z0-9_.-]+$")


def mod_folder_name(repository: str) -> str:
    """
    Folder name for a mod downloaded from the given repository ("owner/name" -> "owner@name").

    Raises:
        ValidationError: If repository is not of the form "owner/name"
    """
    parts = repository.strip("/").split("/")
    if len(parts) != 2 or any(not _REPOSITORY_PART.match(p) or p in (".", "..") for p in parts):
        raise ValidationError("assets.store.invalid_repository", repository=repository)
    return "@".join(parts)


class AssetStore:
    """Stores downloaded assets in the game's directories."""

    def __init__(self, game: GameInstallation, hooks: ModPostInstallHooks | None = None) -> None:
        """
        Initialize the asset store.

        Args:
            game: Installation the assets are stored in
            hooks: Post-install hooks for mods. Defaults to hooks that only log.
        """
        self.game = game
        self.hooks = hooks or LoggingPostInstallHooks()
        # One lock per destination so check-then-write steps never interleave; unused locks are dropped
        self._locks: weakref.WeakValueDictionary[Path, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, destination: Path) -> asyncio.Lock:
        key = destination.resolve()
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    async def store(self, artifact: AssetArtifact) -> StoreResult:
        """
        Store the specified artifact in the game's correct directory.

        Args:
            artifact: Downloaded artifact

        Returns:
            STORED when something was written, ALREADY_INSTALLED when the content was already present

        Raises:
            GameNotInstalledError: If the game installation was not detected
            InvalidAssetTypeError: If the artifact type is not supported
            InvalidArchiveError: If a mod archive is empty or malformed
            MissingManifestError: If a mod archive has no mod.json
        """
        self.game.require_installation_path()

        match artifact.type:
            case AssetType.BLUEPRINT | AssetType.SAVEGAME:
                return await self._store_file(artifact)
            case AssetType.MOD:
                return await self._store_mod(artifact)
            case _:
                unsupported_asset_type(artifact.type)

    async def _store_file(self, artifact: AssetArtifact) -> StoreResult:
        file_name = Path(artifact.file_name).name
        if not file_name:
            raise ValidationError("assets.store.invalid_file_name", file_name=artifact.file_name)

        storage_path = self.game.get_storage_path(artifact.type, create=True)
        assert storage_path is not None

        async with self._lock_for(storage_path / file_name):
            return await asyncio.to_thread(self._write_file, storage_path, file_name, artifact.data)

    def _write_file(self, storage_path: Path, file_name: str, data: bytes) -> StoreResult:
        asset_path = storage_path / file_name

        if asset_path.exists():
            digest = compute_digest(data)
            if same_content(data, asset_path, digest):
                logger.info(f"Asset already installed: {asset_path}")
                return StoreResult.ALREADY_INSTALLED

            stem = Path(file_name).stem
            suffix = Path(file_name).suffix

            # Add a number behind the name until an available file name has been found
            attempt = 1
            while True:
                attempt += 1
                asset_path = storage_path / f"{stem} ({attempt}){suffix}"
                if not asset_path.exists():
                    break
                if same_content(data, asset_path, digest):
                    logger.info(f"Asset already installed: {asset_path}")
                    return StoreResult.ALREADY_INSTALLED

        with open(asset_path, "xb") as f:
            f.write(data)

        logger.info(f"Stored asset: {asset_path}")
        return StoreResult.STORED

    async def _store_mod(self, artifact: AssetArtifact) -> StoreResult:
        download_info = artifact.download_info
        if download_info is None:
            raise ValidationError("assets.store.missing_download_info")

        mods_path = self.game.mods_path
        assert mods_path is not None
        mod_dir = mods_path / mod_folder_name(download_info.repository)

        with ModArchive(artifact.data) as archive:
            information = archive.read_manifest()

            information.tag = download_info.tag
            information.repository = download_info.repository
            information.path = str(mod_dir)
            information.is_enabled = True
            information.is_development = False
            mod = ModAsset(id=mod_dir.name, path=mod_dir, information=information)

            async with self._lock_for(mod_dir):
                old_mod = await asyncio.to_thread(self.game.find_mod_by_repository, download_info.repository)
                if old_mod is not None and (old_mod.is_development or old_mod.tag == mod.tag):
                    logger.info(
                        f"Mod already installed: {old_mod.repository}@{old_mod.tag} "
                        f"(development: {old_mod.is_development})"
                    )
                    return StoreResult.ALREADY_INSTALLED

                await asyncio.to_thread(self._install_mod, archive, mod, old_mod, mods_path)

        await self.hooks.copy_asset_bundles(mod, self.game)
        await self.hooks.compile(mod, self.game)
        return StoreResult.STORED

    def _install_mod(self, archive: ModArchive, mod: ModAsset, old_mod: ModAsset | None, mods_path: Path) -> None:
        """Extract into a staging directory, then swap it into place with atomic renames."""
        target_dir = mod.path
        if target_dir.parent.resolve() != mods_path.resolve() or target_dir.name in ("", ".", ".."):
            raise ValidationError("assets.store.invalid_repository", repository=mod.repository)

        work_id = uuid.uuid4().hex
        staging_dir = target_dir.parent / f".{target_dir.name}.incoming-{work_id}"
        displaced_dir = target_dir.parent / f".{target_dir.name}.displaced-{work_id}"

        try:
            archive.extract_to(staging_dir)
            mod.model_copy(update={"path": staging_dir}).save()

            if target_dir.exists():
                os.replace(target_dir, displaced_dir)
            os.replace(staging_dir, target_dir)
        except Exception:
            shutil.rmtree(staging_dir, ignore_errors=True)
            if displaced_dir.exists() and not target_dir.exists():
                os.replace(displaced_dir, target_dir)
            raise

        shutil.rmtree(displaced_dir, ignore_errors=True)

        # A previous version installed under another folder name
        if old_mod is not None and old_mod.path.resolve() != target_dir.resolve() and old_mod.path.exists():
            shutil.rmtree(old_mod.path)
            logger.info(f"Removed previous installation: {old_mod.path}")

        logger.info(f"Installed mod {mod.repository}@{mod.tag} to {target_dir}")
