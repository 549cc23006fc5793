"""Game installation service.

Answers read-only questions about the local Parkitect installation: where it lives,
where each asset type is stored and which assets are currently installed.
"""

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from nexusclient.exceptions import GameNotInstalledError
from nexusclient.logger import get_logger
from nexusclient.models.app_config import GameConfig
from nexusclient.models.asset import (
    MOD_MANIFEST_NAME,
    Asset,
    AssetType,
    BlueprintAsset,
    ModAsset,
    SavegameAsset,
    unsupported_asset_type,
)

logger = get_logger(__name__)


class GameInstallation:
    """The Parkitect installation the client manages assets for."""

    def __init__(self, config: GameConfig) -> None:
        """
        Initialize the installation context.

        Args:
            config: Game configuration holding the installation path
        """
        self.config = config

    def is_valid_installation_path(self, path: Path | str | None) -> bool:
        """Path must exist and contain one of the game executables."""
        if path is None or not str(path).strip():
            return False
        path = Path(path)
        return path.is_dir() and any((path / name).exists() for name in self.config.executable_names)

    @property
    def installation_path(self) -> Path | None:
        """Configured installation path, or None when it is not a valid installation."""
        path = self.config.installation_path
        return path if self.is_valid_installation_path(path) else None

    @property
    def is_installed(self) -> bool:
        return self.installation_path is not None

    @property
    def data_path(self) -> Path | None:
        if self.installation_path is None:
            return None
        return self.installation_path / self.config.data_folder

    @property
    def mods_path(self) -> Path | None:
        """Path to the mods directory, created on demand."""
        if self.installation_path is None:
            return None
        path = self.installation_path / AssetType.MOD.storage_folder
        path.mkdir(parents=True, exist_ok=True)
        return path

    def set_installation_path_if_valid(self, path: Path | str) -> bool:
        """
        Set the installation path if the specified path is a valid installation path.

        Returns:
            True if valid; False otherwise
        """
        if not self.is_valid_installation_path(path):
            return False
        self.config.installation_path = Path(path)
        logger.info(f"Game installation path set to {path}")
        return True

    def require_installation_path(self) -> Path:
        """Return the installation path or raise if the game is not installed."""
        path = self.installation_path
        if path is None:
            raise GameNotInstalledError()
        return path

    def get_storage_path(self, asset_type: AssetType, create: bool = False) -> Path | None:
        """
        Get the directory where assets of the given type are stored.

        Args:
            asset_type: Asset type
            create: Create the directory if it does not exist

        Returns:
            Storage directory, or None when the game is not installed
        """
        if self.installation_path is None:
            return None
        path = self.installation_path / asset_type.storage_folder
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def installed_mods(self) -> list[ModAsset]:
        """Every directory in the mods folder with a readable mod.json."""
        mods_path = self.mods_path
        if mods_path is None:
            return []

        mods = []
        for mod_dir in sorted(mods_path.iterdir()):
            if not mod_dir.is_dir() or mod_dir.name.startswith("."):
                continue
            if not (mod_dir / MOD_MANIFEST_NAME).is_file():
                continue
            try:
                mods.append(ModAsset.load(mod_dir))
            except (OSError, ValueError, PydanticValidationError) as e:
                logger.warning(f"Skipping mod with unreadable manifest: {mod_dir}: {e}")
        return mods

    def find_mod_by_repository(self, repository: str) -> ModAsset | None:
        """Find the installed mod downloaded from the given repository."""
        for mod in self.installed_mods:
            if mod.repository == repository:
                return mod
        return None

    def get_assets(self, asset_type: AssetType) -> list[Asset]:
        """List installed assets of the given type."""
        match asset_type:
            case AssetType.MOD:
                return list(self.installed_mods)
            case AssetType.BLUEPRINT | AssetType.SAVEGAME:
                storage_path = self.get_storage_path(asset_type)
                if storage_path is None or not storage_path.is_dir():
                    return []
                model = BlueprintAsset if asset_type is AssetType.BLUEPRINT else SavegameAsset
                return [model(id=p.name, path=p) for p in sorted(storage_path.iterdir()) if p.is_file()]
            case _:
                unsupported_asset_type(asset_type)

    def find_asset(self, asset_type: AssetType, asset_id: str) -> Asset | None:
        """Find an installed asset by its identity."""
        for asset in self.get_assets(asset_type):
            if asset.id == asset_id:
                return asset
        return None
