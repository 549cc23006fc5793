"""Post-install hooks run after a mod has been installed."""

from abc import ABC, abstractmethod

from nexusclient.logger import get_logger
from nexusclient.models.asset import ModAsset
from nexusclient.services.game import GameInstallation

logger = get_logger(__name__)


class ModPostInstallHooks(ABC):
    """Steps owned by the mod loader: asset bundle copying and compilation."""

    @abstractmethod
    async def copy_asset_bundles(self, mod: ModAsset, game: GameInstallation) -> None:
        """Copy the mod's asset bundles to where the game loads them from."""

    @abstractmethod
    async def compile(self, mod: ModAsset, game: GameInstallation) -> None:
        """Compile the mod's sources against the game's assemblies."""


class LoggingPostInstallHooks(ModPostInstallHooks):
    """Default hooks for setups without a mod loader; records the request only."""

    async def copy_asset_bundles(self, mod: ModAsset, game: GameInstallation) -> None:
        logger.info(f"Asset bundle copy requested for {mod.id} (no mod loader configured)")

    async def compile(self, mod: ModAsset, game: GameInstallation) -> None:
        logger.info(f"Compilation requested for {mod.id} (no mod loader configured)")
