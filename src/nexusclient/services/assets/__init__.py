"""Asset installation services."""

from .archive import ModArchive
from .hashing import compute_digest, same_content
from .hooks import LoggingPostInstallHooks, ModPostInstallHooks
from .store import AssetStore, mod_folder_name

__all__ = [
    "AssetStore",
    "LoggingPostInstallHooks",
    "ModArchive",
    "ModPostInstallHooks",
    "compute_digest",
    "mod_folder_name",
    "same_content",
]
