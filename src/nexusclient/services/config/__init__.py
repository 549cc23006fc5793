"""Configuration services."""

from .manager import AppConfigManager, get_config, reload_config, save_config

__all__ = [
    "AppConfigManager",
    "get_config",
    "reload_config",
    "save_config",
]
