"""Configuration management for NexusClient."""

import os
import sys
from pathlib import Path
from typing import Any

import yaml

from nexusclient.models.app_config import AppConfig


class AppConfigManager:
    """Manages application configuration with YAML file and environment variable support."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. If None, uses NEXUS_CONFIG_PATH
                        environment variable or defaults to platform-specific config directory
        """
        if config_path is None:
            env_path = os.getenv("NEXUS_CONFIG_PATH")
            if env_path:
                config_path = Path(env_path).expanduser()
            else:
                if sys.platform == "win32":
                    # Windows: %APPDATA%\NexusClient
                    config_dir = Path(os.getenv("APPDATA", str(Path.home()))) / "NexusClient"
                elif sys.platform == "darwin":
                    # macOS: ~/Library/Application Support/NexusClient
                    config_dir = Path.home() / "Library" / "Application Support" / "NexusClient"
                else:
                    # Linux/Unix: ~/.config/nexusclient
                    config_dir = Path.home() / ".config" / "nexusclient"

                config_path = config_dir / "config.yaml"

        self.config_path = config_path
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """Load configuration from file and apply environment variable overrides.

        Returns:
            Loaded configuration
        """
        config_data: dict[str, Any] = {}

        # 1. Load from YAML file if it exists
        if self.config_path.exists():
            with open(self.config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}

        # 2. Create config object (applies defaults)
        config = AppConfig(**config_data)

        # 3. Apply environment variable overrides
        return self._apply_env_overrides(config)

    def save(self, config: AppConfig) -> None:
        """Save configuration to YAML file.

        Args:
            config: Configuration to save
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        # mode="json" turns Path objects into strings
        config_dict = config.model_dump(mode="json", exclude_none=True)

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _apply_env_overrides(self, config: AppConfig) -> AppConfig:
        """Apply environment variable overrides.

        Environment variables use the format: NEXUS_<SECTION>_<KEY>
        Examples:
            - NEXUS_GAME_PATH=~/Games/Parkitect
            - NEXUS_DATA_DIR=~/custom/path

        Args:
            config: Base configuration

        Returns:
            Configuration with environment overrides applied
        """
        if data_dir := os.getenv("NEXUS_DATA_DIR"):
            config.paths.data_dir = Path(data_dir).expanduser()
            # Recalculate dependent paths
            config.paths.cache_dir = None
            config.paths.logs_dir = None
            config.paths.model_post_init(None)

        if game_path := os.getenv("NEXUS_GAME_PATH"):
            config.game.installation_path = Path(game_path).expanduser()

        if interval := os.getenv("NEXUS_UPDATES_CHECK_INTERVAL_MINUTES"):
            config.updates.check_interval_minutes = int(interval)

        if level := os.getenv("NEXUS_LOG_LEVEL"):
            if level.upper() in ("INFO", "DEBUG", "TRACE"):
                config.advanced.log_level = level.upper()  # type: ignore

        return config

    def get_config(self) -> AppConfig:
        """Get configuration (singleton pattern).

        Returns:
            Current configuration
        """
        if self._config is None:
            self._config = self.load()
        return self._config

    def reload(self) -> AppConfig:
        """Reload configuration from file.

        Returns:
            Reloaded configuration
        """
        self._config = self.load()
        return self._config


# Global configuration manager instance
_config_manager = AppConfigManager()


def get_config() -> AppConfig:
    """Get global application configuration.

    Returns:
        Application configuration
    """
    return _config_manager.get_config()


def reload_config() -> AppConfig:
    """Reload configuration from file.

    Returns:
        Reloaded configuration
    """
    return _config_manager.reload()


def save_config(config: AppConfig) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save
    """
    _config_manager.save(config)
    _config_manager._config = config
