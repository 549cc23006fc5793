"""Configuration data models for NexusClient."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class PathsConfig(BaseModel):
    """Paths configuration."""

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".nexusclient")
    cache_dir: Path | None = None
    logs_dir: Path | None = None

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_data_dir(cls, v: str | Path) -> Path:
        """Expand user path for data_dir."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("cache_dir", "logs_dir", mode="before")
    @classmethod
    def expand_optional_path(cls, v: str | Path | None) -> Path | None:
        """Expand user path for optional paths."""
        if v is None:
            return None
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    def model_post_init(self, __context: object) -> None:
        """Set default subdirectories if not specified."""
        if self.cache_dir is None:
            self.cache_dir = self.data_dir / "cache"
        if self.logs_dir is None:
            self.logs_dir = self.data_dir / "logs"


class GameConfig(BaseModel):
    """Game installation configuration."""

    installation_path: Path | None = None
    # An installation directory is valid when it contains one of these
    executable_names: list[str] = Field(
        default_factory=lambda: ["Parkitect.exe", "Parkitect.x86_64", "Parkitect.x86", "Parkitect.app"]
    )
    data_folder: str = "Parkitect_Data"

    @field_validator("installation_path", mode="before")
    @classmethod
    def expand_installation_path(cls, v: str | Path | None) -> Path | None:
        """Expand user path for installation_path."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return Path(v).expanduser()
        return v


class UpdatesConfig(BaseModel):
    """Update tracking configuration."""

    check_interval_minutes: int = 60
    api_url: str = "https://api.github.com"
    request_timeout: float = 10.0  # Bounds a single remote query
    user_agent: str = "NexusClient/0.1"


class AdvancedConfig(BaseModel):
    """Advanced configuration."""

    log_level: Literal["INFO", "DEBUG", "TRACE"] = "INFO"


class AppConfig(BaseModel):
    """Application configuration."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    game: GameConfig = Field(default_factory=GameConfig)
    updates: UpdatesConfig = Field(default_factory=UpdatesConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)
