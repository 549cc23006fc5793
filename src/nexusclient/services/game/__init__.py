"""Game installation services."""

from .installation import GameInstallation

__all__ = ["GameInstallation"]
