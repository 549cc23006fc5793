"""Locations of files bundled with the nexusclient package."""

import sys
from pathlib import Path


def get_resources_dir() -> Path:
    """Get the directory holding bundled resources (i18n.json).

    Frozen builds unpack the package under sys._MEIPASS; otherwise the resources
    live next to the package sources.
    """
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS) / "nexusclient" / "resources"  # type: ignore[attr-defined]
    return Path(__file__).resolve().parent.parent / "resources"


def get_resource_path(name: str) -> Path:
    """Path of a single bundled resource file."""
    return get_resources_dir() / name
