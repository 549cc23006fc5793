"""Utilities for NexusClient."""

from nexusclient.utils.paths import get_resource_path, get_resources_dir

__all__ = ["get_resource_path", "get_resources_dir"]
