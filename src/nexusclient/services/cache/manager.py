"""Key-value cache persisted as one JSON file per key."""

import json
import os
import re
import threading
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from nexusclient.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class CacheManager:
    """
    Stores pydantic models under string keys in the cache directory.

    Every write replaces the whole entry atomically; readers never observe a partial file.
    """

    def __init__(self, cache_dir: Path) -> None:
        """
        Initialize the cache.

        Args:
            cache_dir: Directory holding the cache files
        """
        self.cache_dir = cache_dir
        self._lock = threading.Lock()

    def _get_item_path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid cache key: {key!r}")
        return self.cache_dir / f"{key}.json"

    def get_item(self, key: str, model: type[T]) -> T | None:
        """
        Read a cached value.

        Args:
            key: Cache key
            model: Model class to deserialize into

        Returns:
            The cached value, or None when absent or unreadable
        """
        path = self._get_item_path(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
                return model.model_validate(data)
            except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
                logger.warning(f"Ignoring unreadable cache entry {key}: {e}")
                return None

    def set_item(self, key: str, value: BaseModel) -> None:
        """
        Write a cached value, replacing any previous value.

        Args:
            key: Cache key
            value: Value to store
        """
        path = self._get_item_path(key)
        with self._lock:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(value.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        logger.debug(f"Cached {key} at {path}")

