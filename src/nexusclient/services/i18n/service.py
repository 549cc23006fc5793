"""Internationalization service for NexusClient."""

import json
from pathlib import Path
from typing import Any

from nexusclient.logger import get_logger

logger = get_logger(__name__)


class I18nService:
    """
    Loads and provides localized strings from i18n.json.

    Messages are addressed by dot-path and hold one entry per language:
    {
        "assets": {
            "archive": {
                "missing_manifest": { "en": "Mod is missing ...", "nl": "..." }
            }
        }
    }
    """

    def __init__(self, i18n_file: Path) -> None:
        """
        Initialize I18n service.

        Args:
            i18n_file: Path to i18n.json file
        """
        self.i18n_file = i18n_file
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load i18n data from file."""
        try:
            if self.i18n_file.exists():
                with open(self.i18n_file, encoding="utf-8") as f:
                    self._data = json.load(f)
                logger.debug(f"Loaded i18n data from {self.i18n_file}")
            else:
                logger.warning(f"I18n file not found: {self.i18n_file}")
                self._data = {}
        except Exception as e:
            logger.error(f"Failed to load i18n file: {e}")
            self._data = {}

    def _lookup(self, key: str, lang: str) -> str | None:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        if isinstance(node, dict):
            text = node.get(lang)
            return text if isinstance(text, str) else None
        return None

    def translate(self, key: str, lang: str = "en", default: str | None = None, **params: object) -> str | None:
        """
        Translate a dot-path key and format it with the given parameters.

        Args:
            key: Dot-path of the message (e.g., "game.not_installed")
            lang: Language code
            default: Returned when the key is unknown
            **params: Values substituted into the message

        Returns:
            Localized text, English fallback, or default
        """
        text = self._lookup(key, lang)
        if text is None and lang != "en":
            text = self._lookup(key, "en")
        if text is None:
            return default

        try:
            return text.format(**params)
        except (KeyError, IndexError):
            # Missing parameters; return the unformatted template
            return text

    def reload(self) -> None:
        """Reload i18n data from file."""
        self._load()
