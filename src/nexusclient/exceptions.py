"""Centralized exception hierarchy for NexusClient.

Supports i18n keys for user-facing messages and English for internal logging.
"""


class AppBaseError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(
        self,
        i18n_key: str,
        status_code: int = 500,
        retriable: bool = False,
        **params: object,
    ) -> None:
        """
        Initialize the error.

        Args:
            i18n_key: Dot-path in i18n.json (e.g., 'assets.store.not_installed')
            status_code: Recommended HTTP status code
            retriable: Whether the operation can be retried
            **params: Parameters for string formatting in translations
        """
        super().__init__(i18n_key)
        self.i18n_key = i18n_key
        self.status_code = status_code
        self.retriable = retriable
        self.params = params

    def __str__(self) -> str:
        """Returns the English version of the error message for logging."""
        try:
            # Lazy import to avoid circular dependencies
            from nexusclient.services.i18n import get_i18n_service

            i18n = get_i18n_service()
            translated = i18n.translate(self.i18n_key, lang="en", **self.params)
            return str(translated) if translated else self.i18n_key
        except Exception:
            params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
            return f"[{self.i18n_key}] {params_str} (retriable: {self.retriable})"


class ValidationError(AppBaseError):
    """Raised when input validation fails."""

    def __init__(self, i18n_key: str, **params: object) -> None:
        super().__init__(i18n_key, status_code=400, **params)


class OperationalError(AppBaseError):
    """Raised when an operational failure occurs (disk access, remote query, etc.)."""

    def __init__(self, i18n_key: str, retriable: bool = False, **params: object) -> None:
        super().__init__(i18n_key, status_code=500, retriable=retriable, **params)


class GameNotInstalledError(OperationalError):
    """Raised when an operation requires a detected game installation."""

    def __init__(self, **params: object) -> None:
        super().__init__("game.not_installed", **params)


class InvalidAssetTypeError(ValidationError):
    """Raised when an asset or artifact declares an unsupported variant."""

    def __init__(self, **params: object) -> None:
        super().__init__("assets.invalid_type", **params)


class InvalidArchiveError(ValidationError):
    """Raised when a mod archive is empty, unreadable or malformed."""

    def __init__(self, i18n_key: str = "assets.archive.invalid", **params: object) -> None:
        super().__init__(i18n_key, **params)


class MissingManifestError(ValidationError):
    """Raised when a mod archive has no mod.json in its main folder."""

    def __init__(self, **params: object) -> None:
        super().__init__("assets.archive.missing_manifest", **params)


class RemoteQueryFailedError(OperationalError):
    """Raised when the remote repository could not answer a version query."""

    def __init__(self, **params: object) -> None:
        super().__init__("updates.remote.query_failed", retriable=True, **params)
