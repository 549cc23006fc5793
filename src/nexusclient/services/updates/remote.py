"""Remote repository clients used to look up the latest published version of a mod."""

from abc import ABC, abstractmethod

import httpx

from nexusclient.exceptions import RemoteQueryFailedError
from nexusclient.logger import get_logger
from nexusclient.models.app_config import UpdatesConfig
from nexusclient.models.asset import ModAsset

logger = get_logger(__name__)


class RemoteAssetRepository(ABC):
    """Source of truth for published mod versions."""

    @abstractmethod
    async def get_latest_mod_tag(self, mod: ModAsset) -> str | None:
        """
        Get the tag of the latest published version of a mod.

        Args:
            mod: Installed mod; its repository identifies it remotely

        Returns:
            Latest tag, or None when no version is known

        Raises:
            RemoteQueryFailedError: If the remote could not be reached or answered with an error
        """


class GitHubRemoteAssetRepository(RemoteAssetRepository):
    """Looks up the latest GitHub release of "owner/name" repositories."""

    def __init__(self, config: UpdatesConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """
        Initialize the client.

        Args:
            config: Update configuration (API URL, timeout, user agent)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.api_url,
            timeout=self.config.request_timeout,
            follow_redirects=True,
            transport=self._transport,
            headers={
                "Accept": "application/vnd.github+json",
                "User-Agent": self.config.user_agent,
            },
        )

    async def get_latest_mod_tag(self, mod: ModAsset) -> str | None:
        repository = mod.repository
        if not repository:
            return None

        async with self._client() as client:
            try:
                response = await client.get(f"/repos/{repository}/releases/latest")
                if response.status_code == 404:
                    logger.debug(f"No releases published for {repository}")
                    return None
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                raise RemoteQueryFailedError(repository=repository, error=str(e)) from e

        tag = data.get("tag_name") if isinstance(data, dict) else None
        return tag or None
