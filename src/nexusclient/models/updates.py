"""Update tracking models."""

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, Field

from nexusclient.models.asset import AssetType


class CachedUpdateInfo(BaseModel):
    """A single available update as persisted in the cache."""

    type: AssetType
    id: str
    tag: str


class UpdateCacheRecord(BaseModel):
    """
    Snapshot of the last full remote reconciliation.

    checked_date is the moment the scan completed, never the moment the record was read back.
    """

    checked_date: datetime
    updates: list[CachedUpdateInfo] = Field(default_factory=list)

    @classmethod
    def from_updates(
        cls, updates: Iterable[tuple[AssetType, str, str]], checked_date: datetime
    ) -> "UpdateCacheRecord":
        """Build a record from (type, id, latest tag) triples."""
        return cls(
            checked_date=checked_date,
            updates=[CachedUpdateInfo(type=t, id=asset_id, tag=tag) for t, asset_id, tag in updates],
        )


class UpdateCheckResult(BaseModel):
    """
    Result of a bulk update scan.

    Partial when some assets could not be queried (failed) or the installed assets
    could not be listed at all (error).
    """

    count: int = 0
    failed: list[str] = Field(default_factory=list)
    error: str | None = None
    checked_date: datetime

    @property
    def is_partial(self) -> bool:
        return bool(self.failed) or self.error is not None
