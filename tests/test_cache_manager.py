from datetime import datetime
from pathlib import Path

import pytest

from nexusclient.models.asset import AssetType
from nexusclient.models.updates import UpdateCacheRecord
from nexusclient.services.cache import CacheManager


def test_missing_item_returns_none(tmp_path: Path) -> None:
    cache = CacheManager(tmp_path / "cache")

    assert cache.get_item("updates_check", UpdateCacheRecord) is None


def test_set_then_get(tmp_path: Path) -> None:
    cache = CacheManager(tmp_path / "cache")
    record = UpdateCacheRecord.from_updates([(AssetType.MOD, "a@foo", "2.0")], datetime(2024, 5, 1, 12, 30))

    cache.set_item("updates_check", record)

    assert cache.get_item("updates_check", UpdateCacheRecord) == record
    assert (tmp_path / "cache" / "updates_check.json").exists()
    assert not (tmp_path / "cache" / "updates_check.json.tmp").exists()


def test_set_replaces_previous_value(tmp_path: Path) -> None:
    cache = CacheManager(tmp_path)
    cache.set_item("updates_check", UpdateCacheRecord.from_updates([(AssetType.MOD, "a", "1")], datetime.now()))

    cache.set_item("updates_check", UpdateCacheRecord(checked_date=datetime(2024, 1, 1)))

    record = cache.get_item("updates_check", UpdateCacheRecord)
    assert record is not None
    assert record.updates == []
    assert record.checked_date == datetime(2024, 1, 1)


def test_corrupt_item_is_ignored(tmp_path: Path) -> None:
    cache = CacheManager(tmp_path)
    (tmp_path / "updates_check.json").write_text("{not json", encoding="utf-8")

    assert cache.get_item("updates_check", UpdateCacheRecord) is None


def test_item_with_wrong_shape_is_ignored(tmp_path: Path) -> None:
    cache = CacheManager(tmp_path)
    (tmp_path / "updates_check.json").write_text('{"updates": "nope"}', encoding="utf-8")

    assert cache.get_item("updates_check", UpdateCacheRecord) is None


@pytest.mark.parametrize("key", ["", "../escape", "a/b", "with space"])
def test_invalid_keys_are_rejected(tmp_path: Path, key: str) -> None:
    cache = CacheManager(tmp_path)

    with pytest.raises(ValueError):
        cache.get_item(key, UpdateCacheRecord)
