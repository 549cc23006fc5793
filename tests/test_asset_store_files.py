import asyncio
from pathlib import Path

import pytest

from nexusclient.exceptions import GameNotInstalledError, InvalidAssetTypeError, ValidationError
from nexusclient.models.app_config import GameConfig
from nexusclient.models.asset import AssetArtifact, AssetType, StoreResult
from nexusclient.services.assets import AssetStore
from nexusclient.services.game import GameInstallation


def _blueprint(name: str, data: bytes) -> AssetArtifact:
    return AssetArtifact(type=AssetType.BLUEPRINT, file_name=name, data=data)


@pytest.mark.asyncio
async def test_store_blueprint_writes_to_storage_folder(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)

    result = await store.store(_blueprint("Coaster.png", b"png-data"))

    assert result == StoreResult.STORED
    assert (game_dir / "Saves" / "Blueprints" / "Coaster.png").read_bytes() == b"png-data"


@pytest.mark.asyncio
async def test_store_savegame_uses_savegame_folder(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)

    await store.store(AssetArtifact(type=AssetType.SAVEGAME, file_name="Park.txt", data=b"park"))

    assert (game_dir / "Saves" / "Savegame" / "Park.txt").read_bytes() == b"park"


@pytest.mark.asyncio
async def test_storing_same_content_twice_is_a_noop(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)

    first = await store.store(_blueprint("Coaster.png", b"png-data"))
    second = await store.store(_blueprint("Coaster.png", b"png-data"))

    assert first == StoreResult.STORED
    assert second == StoreResult.ALREADY_INSTALLED
    assert [p.name for p in (game_dir / "Saves" / "Blueprints").iterdir()] == ["Coaster.png"]


@pytest.mark.asyncio
async def test_different_content_with_same_name_is_disambiguated(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)
    folder = game_dir / "Saves" / "Blueprints"

    await store.store(_blueprint("Coaster.png", b"one"))
    await store.store(_blueprint("Coaster.png", b"two"))
    await store.store(_blueprint("Coaster.png", b"three"))

    assert (folder / "Coaster.png").read_bytes() == b"one"
    assert (folder / "Coaster (2).png").read_bytes() == b"two"
    assert (folder / "Coaster (3).png").read_bytes() == b"three"


@pytest.mark.asyncio
async def test_content_matching_a_numbered_copy_is_a_noop(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)
    folder = game_dir / "Saves" / "Blueprints"

    await store.store(_blueprint("Coaster.png", b"one"))
    await store.store(_blueprint("Coaster.png", b"two"))
    result = await store.store(_blueprint("Coaster.png", b"two"))

    assert result == StoreResult.ALREADY_INSTALLED
    assert sorted(p.name for p in folder.iterdir()) == ["Coaster (2).png", "Coaster.png"]


@pytest.mark.asyncio
async def test_same_size_different_content_is_not_a_duplicate(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)

    await store.store(_blueprint("Coaster.png", b"aaaa"))
    result = await store.store(_blueprint("Coaster.png", b"bbbb"))

    assert result == StoreResult.STORED
    assert (game_dir / "Saves" / "Blueprints" / "Coaster (2).png").read_bytes() == b"bbbb"


@pytest.mark.asyncio
async def test_concurrent_stores_do_not_overwrite_each_other(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)
    contents = [f"content-{i}".encode() for i in range(5)]

    results = await asyncio.gather(*(store.store(_blueprint("Coaster.png", c)) for c in contents))

    assert all(r == StoreResult.STORED for r in results)
    stored = sorted(p.read_bytes() for p in (game_dir / "Saves" / "Blueprints").iterdir())
    assert stored == sorted(contents)


@pytest.mark.asyncio
async def test_file_name_cannot_escape_storage_folder(game: GameInstallation, game_dir: Path) -> None:
    store = AssetStore(game)

    await store.store(_blueprint("../../Coaster.png", b"png-data"))

    assert (game_dir / "Saves" / "Blueprints" / "Coaster.png").exists()
    assert not (game_dir.parent / "Coaster.png").exists()


@pytest.mark.asyncio
async def test_empty_file_name_is_rejected(game: GameInstallation) -> None:
    store = AssetStore(game)

    with pytest.raises(ValidationError):
        await store.store(_blueprint("", b"png-data"))


@pytest.mark.asyncio
async def test_store_requires_game_installation(tmp_path: Path) -> None:
    store = AssetStore(GameInstallation(GameConfig(installation_path=tmp_path)))

    with pytest.raises(GameNotInstalledError):
        await store.store(_blueprint("Coaster.png", b"png-data"))


@pytest.mark.asyncio
async def test_unknown_artifact_type_is_rejected(game: GameInstallation) -> None:
    store = AssetStore(game)
    artifact = AssetArtifact.model_construct(type="scenario", file_name="x.txt", data=b"x", download_info=None)

    with pytest.raises(InvalidAssetTypeError):
        await store.store(artifact)


@pytest.mark.asyncio
async def test_destination_locks_are_released_after_store(game: GameInstallation) -> None:
    store = AssetStore(game)

    for i in range(3):
        await store.store(_blueprint(f"Coaster{i}.png", b"png-data"))

    assert len(store._locks) == 0
