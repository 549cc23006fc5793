import io
import json
import zipfile
from pathlib import Path

import pytest

from nexusclient.models.app_config import GameConfig
from nexusclient.models.asset import ModAsset
from nexusclient.services.game import GameInstallation


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """A directory that looks like a Parkitect installation."""
    path = tmp_path / "Parkitect"
    path.mkdir()
    (path / "Parkitect.exe").write_bytes(b"MZ")
    return path


@pytest.fixture
def game(game_dir: Path) -> GameInstallation:
    return GameInstallation(GameConfig(installation_path=game_dir))


def make_mod_zip(
    main_folder: str = "foo/",
    manifest: dict | None = None,
    files: dict[str, bytes] | None = None,
    with_directory_entries: bool = True,
) -> bytes:
    """Build an in-memory mod archive. File names are relative to main_folder."""
    bio = io.BytesIO()
    with zipfile.ZipFile(bio, "w") as zf:
        if with_directory_entries and main_folder:
            zf.writestr(main_folder, b"")
        if manifest is not None:
            zf.writestr(f"{main_folder}mod.json", json.dumps(manifest))
        for name, content in (files or {}).items():
            zf.writestr(f"{main_folder}{name}", content)
    return bio.getvalue()


def install_mod(game: GameInstallation, folder: str, files: dict[str, bytes] | None = None, **manifest: object) -> ModAsset:
    """Write an installed mod directly into the game's mods directory."""
    assert game.mods_path is not None
    mod_dir = game.mods_path / folder
    mod_dir.mkdir(parents=True)
    (mod_dir / "mod.json").write_text(json.dumps(manifest), encoding="utf-8")
    for name, content in (files or {}).items():
        path = mod_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return ModAsset.load(mod_dir)
