import json
from pathlib import Path

from nexusclient.exceptions import (
    GameNotInstalledError,
    InvalidArchiveError,
    MissingManifestError,
    RemoteQueryFailedError,
    ValidationError,
)
from nexusclient.services.i18n.service import I18nService
from nexusclient.utils.paths import get_resources_dir


def test_translate_formats_and_falls_back_to_english():
    svc = I18nService.__new__(I18nService)
    svc._data = {"assets": {"invalid_type": {"en": "Unsupported asset type: {type}"}}}

    assert svc.translate("assets.invalid_type", lang="en", type="scenario") == "Unsupported asset type: scenario"
    assert svc.translate("assets.invalid_type", lang="nl", type="scenario") == "Unsupported asset type: scenario"


def test_translate_missing_key_returns_default():
    svc = I18nService.__new__(I18nService)
    svc._data = {}

    assert svc.translate("some.path", default="fallback") == "fallback"
    assert svc.translate("some.path") is None


def test_translate_missing_params_returns_template():
    svc = I18nService.__new__(I18nService)
    svc._data = {"a": {"b": {"en": "Hello {name}"}}}

    assert svc.translate("a.b") == "Hello {name}"


def test_missing_file_loads_empty(tmp_path: Path):
    svc = I18nService(tmp_path / "missing.json")

    assert svc.translate("game.not_installed") is None


def test_bundled_messages_have_english_and_dutch():
    with open(get_resources_dir() / "i18n.json", encoding="utf-8") as f:
        data = json.load(f)

    def leaves(node, prefix=""):
        for key, value in node.items():
            if "en" in value:
                yield f"{prefix}{key}", value
            else:
                yield from leaves(value, f"{prefix}{key}.")

    messages = dict(leaves(data))
    assert "assets.archive.missing_manifest" in messages
    for key, value in messages.items():
        assert set(value) == {"en", "nl"}, key


def test_errors_render_english_message():
    assert str(GameNotInstalledError()) == "The game installation could not be found"
    assert str(MissingManifestError(path="foo/mod.json")) == "Mod is missing its mod.json file (expected foo/mod.json)"
    assert str(InvalidArchiveError("assets.archive.empty")) == "The mod archive is empty"


def test_error_metadata():
    error = RemoteQueryFailedError(repository="a/foo", error="timeout")

    assert error.retriable is True
    assert error.status_code == 500
    assert error.i18n_key == "updates.remote.query_failed"
    assert "a/foo" in str(error)

    assert isinstance(MissingManifestError(path="x"), ValidationError)
    assert MissingManifestError(path="x").status_code == 400
