"""Asset related models."""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Never, NoReturn

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from nexusclient.exceptions import InvalidAssetTypeError

MOD_MANIFEST_NAME = "mod.json"


class AssetType(str, Enum):
    """Installable asset variants."""

    BLUEPRINT = "blueprint"
    SAVEGAME = "savegame"
    MOD = "mod"

    @property
    def storage_folder(self) -> str:
        """Folder, relative to the installation path, holding assets of this type."""
        return _STORAGE_FOLDERS[self]


_STORAGE_FOLDERS: dict[AssetType, str] = {
    AssetType.BLUEPRINT: "Saves/Blueprints",
    AssetType.SAVEGAME: "Saves/Savegame",
    AssetType.MOD: "mods",
}


class StoreResult(str, Enum):
    """Outcome of a successful store operation."""

    STORED = "stored"
    ALREADY_INSTALLED = "already_installed"


def unsupported_asset_type(value: Never) -> NoReturn:
    """Reject an asset variant no branch handles.

    Typed with ``Never`` so a type checker flags every ``match`` that misses a variant.
    """
    raise InvalidAssetTypeError(type=getattr(value, "type", value))


def _to_pascal(name: str) -> str:
    camel = to_camel(name)
    return camel[:1].upper() + camel[1:]


class ModInformation(BaseModel):
    """Contents of a mod's mod.json manifest."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str | None = None
    repository: str | None = None
    tag: str | None = None
    is_enabled: bool = False
    is_development: bool = False
    path: str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_key_case(cls, data: Any) -> Any:  # noqa: ANN401
        """Accept PascalCase manifests ("IsEnabled") as well as camelCase ones.

        Only known fields are renamed; unknown keys are kept exactly as written.
        """
        if isinstance(data, dict):
            pascal = {_to_pascal(name): to_camel(name) for name in cls.model_fields}
            return {pascal.get(k, k) if isinstance(k, str) else k: v for k, v in data.items()}
        return data

    def to_json(self) -> str:
        """Serialize to manifest JSON."""
        return json.dumps(self.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)


class DownloadInfo(BaseModel):
    """Remote identity of a downloaded mod version."""

    repository: str
    tag: str


class AssetArtifact(BaseModel):
    """A downloaded artifact waiting to be stored in the game directory."""

    type: AssetType
    file_name: str
    data: bytes
    download_info: DownloadInfo | None = None


class BaseAsset(BaseModel):
    """Fields shared by every installed asset."""

    id: str
    path: Path

    @property
    def key(self) -> tuple[AssetType, str]:
        """Identity of the asset: unique per (type, id)."""
        return (self.type, self.id)  # type: ignore[attr-defined]


class BlueprintAsset(BaseAsset):
    """A blueprint file."""

    type: Literal[AssetType.BLUEPRINT] = AssetType.BLUEPRINT


class SavegameAsset(BaseAsset):
    """A savegame file."""

    type: Literal[AssetType.SAVEGAME] = AssetType.SAVEGAME


class ModAsset(BaseAsset):
    """An installed mod: a directory holding files and a mod.json manifest."""

    type: Literal[AssetType.MOD] = AssetType.MOD
    information: ModInformation

    @property
    def repository(self) -> str | None:
        return self.information.repository

    @property
    def tag(self) -> str | None:
        return self.information.tag

    @property
    def is_enabled(self) -> bool:
        return self.information.is_enabled

    @property
    def is_development(self) -> bool:
        return self.information.is_development

    @property
    def manifest_path(self) -> Path:
        return self.path / MOD_MANIFEST_NAME

    @classmethod
    def load(cls, mod_dir: Path) -> "ModAsset":
        """Read the mod installed in mod_dir.

        Raises:
            OSError: If mod.json cannot be read
            pydantic.ValidationError: If mod.json is not a valid manifest
        """
        with open(mod_dir / MOD_MANIFEST_NAME, encoding="utf-8") as f:
            data = json.load(f)
        information = ModInformation.model_validate(data)
        information.path = str(mod_dir)
        return cls(id=mod_dir.name, path=mod_dir, information=information)

    def save(self) -> None:
        """Write the manifest to mod.json."""
        self.manifest_path.write_text(self.information.to_json(), encoding="utf-8")


Asset = Annotated[BlueprintAsset | SavegameAsset | ModAsset, Field(discriminator="type")]
