"""Mod archive reader and extractor.

A mod archive is a ZIP file whose first entry names the main folder. The main folder
holds mod.json and every file of the mod; anything outside of it is ignored.
"""

import io
import json
import shutil
import zipfile
from pathlib import Path, PurePosixPath
from types import TracebackType

from pydantic import ValidationError as PydanticValidationError

from nexusclient.exceptions import InvalidArchiveError, MissingManifestError
from nexusclient.logger import get_logger
from nexusclient.models.asset import MOD_MANIFEST_NAME, ModInformation

logger = get_logger(__name__)


def _normalize(name: str) -> str:
    """Use forward slashes regardless of the tool that built the archive."""
    return name.replace("\\", "/")


class ModArchive:
    """In-memory mod archive."""

    def __init__(self, data: bytes) -> None:
        """
        Open an archive from its raw bytes.

        Args:
            data: ZIP file content

        Raises:
            InvalidArchiveError: If data is not a ZIP file or holds no entries
        """
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(data), "r")
        except zipfile.BadZipFile as e:
            raise InvalidArchiveError(reason=str(e)) from e

        self._entries = self._zip.infolist()
        if not self._entries:
            self._zip.close()
            raise InvalidArchiveError("assets.archive.empty")

        self.main_folder = self._compute_main_folder()

    def __enter__(self) -> "ModArchive":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _compute_main_folder(self) -> str:
        """Name of the first entry, with a trailing slash.

        Archives that start with a file rather than a directory marker use the
        folder containing that file ("" for files at the archive root).
        """
        first = _normalize(self._entries[0].filename)
        if first.endswith("/"):
            return first
        parent = PurePosixPath(first).parent.as_posix()
        return "" if parent == "." else f"{parent}/"

    @property
    def manifest_name(self) -> str:
        return f"{self.main_folder}{MOD_MANIFEST_NAME}"

    def read_manifest(self) -> ModInformation:
        """
        Read mod.json from the main folder.

        Raises:
            MissingManifestError: If the main folder has no mod.json
            InvalidArchiveError: If mod.json is not a valid manifest
        """
        entry = next((e for e in self._entries if _normalize(e.filename) == self.manifest_name), None)
        if entry is None:
            raise MissingManifestError(path=self.manifest_name)

        try:
            data = json.loads(self._zip.read(entry).decode("utf-8-sig"))
            return ModInformation.model_validate(data)
        except (UnicodeDecodeError, json.JSONDecodeError, PydanticValidationError) as e:
            raise InvalidArchiveError("assets.archive.invalid_manifest", error=str(e)) from e

    def extract_to(self, target_dir: Path) -> int:
        """
        Extract every entry of the main folder into target_dir, stripping the main folder prefix.

        Entries with an empty leaf name are directory markers; all others are files.

        Args:
            target_dir: Destination directory (created if missing)

        Returns:
            Number of files written

        Raises:
            InvalidArchiveError: If an entry would be written outside target_dir
        """
        target_dir.mkdir(parents=True, exist_ok=True)
        files_written = 0

        for entry in self._entries:
            name = _normalize(entry.filename)
            if not name.startswith(self.main_folder):
                continue

            relative = name[len(self.main_folder) :]
            if not relative:
                continue

            pure = PurePosixPath(relative)
            if pure.is_absolute() or ".." in pure.parts:
                raise InvalidArchiveError("assets.archive.unsafe_entry", entry=entry.filename)

            path = target_dir.joinpath(*pure.parts)
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue

            path.parent.mkdir(parents=True, exist_ok=True)
            with self._zip.open(entry, "r") as source, open(path, "wb") as out_file:
                shutil.copyfileobj(source, out_file)
            files_written += 1

        logger.debug(f"Extracted {files_written} files from {self.main_folder or '<root>'} to {target_dir}")
        return files_written

    def close(self) -> None:
        """Close the archive."""
        self._zip.close()
