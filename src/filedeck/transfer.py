# Transfer helpers - upload selection, transient download files, save targets.
# Created: 2026-10-12

from __future__ import annotations

import logging
import mimetypes
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

_FALLBACK_NAME = "download"


@dataclass(frozen=True)
class UploadSelection:
    """A file picked for upload, read into memory."""

    filename: str
    content: bytes
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> UploadSelection:
        """Read a local file. Raises FileNotFoundError / IsADirectoryError."""
        local = Path(path).expanduser()
        if not local.exists():
            raise FileNotFoundError(f"File not found: {local}")
        if not local.is_file():
            raise IsADirectoryError(f"Not a file: {local}")
        content_type, _ = mimetypes.guess_type(local.name)
        return cls(filename=local.name, content=local.read_bytes(), content_type=content_type)

    @property
    def size(self) -> int:
        return len(self.content)


@contextmanager
def transient_file(content: bytes, suffix: str = "") -> Iterator[Path]:
    """Hold ``content`` in a temporary file for the duration of the block.

    The file is removed on exit, whether or not the block raised.
    """
    tmp = tempfile.NamedTemporaryFile(prefix="filedeck-", suffix=suffix, delete=False)
    path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(content)
        yield path
    finally:
        path.unlink(missing_ok=True)


class SaveTarget(Protocol):
    """Where downloaded files end up ("save as")."""

    def save(self, source: Path, suggested_name: str) -> Path:
        """Persist ``source`` under (a variant of) ``suggested_name``.

        Returns:
            Final location of the saved file.
        """
        ...


def safe_filename(name: str) -> str:
    """Strip directory parts so a remote name cannot escape the target dir."""
    cleaned = name.replace("\\", "/").rsplit("/", 1)[-1].strip()
    if cleaned in ("", ".", ".."):
        return _FALLBACK_NAME
    return cleaned


class DirectorySaveTarget:
    """Saves downloads into a directory, never overwriting existing files."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory).expanduser()

    def _unique_path(self, name: str) -> Path:
        candidate = self.directory / name
        if not candidate.exists():
            return candidate
        stem, suffix = Path(name).stem, Path(name).suffix
        n = 1
        while True:
            candidate = self.directory / f"{stem} ({n}){suffix}"
            if not candidate.exists():
                return candidate
            n += 1

    def save(self, source: Path, suggested_name: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        dest = self._unique_path(safe_filename(suggested_name))
        shutil.copyfile(source, dest)
        logger.debug("Saved %s to %s", suggested_name, dest)
        return dest
