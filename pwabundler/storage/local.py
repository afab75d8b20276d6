# pwabundler/storage/local.py
from __future__ import annotations
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from pwabundler.core.errors import StorageError, StorageFileExistsError, StorageFileNotFoundError, StoragePathError
from .base import PublicFilesystem, normalizeStoragePath

logger = logging.getLogger(__name__)

__all__ = ["LocalFilesystem"]



class LocalFilesystem(PublicFilesystem):
    """Public storage backed by a directory on the local disk (e.g. the web server's document root)."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        """
        Returns the absolute location for storage `path`, rejecting traversal and symlink escapes.
        """
        rel = normalizeStoragePath(path)
        rootResolved = self.root.resolve(strict=False)
        resolved = (rootResolved / rel).resolve(strict=False)
        if not resolved.is_relative_to(rootResolved):
            raise StoragePathError(f"Storage path '{path}' points outside of the storage root", path=path)
        return resolved

    def createDirectory(self, path: str) -> None:
        target = self._resolve(path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise StorageError(f"Cannot create directory '{path}': {err}", path=path) from err

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        if not target.is_file():
            raise StorageFileNotFoundError(f"File not found at path: {path}", path=path)
        try:
            target.unlink()
        except FileNotFoundError as err:
            raise StorageFileNotFoundError(f"File not found at path: {path}", path=path) from err
        except OSError as err:
            raise StorageError(f"Cannot delete '{path}': {err}", path=path) from err
        logger.debug("Deleted '%s'", path)

    def writeStream(self, path: str, stream: BinaryIO) -> None:
        target = self._resolve(path)
        if target.exists():
            raise StorageFileExistsError(f"File already exists at path: {path}", path=path)

        tmpName: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # Write next to the target then rename, so readers never see a half-written file
            with tempfile.NamedTemporaryFile("wb", dir=target.parent, prefix=".tmp-", delete=False) as tmp:
                tmpName = tmp.name
                shutil.copyfileobj(stream, tmp)
            os.replace(tmpName, target)
            tmpName = None
        except OSError as err:
            raise StorageError(f"Cannot write '{path}': {err}", path=path) from err
        finally:
            if tmpName is not None:
                Path(tmpName).unlink(missing_ok=True)
        logger.debug("Wrote '%s'", path)

    def has(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def readStream(self, path: str) -> BinaryIO:
        target = self._resolve(path)
        if not target.is_file():
            raise StorageFileNotFoundError(f"File not found at path: {path}", path=path)
        try:
            return target.open("rb")
        except OSError as err:
            raise StorageError(f"Cannot read '{path}': {err}", path=path) from err

    def localPath(self, path: str) -> Path:
        """Absolute on-disk location of a stored file; lets HTTP handlers serve it directly."""
        target = self._resolve(path)
        if not target.is_file():
            raise StorageFileNotFoundError(f"File not found at path: {path}", path=path)
        return target

    def listContents(self, directory: str = "") -> list[str]:
        base = self._resolve(directory) if directory else self.root.resolve(strict=False)
        if not base.is_dir():
            return []
        rootResolved = self.root.resolve(strict=False)
        return sorted(
            entry.relative_to(rootResolved).as_posix()
            for entry in base.iterdir()
            if entry.is_file() and not entry.name.startswith(".tmp-")
        )
