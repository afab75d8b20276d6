# pwabundler/storage/base.py
from __future__ import annotations
import posixpath
from abc import ABC, abstractmethod
from typing import BinaryIO

from pwabundler.core.errors import StoragePathError

__all__ = ["PublicFilesystem", "normalizeStoragePath"]



def normalizeStoragePath(path: str) -> str:
    """
    Normalizes a storage path to "dir/sub/file" form.
    Rejects empty paths and anything that climbs above the storage root.
    """
    raw = str(path).replace("\\", "/").strip()
    normalized = posixpath.normpath("/" + raw).lstrip("/")
    if not normalized or normalized == ".":
        raise StoragePathError(f"Empty storage path '{path}'", path=str(path))
    if any(part == ".." for part in raw.split("/")):
        raise StoragePathError(f"Storage path '{path}' points outside of the storage root", path=str(path))
    return normalized



class PublicFilesystem(ABC):
    """
    Publicly served file storage. Paths are "/"-separated and relative to the storage root.

    delete() raises StorageFileNotFoundError when nothing is stored at `path`;
    writeStream() raises StorageFileExistsError when something already is.
    """

    @abstractmethod
    def createDirectory(self, path: str) -> None: ...

    @abstractmethod
    def delete(self, path: str) -> None: ...

    @abstractmethod
    def writeStream(self, path: str, stream: BinaryIO) -> None: ...

    @abstractmethod
    def has(self, path: str) -> bool: ...

    @abstractmethod
    def readStream(self, path: str) -> BinaryIO: ...

    @abstractmethod
    def listContents(self, directory: str = "") -> list[str]: ...

    def read(self, path: str) -> bytes:
        with self.readStream(path) as stream:
            return stream.read()
