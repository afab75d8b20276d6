# pwabundler/storage/memory.py
from __future__ import annotations
import io
from typing import BinaryIO

from pwabundler.core.errors import StorageFileExistsError, StorageFileNotFoundError
from .base import PublicFilesystem, normalizeStoragePath

__all__ = ["MemoryFilesystem"]



class MemoryFilesystem(PublicFilesystem):
    """Dict-backed storage. Directories are tracked only so createDirectory() is observable."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.directories: set[str] = set()

    def createDirectory(self, path: str) -> None:
        self.directories.add(normalizeStoragePath(path))

    def delete(self, path: str) -> None:
        key = normalizeStoragePath(path)
        if key not in self.files:
            raise StorageFileNotFoundError(f"File not found at path: {path}", path=path)
        del self.files[key]

    def writeStream(self, path: str, stream: BinaryIO) -> None:
        key = normalizeStoragePath(path)
        if key in self.files:
            raise StorageFileExistsError(f"File already exists at path: {path}", path=path)
        self.files[key] = stream.read()

    def has(self, path: str) -> bool:
        return normalizeStoragePath(path) in self.files

    def readStream(self, path: str) -> BinaryIO:
        key = normalizeStoragePath(path)
        if key not in self.files:
            raise StorageFileNotFoundError(f"File not found at path: {path}", path=path)
        return io.BytesIO(self.files[key])

    def listContents(self, directory: str = "") -> list[str]:
        prefix = normalizeStoragePath(directory) + "/" if directory else ""
        return sorted(
            key for key in self.files
            if key.startswith(prefix) and "/" not in key[len(prefix):]
        )
