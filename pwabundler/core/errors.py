# pwabundler/core/errors.py
from __future__ import annotations

__all__ = [
    "BundlerError", "HostQueryError", "ArchiveError",
    "StorageError", "StorageFileNotFoundError", "StorageFileExistsError", "StoragePathError",
]



class BundlerError(Exception):
    """Base class for every error raised while building or publishing the asset bundle."""
    pass



class HostQueryError(BundlerError):
    """Raised when the host platform cannot answer an extension query."""
    pass



class ArchiveError(BundlerError):
    """Raised when the asset archive cannot be created or written."""
    pass



class StorageError(BundlerError):
    """Raised by public storage backends."""
    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path



class StorageFileNotFoundError(StorageError):
    pass



class StorageFileExistsError(StorageError):
    pass



class StoragePathError(StorageError):
    """Path points outside of the storage root or is otherwise unusable."""
    pass
