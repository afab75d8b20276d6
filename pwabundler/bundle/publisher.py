# pwabundler/bundle/publisher.py
from __future__ import annotations
import logging
from pathlib import Path

from pwabundler.core.errors import ArchiveError, StorageFileNotFoundError
from pwabundler.storage.base import PublicFilesystem

logger = logging.getLogger(__name__)

__all__ = ["ARTIFACT_DIRECTORY", "DEFAULT_ARTIFACT_NAME", "artifactPath", "publishArchive"]

ARTIFACT_DIRECTORY = "pwa"
DEFAULT_ARTIFACT_NAME = "pwa_assets"



def artifactPath(
    checksum: str | None,
    *,
    directory: str = ARTIFACT_DIRECTORY,
    defaultName: str = DEFAULT_ARTIFACT_NAME,
) -> str:
    """`<directory>/<checksum>.zip`, or `<directory>/<defaultName>.zip` without a checksum."""
    return f"{directory}/{checksum or defaultName}.zip"



def publishArchive(
    storage: PublicFilesystem,
    archivePath: str | Path,
    checksum: str | None = None,
    *,
    directory: str = ARTIFACT_DIRECTORY,
    defaultName: str = DEFAULT_ARTIFACT_NAME,
) -> str:
    """
    Copies the archive at `archivePath` into public storage and returns its storage path.

    Any artifact already published under the same name is removed first.
    An unreadable archive raises ArchiveError and leaves the previous artifact in place.
    Not transactional: a crash between delete and write leaves the path empty.
    """
    storage.createDirectory(directory)

    outputPath = artifactPath(checksum, directory=directory, defaultName=defaultName)

    try:
        stream = open(archivePath, "rb")
    except OSError as err:
        raise ArchiveError(f"Cannot read asset archive '{archivePath}': {err}") from err

    with stream:
        try:
            storage.delete(outputPath)
            logger.debug("Removed previous artifact '%s'", outputPath)
        except StorageFileNotFoundError:
            pass # Nothing published yet

        storage.writeStream(outputPath, stream)

    logger.info("Published asset bundle at '%s'", outputPath)
    return outputPath
