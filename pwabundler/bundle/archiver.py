# pwabundler/bundle/archiver.py
from __future__ import annotations
import logging
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pwabundler.core.errors import ArchiveError
from pwabundler.core.naming import toDashCase
from pwabundler.extensions.models import ExtensionMetadata

logger = logging.getLogger(__name__)

__all__ = [
    "ASSET_SUBDIRECTORY", "PLACEHOLDER_ENTRY",
    "ArchiveEntry", "collectArchiveEntries", "createAssetsArchive",
]

ASSET_SUBDIRECTORY = "src/Resources/app/pwa"
PLACEHOLDER_ENTRY = "_placeholder_"



@dataclass(frozen=True)
class ArchiveEntry:
    localPath: str
    sourceFile: Path



def _iterAssetFiles(assetDir: Path) -> list[Path]:
    # Sorted by relative posix path so the archive layout doesn't depend on directory listing order
    files = [path for path in assetDir.rglob("*") if not path.is_dir()]
    return sorted(files, key=lambda path: path.relative_to(assetDir).as_posix())



def collectArchiveEntries(
    extensions: Iterable[ExtensionMetadata],
    *,
    assetSubdirectory: str = ASSET_SUBDIRECTORY,
) -> list[ArchiveEntry]:
    """
    Collects the files below `<extension path>/<assetSubdirectory>` of every extension.

    Each file is stored as `<dash-cased name>/<path relative to the asset directory>`;
    a name that dash-cases to nothing (e.g. "_") is used as-is.
    Extensions without the asset directory contribute nothing. When two extensions
    map onto the same entry name the later one wins.
    """
    entries: dict[str, ArchiveEntry] = {}

    for extension in extensions:
        assetDir = Path(extension.path) / assetSubdirectory
        if not assetDir.is_dir():
            logger.debug("Extension '%s' has no assets at '%s', skipping", extension.name, assetDir)
            continue

        prefix = toDashCase(extension.name) or extension.name.strip()
        if not prefix:
            raise ArchiveError(f"Extension at '{extension.path}' has a blank name, cannot place its assets")
        count = 0
        for file in _iterAssetFiles(assetDir):
            localPath = f"{prefix}/{file.relative_to(assetDir).as_posix()}"
            if localPath in entries:
                logger.warning(
                    "Asset '%s' of extension '%s' replaces '%s'",
                    localPath, extension.name, entries[localPath].sourceFile,
                )
                del entries[localPath]
            entries[localPath] = ArchiveEntry(localPath=localPath, sourceFile=file)
            count += 1

        logger.debug("Extension '%s': %d asset file(s) under '%s/'", extension.name, count, prefix)

    return list(entries.values())



def createAssetsArchive(
    archivePath: str | Path,
    extensions: Iterable[ExtensionMetadata],
    *,
    assetSubdirectory: str = ASSET_SUBDIRECTORY,
    placeholderEntry: str = PLACEHOLDER_ENTRY,
) -> int:
    """
    Writes the asset archive to `archivePath`, replacing any existing file.

    An archive without assets still gets a single empty `placeholderEntry`
    so consumers always receive a valid, non-empty zip.
    Returns the number of entries written.
    """
    archivePath = Path(archivePath)
    entries = collectArchiveEntries(extensions, assetSubdirectory=assetSubdirectory)

    try:
        archivePath.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archivePath, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry in entries:
                zf.write(entry.sourceFile, arcname=entry.localPath)

            if not entries:
                zf.writestr(placeholderEntry, "")
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as err:
        raise ArchiveError(f"Cannot write asset archive '{archivePath}': {err}") from err

    written = len(entries) or 1
    logger.info("Wrote asset archive '%s' (%d entries)", archivePath, written)
    return written
