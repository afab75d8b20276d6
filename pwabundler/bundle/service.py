# pwabundler/bundle/service.py
from __future__ import annotations
import logging
import os
import tempfile
import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from pwabundler.config.settings import BundleSettings
from pwabundler.core.errors import ArchiveError
from pwabundler.core.logging import logContext
from pwabundler.extensions.host import ExtensionHost
from pwabundler.extensions.lister import listActiveExtensions
from pwabundler.extensions.models import ExtensionMetadata
from pwabundler.storage.base import PublicFilesystem
from .archiver import createAssetsArchive
from .checksum import computeChecksum
from .events import EXTENSION_ACTIVATED, EXTENSION_DEACTIVATED, EventSource, ExtensionLifecycleEvent
from .publisher import publishArchive

logger = logging.getLogger(__name__)

__all__ = ["BundleResult", "AssetService"]



@dataclass(frozen=True)
class BundleResult:
    path: str
    checksum: str | None
    entryCount: int
    extensions: list[ExtensionMetadata] = field(default_factory=list)



class AssetService:
    """
    Builds the asset bundle of all active extensions and publishes it to public storage.

    Runs synchronously; every failure propagates to the caller. Runs on one service
    are serialized and each run archives into its own file under the cache directory.
    """

    def __init__(
        self,
        host: ExtensionHost,
        storage: PublicFilesystem,
        settings: BundleSettings | None = None,
    ) -> None:
        self.host = host
        self.storage = storage
        self.settings = settings or BundleSettings()
        self._lock = threading.Lock()

    @classmethod
    def getSubscribedEvents(cls) -> dict[str, str]:
        return {
            EXTENSION_ACTIVATED: "dumpBundles",
            EXTENSION_DEACTIVATED: "dumpBundles",
        }

    def subscribe(self, source: EventSource) -> None:
        for eventName in self.getSubscribedEvents():
            source.subscribe(eventName, self.handleLifecycleEvent)

    def handleLifecycleEvent(self, event: ExtensionLifecycleEvent) -> str:
        handlerName = self.getSubscribedEvents().get(event.name)
        if handlerName is None:
            raise ValueError(f"{type(self).__name__} is not subscribed to '{event.name}'")
        with logContext(event=event.name):
            logger.info("Extension '%s' changed (%s), rebuilding asset bundle", event.extensionName or "?", event.name)
            return getattr(self, handlerName)()

    def newArchivePath(self) -> Path:
        """Reserves a fresh `<cacheDir>/<archiveBaseName>-<random>.zip` for one run."""
        cacheDir = self.host.cacheDir()
        try:
            cacheDir.mkdir(parents=True, exist_ok=True)
            fd, name = tempfile.mkstemp(prefix=f"{self.settings.archiveBaseName}-", suffix=".zip", dir=cacheDir)
        except OSError as err:
            raise ArchiveError(f"Cannot reserve temporary archive in '{cacheDir}': {err}") from err
        os.close(fd)
        return Path(name)

    def listExtensions(self) -> tuple[list[ExtensionMetadata], str]:
        extensions = listActiveExtensions(self.host)
        return extensions, computeChecksum(extensions, self.settings.checksumAlgorithm)

    def buildBundle(self, *, useChecksum: bool = True) -> BundleResult:
        settings = self.settings
        with self._lock, logContext(runId=uuid.uuid4().hex[:12]):
            logger.info("Building asset bundle")
            archivePath: Path | None = None

            try:
                extensions, checksum = self.listExtensions()
                archivePath = self.newArchivePath()
                entryCount = createAssetsArchive(
                    archivePath,
                    extensions,
                    assetSubdirectory=settings.assetSubdirectory,
                    placeholderEntry=settings.placeholderEntry,
                )
                path = publishArchive(
                    self.storage,
                    archivePath,
                    checksum if useChecksum else None,
                    directory=settings.artifactDirectory,
                    defaultName=settings.defaultArtifactName,
                )
            except Exception:
                logger.exception("Building asset bundle failed")
                raise
            finally:
                if archivePath is not None:
                    archivePath.unlink(missing_ok=True)

            return BundleResult(
                path=path,
                checksum=checksum if useChecksum else None,
                entryCount=entryCount,
                extensions=extensions,
            )

    def dumpBundles(self, *, useChecksum: bool = True) -> str:
        """Rebuilds and republishes the bundle. Returns the published storage path."""
        return self.buildBundle(useChecksum=useChecksum).path
