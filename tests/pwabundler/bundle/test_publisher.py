# tests/pwabundler/bundle/test_publisher.py
from __future__ import annotations

from pathlib import Path

import pytest

from pwabundler.bundle.publisher import artifactPath, publishArchive
from pwabundler.core.errors import ArchiveError, BundlerError, StorageError
from pwabundler.storage.local import LocalFilesystem
from pwabundler.storage.memory import MemoryFilesystem


@pytest.fixture()
def archive(tmp_path: Path) -> Path:
    path = tmp_path / "build.zip"
    path.write_bytes(b"PK-first")
    return path


def test_artifactPath() -> None:
    assert artifactPath("abc") == "pwa/abc.zip"
    assert artifactPath(None) == "pwa/pwa_assets.zip"
    assert artifactPath("", directory="assets", defaultName="bundle") == "assets/bundle.zip"


def test_publish_createsDirectoryAndWrites(archive: Path) -> None:
    storage = MemoryFilesystem()
    path = publishArchive(storage, archive, "abc123")

    assert path == "pwa/abc123.zip"
    assert "pwa" in storage.directories
    assert storage.read(path) == b"PK-first"


def test_publish_withoutChecksum_usesDefaultName(archive: Path) -> None:
    storage = MemoryFilesystem()
    assert publishArchive(storage, archive) == "pwa/pwa_assets.zip"
    assert storage.has("pwa/pwa_assets.zip")


def test_publishTwice_overwritesInPlace(tmp_path: Path, archive: Path) -> None:
    storage = LocalFilesystem(tmp_path / "public")
    first = publishArchive(storage, archive, "abc")

    archive.write_bytes(b"PK-second")
    second = publishArchive(storage, archive, "abc")

    assert first == second == "pwa/abc.zip"
    assert storage.listContents("pwa") == ["pwa/abc.zip"]
    assert storage.read("pwa/abc.zip") == b"PK-second"


def test_publish_otherChecksum_keepsPreviousArtifact(archive: Path) -> None:
    storage = MemoryFilesystem()
    publishArchive(storage, archive, "one")
    publishArchive(storage, archive, "two")
    assert storage.listContents("pwa") == ["pwa/one.zip", "pwa/two.zip"]


def test_publish_storageFailurePropagates(archive: Path) -> None:
    class FailingStorage(MemoryFilesystem):
        def writeStream(self, path, stream):
            raise StorageError("disk full", path=path)

    with pytest.raises(StorageError):
        publishArchive(FailingStorage(), archive, "abc")


def test_publish_unreadableArchive_raisesArchiveErrorAndKeepsPrevious(tmp_path: Path, archive: Path) -> None:
    storage = MemoryFilesystem()
    publishArchive(storage, archive, "abc")

    with pytest.raises(ArchiveError) as excInfo:
        publishArchive(storage, tmp_path / "missing.zip", "abc")
    assert isinstance(excInfo.value, BundlerError)
    assert isinstance(excInfo.value.__cause__, FileNotFoundError)
    assert storage.read("pwa/abc.zip") == b"PK-first"

    with pytest.raises(ArchiveError):
        publishArchive(storage, tmp_path, "abc")
