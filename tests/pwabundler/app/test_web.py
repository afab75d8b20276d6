# tests/pwabundler/app/test_web.py
from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pwabundler.app.config import initConfig
from pwabundler.app.factory import buildAssetService, createApp
from pwabundler.bundle.service import AssetService
from pwabundler.core.errors import StorageError
from pwabundler.extensions.host import StaticHost
from pwabundler.storage.memory import MemoryFilesystem


@pytest.fixture()
def project(tmp_path: Path, makeExtension) -> Path:
    makeExtension("custom/plugins/SwagPwa", {"index.js": "pwa"})
    projectDir = tmp_path / "project"
    (projectDir / "extensions.json5").write_text(
        '{ plugins: [{ name: "SwagPwa", path: "custom/plugins/SwagPwa" }] }',
        encoding="utf-8",
    )
    cfgPath = tmp_path / "pwabundler.json5"
    cfgPath.write_text(
        "{ host: { projectDir: '%s' }, logging: { devMode: false } }" % projectDir.as_posix(),
        encoding="utf-8",
    )
    initConfig(cfgPath, environ={}, force=True)
    return projectDir


@pytest.fixture()
def client(project: Path) -> TestClient:
    return TestClient(createApp(configureLogs=False))


def test_buildAssetService_resolvesPathsFromProject(project: Path) -> None:
    service = buildAssetService()
    assert service.host.cacheDir() == project / "var/cache"
    assert service.storage.root == project / "public"


def test_dumpBundles_action(client: TestClient, project: Path) -> None:
    response = client.post("/api/_action/pwa/dump-bundles")
    assert response.status_code == 200
    artifact = response.json()["buildArtifact"]
    assert artifact["type"] == "zip"
    assert artifact["path"].startswith("pwa/")
    assert (project / "public" / artifact["path"]).is_file()


def test_dumpBundles_action_withoutChecksum(client: TestClient) -> None:
    response = client.post("/api/_action/pwa/dump-bundles", params={"checksum": "false"})
    assert response.json() == {"buildArtifact": {"path": "pwa/pwa_assets.zip", "type": "zip"}}


def test_listExtensions_matchesDump(client: TestClient) -> None:
    listing = client.get("/api/_action/pwa/extensions").json()
    assert [ext["name"] for ext in listing["extensions"]] == ["SwagPwa"]

    dumped = client.post("/api/_action/pwa/dump-bundles").json()
    assert dumped["buildArtifact"]["path"] == listing["artifact"] == f"pwa/{listing['checksum']}.zip"


def test_serveArtifact(client: TestClient) -> None:
    path = client.post("/api/_action/pwa/dump-bundles").json()["buildArtifact"]["path"]
    response = client.get(f"/artifacts/{path.split('/')[-1]}")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    with zipfile.ZipFile(io.BytesIO(response.content)) as zf:
        assert zf.namelist() == ["swag-pwa/index.js"]


def test_serveArtifact_fallbackName_isNotCached(client: TestClient) -> None:
    client.post("/api/_action/pwa/dump-bundles", params={"checksum": "false"})
    response = client.get("/artifacts/pwa_assets.zip")
    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"


def test_serveArtifact_missing_is404(client: TestClient) -> None:
    assert client.get("/artifacts/nope.zip").status_code == 404
    assert client.get("/artifacts/readme.txt").status_code == 404


def test_memoryStorage_isServedToo(tmp_path: Path) -> None:
    initConfig(tmp_path / "none.json5", environ={}, force=True)
    storage = MemoryFilesystem()
    service = AssetService(StaticHost(projectDir=tmp_path, cacheDir=tmp_path / "cache"), storage)
    client = TestClient(createApp(assetService=service, configureLogs=False))

    path = client.post("/api/_action/pwa/dump-bundles").json()["buildArtifact"]["path"]
    response = client.get(f"/artifacts/{path.split('/')[-1]}")
    assert response.status_code == 200
    assert response.content == storage.read(path)


def test_bundlerError_isMappedTo500(tmp_path: Path) -> None:
    initConfig(tmp_path / "none.json5", environ={}, force=True)

    class BrokenStorage(MemoryFilesystem):
        def writeStream(self, path, stream):
            raise StorageError("storage offline", path=path)

    service = AssetService(StaticHost(projectDir=tmp_path, cacheDir=tmp_path / "cache"), BrokenStorage())
    client = TestClient(createApp(assetService=service, configureLogs=False))

    response = client.post("/api/_action/pwa/dump-bundles")
    assert response.status_code == 500
    assert response.json()["error"]["type"] == "StorageError"
    assert response.json()["error"]["message"] == "storage offline"
