import os
import sys
from pathlib import Path

import pytest

from pwabundler.app.config import resetConfig
from pwabundler.core.logging import clearLogContext



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def _isolateGlobals(monkeypatch):
    # Config is a process-wide singleton; never let a developer's env or config file leak in
    for name in list(os.environ):
        if name.startswith("PWABUNDLER"):
            monkeypatch.delenv(name, raising=False)
    resetConfig()
    clearLogContext()
    yield
    resetConfig()
    clearLogContext()



@pytest.fixture()
def makeExtension(tmp_path: Path):
    """
    Creates an extension directory with the given asset files (relative to the asset subdirectory).
    Returns the extension root.
    """
    def _make(relPath: str, files: dict[str, str] | None = None, *, assetSubdirectory: str = "src/Resources/app/pwa") -> Path:
        root = tmp_path / "project" / relPath
        root.mkdir(parents=True, exist_ok=True)
        if files is not None:
            assetDir = root / assetSubdirectory
            assetDir.mkdir(parents=True, exist_ok=True)
            for name, content in files.items():
                target = assetDir / name
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
        return root
    return _make
