# tests/pwabundler/test_cli.py
from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pwabundler.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restoreRootHandlers():
    root = logging.getLogger()
    saved = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = saved
    root.setLevel(level)


@pytest.fixture()
def cfgPath(tmp_path: Path, makeExtension) -> Path:
    makeExtension("custom/apps/MyApp", {"app.js": "app"})
    projectDir = tmp_path / "project"
    (projectDir / "extensions.json5").write_text(
        '{ apps: [{ name: "MyApp", path: "custom/apps/MyApp" }] }',
        encoding="utf-8",
    )
    path = tmp_path / "pwabundler.json5"
    path.write_text("{ host: { projectDir: '%s' } }" % projectDir.as_posix(), encoding="utf-8")
    return path


def test_dump_publishes(cfgPath: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["dump", "--config", str(cfgPath)])
    assert result.exit_code == 0, result.output
    assert "Published" in result.output
    published = list((tmp_path / "project/public/pwa").iterdir())
    assert len(published) == 1
    assert published[0].suffix == ".zip"


def test_dump_noChecksum(cfgPath: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["dump", "--config", str(cfgPath), "--no-checksum"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "project/public/pwa/pwa_assets.zip").is_file()


def test_extensions_listsActiveAndChecksum(cfgPath: Path) -> None:
    result = runner.invoke(app, ["extensions", "--config", str(cfgPath)])
    assert result.exit_code == 0, result.output
    assert "MyApp" in result.output
    assert "Checksum:" in result.output


def test_dump_brokenRegistry_exitsWithError(cfgPath: Path, tmp_path: Path) -> None:
    (tmp_path / "project/extensions.json5").write_text("{ broken", encoding="utf-8")
    result = runner.invoke(app, ["dump", "--config", str(cfgPath)])
    assert result.exit_code == 1
    assert "Bundling failed" in result.output
