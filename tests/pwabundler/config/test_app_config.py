# tests/pwabundler/config/test_app_config.py
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pwabundler.app.config import config, configBool, getBundleSettings, getGlobalConfig, initConfig
from pwabundler.config.settings import BundleSettings, knownKeys


def test_defaultsApplyWithoutConfigFile(tmp_path: Path) -> None:
    initConfig(tmp_path / "missing.json5", environ={}, force=True)
    settings = getBundleSettings()
    assert settings == BundleSettings()
    assert settings.assetSubdirectory == "src/Resources/app/pwa"
    assert settings.artifactDirectory == "pwa"
    assert settings.defaultArtifactName == "pwa_assets"
    assert settings.placeholderEntry == "_placeholder_"
    assert settings.checksumAlgorithm == "md5"


def test_layering_fileThenEnvThenOverride(tmp_path: Path) -> None:
    cfgPath = tmp_path / "pwabundler.json5"
    cfgPath.write_text(
        "{ bundle: { artifactDirectory: 'from-file', defaultArtifactName: 'bundle' }, logging: { devMode: false } }",
        encoding="utf-8",
    )
    initConfig(cfgPath, environ={"PWABUNDLER__BUNDLE__ARTIFACTDIRECTORY": "from-env"}, force=True)

    assert config("bundle.artifactDirectory") == "from-env"
    assert config("bundle.defaultArtifactName") == "bundle"
    assert configBool("logging.devMode", True) is False

    getGlobalConfig().set("bundle.artifactDirectory", "from-override")
    assert getBundleSettings().artifactDirectory == "from-override"
    # Untouched keys keep their defaults
    assert getBundleSettings().archiveBaseName == "pwa-bundles-assets"


def test_configPathFromEnvironment(tmp_path: Path) -> None:
    cfgPath = tmp_path / "custom.json5"
    cfgPath.write_text("{ storage: { publicDir: '/srv/www' } }", encoding="utf-8")
    initConfig(environ={"PWABUNDLER_CONFIG": str(cfgPath)}, force=True)
    assert config("storage.publicDir") == "/srv/www"


def test_initConfig_isIdempotent(tmp_path: Path) -> None:
    first = initConfig(tmp_path / "a.json5", environ={}, force=True)
    assert initConfig(tmp_path / "b.json5") is first


def test_configBool_parsesStrings(tmp_path: Path) -> None:
    initConfig(tmp_path / "missing.json5", environ={}, force=True)
    getGlobalConfig().set("feature.flag", "yes")
    assert configBool("feature.flag") is True
    getGlobalConfig().set("feature.flag", "off")
    assert configBool("feature.flag") is False


def test_settings_normalizeAndValidate() -> None:
    settings = BundleSettings(assetSubdirectory="/src/Resources/app/pwa/", artifactDirectory="pwa/")
    assert settings.assetSubdirectory == "src/Resources/app/pwa"
    assert settings.artifactDirectory == "pwa"
    assert BundleSettings(checksumAlgorithm="SHA256").checksumAlgorithm == "sha256"

    with pytest.raises(ValidationError):
        BundleSettings(checksumAlgorithm="nope")
    with pytest.raises(ValidationError):
        BundleSettings(checksumAlgorithm="shake_128")
    with pytest.raises(ValidationError):
        BundleSettings(artifactDirectory="/")


def test_knownKeys_flattensDefaults() -> None:
    keys = knownKeys()
    assert "bundle.assetSubdirectory" in keys
    assert "storage.publicDir" in keys
    assert "bundle" not in keys
