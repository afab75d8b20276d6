# pwabundler/config/settings.py
from __future__ import annotations
import hashlib
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = ["DEFAULTS", "BundleSettings", "knownKeys"]



# Shipped defaults. Every key here can be overridden by the config file,
# PWABUNDLER__* environment variables or runtime overrides.
DEFAULTS: dict[str, Any] = {
    "bundle": {
        "assetSubdirectory": "src/Resources/app/pwa",
        "artifactDirectory": "pwa",
        "defaultArtifactName": "pwa_assets",
        "archiveBaseName": "pwa-bundles-assets",
        "placeholderEntry": "_placeholder_",
        "checksumAlgorithm": "md5",
    },
    "host": {
        "projectDir": ".",
        "cacheDir": "var/cache",
        "registryFile": "extensions.json5",
    },
    "storage": {
        "publicDir": "public",
    },
    "logging": {
        "devMode": True,
        "file": None,
        "maxBytes": 10 * 1024 * 1024,
        "backupCount": 5,
    },
    "http": {
        "host": "127.0.0.1",
        "port": 8000,
    },
}



def knownKeys(data: dict[str, Any] = DEFAULTS, prefix: str = "") -> list[str]:
    """Flattens DEFAULTS into dotted keys, e.g. "bundle.assetSubdirectory"."""
    keys: list[str] = []
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            keys.extend(knownKeys(value, dotted))
        else:
            keys.append(dotted)
    return keys



class BundleSettings(BaseModel):
    """Naming conventions used when building and publishing the asset bundle."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    assetSubdirectory: str = "src/Resources/app/pwa"
    artifactDirectory: str = "pwa"
    defaultArtifactName: str = "pwa_assets"
    archiveBaseName: str = "pwa-bundles-assets"
    placeholderEntry: str = "_placeholder_"
    checksumAlgorithm: str = "md5"

    @field_validator("assetSubdirectory", "artifactDirectory")
    @classmethod
    def _stripSlashes(cls, value: str) -> str:
        stripped = value.strip().strip("/")
        if not stripped:
            raise ValueError("must not be empty")
        return stripped

    @field_validator("defaultArtifactName", "archiveBaseName", "placeholderEntry")
    @classmethod
    def _notEmpty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("checksumAlgorithm")
    @classmethod
    def _knownAlgorithm(cls, value: str) -> str:
        name = value.strip().lower()
        # shake_* digests need an explicit length
        if name not in hashlib.algorithms_guaranteed or name.startswith("shake_"):
            raise ValueError(f"unknown hash algorithm '{value}'")
        return name
