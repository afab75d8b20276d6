# pwabundler/extensions/host.py
from __future__ import annotations
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import json5
from pydantic import ValidationError

from pwabundler.core.errors import HostQueryError
from .models import ExtensionCategory, ExtensionRecord

logger = logging.getLogger(__name__)

__all__ = ["ExtensionHost", "StaticHost", "RegistryFileHost"]

# Registry document key per category
_SECTIONS: dict[str, str] = {"app": "apps", "plugin": "plugins"}



@runtime_checkable
class ExtensionHost(Protocol):
    """The queries the bundler needs from the host platform."""

    def listActive(self, category: ExtensionCategory) -> Iterable[ExtensionRecord]: ...

    def projectDir(self) -> Path: ...

    def cacheDir(self) -> Path: ...



def _parseRecords(raw: Any, *, source: str, category: str) -> list[ExtensionRecord]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise HostQueryError(f"{source}: '{_SECTIONS[category]}' must be a list, not '{type(raw).__name__}'")
    records: list[ExtensionRecord] = []
    for idx, item in enumerate(raw):
        try:
            records.append(ExtensionRecord.model_validate(item))
        except ValidationError as err:
            raise HostQueryError(f"{source}: invalid {category} record #{idx}: {err}") from err
    return records



class StaticHost:
    """
    In-memory host. Useful for embedding the bundler where extension
    state is already known, and in tests.
    """
    def __init__(
        self,
        *,
        projectDir: str | Path,
        cacheDir: str | Path,
        apps: Iterable[ExtensionRecord | Mapping[str, Any]] = (),
        plugins: Iterable[ExtensionRecord | Mapping[str, Any]] = (),
    ) -> None:
        self._projectDir = Path(projectDir)
        self._cacheDir = Path(cacheDir)
        self._records: dict[str, list[ExtensionRecord]] = {
            "app": [ExtensionRecord.model_validate(item) for item in apps],
            "plugin": [ExtensionRecord.model_validate(item) for item in plugins],
        }

    def listActive(self, category: ExtensionCategory) -> list[ExtensionRecord]:
        return [record for record in self._records[category] if record.active]

    def projectDir(self) -> Path:
        return self._projectDir

    def cacheDir(self) -> Path:
        return self._cacheDir

    def setActive(self, name: str, active: bool) -> None:
        """Flips the active flag of every record called `name`. Raises KeyError if there is none."""
        found = False
        for records in self._records.values():
            for idx, record in enumerate(records):
                if record.name == name:
                    records[idx] = record.model_copy(update={"active": active})
                    found = True
        if not found:
            raise KeyError(f"Unknown extension '{name}'")



class RegistryFileHost:
    """
    Host backed by a json5 registry file:

        {
          apps:    [{name: "MyApp", path: "custom/apps/MyApp", active: true}],
          plugins: [{name: "SwagPayPal", path: "custom/plugins/SwagPayPal", active: false}],
        }

    The file is re-read on every query so activation changes are picked up.
    A missing file means no extensions are installed.
    """
    def __init__(self, registryFile: str | Path, *, projectDir: str | Path, cacheDir: str | Path) -> None:
        self.registryFile = Path(registryFile)
        self._projectDir = Path(projectDir)
        self._cacheDir = Path(cacheDir)

    def _load(self) -> Mapping[str, Any]:
        if not self.registryFile.exists():
            logger.debug("Extension registry '%s' is missing → no extensions", self.registryFile)
            return {}
        try:
            parsed = json5.loads(self.registryFile.read_text(encoding="utf-8"))
        except (OSError, ValueError) as err:
            raise HostQueryError(f"Cannot read extension registry '{self.registryFile}': {err}") from err
        if parsed is None:
            return {}
        if not isinstance(parsed, Mapping):
            raise HostQueryError(
                f"Extension registry '{self.registryFile}' must be a JSON object, not '{type(parsed).__name__}'"
            )
        return parsed

    def listActive(self, category: ExtensionCategory) -> list[ExtensionRecord]:
        data = self._load()
        records = _parseRecords(data.get(_SECTIONS[category]), source=str(self.registryFile), category=category)
        return [record for record in records if record.active]

    def projectDir(self) -> Path:
        return self._projectDir

    def cacheDir(self) -> Path:
        return self._cacheDir
