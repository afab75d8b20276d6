# pwabundler/config/providers.py
from __future__ import annotations
import copy
import os
from typing import Any
from collections.abc import Mapping
from pathlib import Path
import logging

import json5

from pwabundler.core.dictpath import getByPath, setByPath, deleteByPath
from .types import ConfigProvider

logger = logging.getLogger(__name__)

__all__ = [
    "OverrideProvider", "DefaultsProvider",
    "FileProvider", "EnvProvider",
]



class _MappingProvider(ConfigProvider):
    """Read-only layer over a nested dict."""
    _data: dict[str, Any]

    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)



# ----------------------------------------------
#          OverrideProvider (in-memory)
# ----------------------------------------------

class OverrideProvider(_MappingProvider):
    """
    Volatile, writable, topmost layer for runtime overrides. Never persisted.
    Setting a key to None removes the override.
    """
    def __init__(self) -> None:
        self._data = {}

    def set(self, key: str, value: Any) -> None:
        if value is None:
            deleteByPath(self._data, key, pruneEmptyParents=True)
            return

        setByPath(self._data, key, copy.deepcopy(value), createIfMissing=True)



# ----------------------------------------------
#              Shipped defaults
# ----------------------------------------------

class DefaultsProvider(_MappingProvider):
    """Bottom layer holding the shipped defaults mapping."""
    def __init__(self, data: Mapping[str, Any]) -> None:
        if not isinstance(data, Mapping):
            raise TypeError(f"{type(self).__name__}: 'data' must be a Mapping, not '{type(data).__name__}'")
        self._data = copy.deepcopy(dict(data))



# ----------------------------------------------
#            JSON/JSON5 config file
# ----------------------------------------------

class FileProvider(_MappingProvider):
    """
    Layer loaded once from a .json or .json5 file.

    Behavior:
        • Missing file → empty layer
        • Parse error → logs warning, empty layer
        • Path is a directory → IsADirectoryError
        • Non-object JSON → TypeError
    """
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data = {}

        if not self.path.exists():
            logger.debug("%s: '%s' is missing → starting as empty dict", type(self).__name__, self.path)
            return

        if not self.path.is_file():
            raise IsADirectoryError(f"{type(self).__name__}: '{self.path}' exists but is not a file")

        try:
            parsed = json5.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as err:
            logger.warning("%s: parse failed for '%s': %s", type(self).__name__, self.path, err)
            return

        if parsed is None:
            return

        if not isinstance(parsed, Mapping):
            raise TypeError(f"{type(self).__name__}: file content must be a JSON object, not '{type(parsed).__name__}'")

        self._data = dict(parsed)



# ----------------------------------------------
#        Environment variables provider
# ----------------------------------------------

class EnvProvider(_MappingProvider):
    """
    Layer built from environment variables.

    PWABUNDLER__STORAGE__PUBLICDIR=/srv/public  →  storage.publicDir = "/srv/public"

    Segments are matched case-insensitively against `knownKeys` so the camelCase
    spelling is preserved. Values are parsed as JSON5 when possible, otherwise kept as strings.
    """
    def __init__(
        self,
        *,
        prefix: str = "PWABUNDLER__",
        environ: Mapping[str, str] | None = None,
        knownKeys: list[str] | None = None,
    ) -> None:
        self.prefix = prefix
        self._data = {}
        lookup = {key.lower(): key for key in (knownKeys or [])}
        env = os.environ if environ is None else environ

        for name, raw in env.items():
            if not name.startswith(prefix):
                continue
            dotted = ".".join(part for part in name[len(prefix):].split("__") if part)
            if not dotted:
                continue
            key = lookup.get(dotted.lower(), dotted)
            setByPath(self._data, key, self._parse(raw), createIfMissing=True)

    @staticmethod
    def _parse(raw: str) -> Any:
        try:
            return json5.loads(raw)
        except ValueError:
            return raw
