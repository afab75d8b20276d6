# pwabundler/config/store.py
from __future__ import annotations

from typing import Any

from pwabundler.core.dictpath import getByPath
from .providers import OverrideProvider
from .types import ConfigProvider

__all__ = ["ConfigStore"]



def _deepMerge(left: dict[str, Any], right: dict[str, Any]) -> dict[str, Any]:
    out = dict(left)
    for key, value in right.items():
        if isinstance(out.get(key), dict) and isinstance(value, dict):
            out[key] = _deepMerge(out[key], value)
        else:
            out[key] = value
    return out



class ConfigStore:
    """
    Minimal layered config store:
      - read: first hit from the topmost provider down
      - write: runtime override layer only
    """

    def __init__(self, *, providers: list[ConfigProvider]):
        self._providers = providers
        self._runtime = next((p for p in reversed(providers) if isinstance(p, OverrideProvider)), None)

    @property
    def providers(self) -> tuple[ConfigProvider, ...]:
        return tuple(self._providers)

    def get(self, key: str, default: Any = None) -> Any:
        for provider in reversed(self._providers): # Topmost first precedence
            value = provider.get(key)
            if value is not None:
                return value
        return default

    def set(self, key: str, value: Any) -> None:
        if self._runtime is None:
            raise KeyError("No runtime override layer configured")
        self._runtime.set(key, value)

    def snapshot(self) -> dict[str, Any]:
        """Effective merged document, bottom layer first."""
        merged: dict[str, Any] = {}
        for provider in self._providers:
            merged = _deepMerge(merged, dict(provider.to_dict()))
        return merged

    def section(self, key: str) -> dict[str, Any]:
        value = getByPath(self.snapshot(), key, None)
        return dict(value) if isinstance(value, dict) else {}
