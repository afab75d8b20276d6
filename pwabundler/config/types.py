# pwabundler/config/types.py
from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

__all__ = ["ConfigProvider"]



class ConfigProvider(ABC):
    """One layer of configuration. Keys are dotted paths, e.g. "bundle.artifactDirectory"."""

    @abstractmethod
    def get(self, key: str) -> Any | None: ...

    @abstractmethod
    def to_dict(self) -> Mapping[str, Any]: ...

    def set(self, key: str, value: Any) -> None:
        raise RuntimeError(f"{type(self).__name__}: is read-only")
