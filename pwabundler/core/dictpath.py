# pwabundler/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import Mapping, MutableMapping

__all__ = ["getByPath", "setByPath", "deleteByPath"]



_MISSING = object()



def _splitPath(path: str) -> list[str]:
    """
    Splits a dotted path into segments.

    Examples:
      - bundle.assetSubdirectory -> ["bundle", "assetSubdirectory"]
      - a..b                     -> ValueError
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Path must be a non-empty string")
    parts = path.split(".")
    if any(part == "" for part in parts):
        raise ValueError(f"Path '{path}' contains empty segment(s)")
    return parts



def _walk(data: Mapping[str, Any], parts: list[str]) -> Any:
    node: Any = data
    for part in parts:
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node



def getByPath(data: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Returns the value at dotted `path` or `default` when any segment is missing."""
    value = _walk(data, _splitPath(path))
    return default if value is _MISSING else value



def setByPath(data: MutableMapping[str, Any], path: str, value: Any, *, createIfMissing: bool = True) -> None:
    """
    Sets `value` at dotted `path`.
    Intermediate mappings are created when `createIfMissing` is True, otherwise KeyError is raised.
    """
    parts = _splitPath(path)
    node: MutableMapping[str, Any] = data
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, MutableMapping):
            if not createIfMissing:
                raise KeyError(f"Path segment '{part}' of '{path}' doesn't exist")
            if child is not None:
                raise TypeError(f"Path segment '{part}' of '{path}' is not a mapping")
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value



def deleteByPath(data: MutableMapping[str, Any], path: str, *, pruneEmptyParents: bool = False) -> bool:
    """
    Deletes the value at dotted `path`. Returns True if something was removed.
    With `pruneEmptyParents`, parent mappings left empty are removed as well.
    """
    parts = _splitPath(path)
    chain: list[MutableMapping[str, Any]] = [data]
    node: Any = data
    for part in parts[:-1]:
        if not isinstance(node, MutableMapping) or part not in node:
            return False
        node = node[part]
        chain.append(node)

    if not isinstance(node, MutableMapping) or parts[-1] not in node:
        return False
    del node[parts[-1]]

    if pruneEmptyParents:
        for idx in range(len(chain) - 1, 0, -1):
            if chain[idx]:
                break
            del chain[idx - 1][parts[idx - 1]]
    return True
