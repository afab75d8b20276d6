# pwabundler/core/jsonutils.py
from __future__ import annotations

import json
import math
import traceback
from collections.abc import Mapping, Iterable
from pathlib import Path
from typing import Any

__all__ = ["safeJsonDumps", "hostJsonDumps", "serializeError", "tryJSONify"]



# ------------------------------------------------
#                JSON serialization
# ------------------------------------------------

def safeJsonDumps(obj: object) -> str:
    """
    Serializes an object to a compact JSON string.
    Uses deterministic separators (",", ":") and disallows NaN/infinity.
    UTF-8 characters are kept as-is.
    If direct JSON encoding fails, falls back to tryJSONify and retries.
    """
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError):
        safePayload = tryJSONify(obj)
        return json.dumps(safePayload, ensure_ascii=False, allow_nan=False, separators=(",", ":"))



def hostJsonDumps(obj: object) -> str:
    """
    Serializes `obj` exactly the way the host platform's default JSON encoder does:
    compact, non-ASCII escaped as \\uXXXX and forward slashes escaped as "\\/".

    Digests computed over this string match digests the host computes for the same data.
    """
    encoded = json.dumps(obj, ensure_ascii=True, allow_nan=False, separators=(",", ":"))
    return encoded.replace("/", "\\/")



# ------------------------------------------------
#              Error / Exception helpers
# ------------------------------------------------

def serializeError(err: Any, *, includeStack: bool = False) -> dict[str, Any]:
    """
    Converts Exception or arbitrary object into a JSON-serializable dict.

    Examples:
        ValueError("bad") -> {"type": "ValueError", "message": "bad"}
        "error text"      -> {"message": "error text"}
        None              -> {}
    """
    if err is None:
        return {}

    if isinstance(err, str):
        return {"message": err}

    if isinstance(err, BaseException):
        data: dict[str, Any] = {
            "type": err.__class__.__name__,
            "message": str(err),
        }
        path = getattr(err, "path", None)
        if path:
            data["path"] = str(path)
        if includeStack and err.__traceback__ is not None:
            data["stack"] = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        return data

    return {"message": str(err)}



# ------------------------------------------------
#            Best-effort JSON coercion
# ------------------------------------------------

def tryJSONify(value: Any, *, _maxDepth: int = 32, _depth: int = 0) -> Any:
    """
    Coerces `value` into JSON-safe data: Paths and unknown objects become strings,
    sets/tuples become lists, pydantic models are dumped. Depth-limited.
    """
    if _depth > _maxDepth:
        return "<max depth>"

    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        # NaN/inf are not valid JSON
        return value if math.isfinite(value) else None

    if isinstance(value, Path):
        return str(value)

    if hasattr(value, "model_dump"):
        return tryJSONify(value.model_dump(), _maxDepth=_maxDepth, _depth=_depth + 1)

    if isinstance(value, Mapping):
        return {
            str(key): tryJSONify(item, _maxDepth=_maxDepth, _depth=_depth + 1)
            for key, item in value.items()
        }

    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"

    if isinstance(value, Iterable):
        return [tryJSONify(item, _maxDepth=_maxDepth, _depth=_depth + 1) for item in value]

    return repr(value)
