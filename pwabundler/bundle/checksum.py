# pwabundler/bundle/checksum.py
from __future__ import annotations
import hashlib
from collections.abc import Iterable

from pwabundler.core.jsonutils import hostJsonDumps
from pwabundler.extensions.models import ExtensionMetadata

__all__ = ["DEFAULT_ALGORITHM", "serializeExtensions", "computeChecksum"]

DEFAULT_ALGORITHM = "md5"



def serializeExtensions(extensions: Iterable[ExtensionMetadata]) -> str:
    """
    Canonical string form of the extension list, in enumeration order:
    `[{"name":"...","path":"..."},...]` encoded like the host platform encodes JSON.
    """
    return hostJsonDumps([{"name": ext.name, "path": ext.path} for ext in extensions])



def computeChecksum(extensions: Iterable[ExtensionMetadata], algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hex digest identifying the current extension set. Used verbatim as the artifact's base name."""
    digest = hashlib.new(algorithm)
    digest.update(serializeExtensions(extensions).encode("utf-8"))
    return digest.hexdigest()
