# pwabundler/extensions/lister.py
from __future__ import annotations
import logging
import os

from .host import ExtensionHost
from .models import CATEGORIES, ExtensionMetadata

logger = logging.getLogger(__name__)

__all__ = ["resolveExtensionPath", "listActiveExtensions"]



def resolveExtensionPath(projectDir: str | os.PathLike[str], relativePath: str) -> str:
    """
    Joins the project root and an extension's installation path the same way the
    host does: plain string join with the OS separator, no normalization.
    The result feeds the checksum, so it must not depend on the local filesystem.
    """
    return os.sep.join([os.fspath(projectDir), relativePath])



def listActiveExtensions(host: ExtensionHost) -> list[ExtensionMetadata]:
    """
    Returns every active extension, apps first and then plugins, each in host order.
    No active extensions is not an error: the result is simply empty.
    """
    projectDir = host.projectDir()
    out: list[ExtensionMetadata] = []

    for category in CATEGORIES:
        for record in host.listActive(category):
            out.append(ExtensionMetadata(
                name=record.name,
                path=resolveExtensionPath(projectDir, record.path),
            ))

    logger.debug("Active extensions: %s", [meta.name for meta in out])
    return out
