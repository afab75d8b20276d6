from __future__ import annotations

from .context import setLogContext, clearLogContext, getLogContext, logContext
from .setup import configureLogging

__all__ = [
    "configureLogging",
    "setLogContext",
    "clearLogContext",
    "getLogContext",
    "logContext",
]
