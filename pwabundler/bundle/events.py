# pwabundler/bundle/events.py
from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

__all__ = [
    "EXTENSION_ACTIVATED", "EXTENSION_DEACTIVATED", "LIFECYCLE_EVENTS",
    "ExtensionLifecycleEvent", "EventSource",
]

# Host notifications sent after an extension was (de)activated
EXTENSION_ACTIVATED = "extension.postActivate"
EXTENSION_DEACTIVATED = "extension.postDeactivate"
LIFECYCLE_EVENTS = (EXTENSION_ACTIVATED, EXTENSION_DEACTIVATED)



@dataclass(frozen=True)
class ExtensionLifecycleEvent:
    name: str
    extensionName: str | None = None
    category: str | None = None



class EventSource(Protocol):
    """Anything handlers can be registered on, e.g. the host's event dispatcher."""
    def subscribe(self, eventName: str, callback: Callable[[ExtensionLifecycleEvent], Any]) -> Any: ...
