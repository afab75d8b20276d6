# pwabundler/extensions/models.py
from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["ExtensionCategory", "CATEGORIES", "ExtensionRecord", "ExtensionMetadata"]



ExtensionCategory = Literal["app", "plugin"]

# Enumeration order. Apps first, then plugins; the checksum depends on it.
CATEGORIES: tuple[ExtensionCategory, ...] = ("app", "plugin")



class ExtensionRecord(BaseModel):
    """An extension as the host platform reports it. `path` is relative to the project root."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    path: str
    active: bool = True



class ExtensionMetadata(BaseModel):
    """Name and absolute installation path of one active extension."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    path: str
