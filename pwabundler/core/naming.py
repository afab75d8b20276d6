# pwabundler/core/naming.py
from __future__ import annotations
import re

__all__ = ["toDashCase"]



# An upper-case letter plus any following capitals that don't start a new word,
# e.g. "PWA" in "PWAHelper" or "P" in "PayPal".
_UPPER_RUN = re.compile(r"[A-Z]([A-Z](?![a-z]))*")
_SEPARATORS = re.compile(r"[\s_]+")
_DASHES = re.compile(r"-{2,}")



def toDashCase(string: str) -> str:
    """
    Converts an extension display name to the dash-cased form used as its
    directory inside the asset archive.

      "Foo Bar"     -> "foo-bar"
      "SwagPayPal"  -> "swag-pay-pal"
      "PWAHelper"   -> "pwa-helper"
      "my_plugin"   -> "my-plugin"
    """
    dashed = _UPPER_RUN.sub(lambda match: "-" + match.group(0), str(string))
    dashed = _SEPARATORS.sub("-", dashed)
    dashed = _DASHES.sub("-", dashed)
    return dashed.strip("-").lower()
