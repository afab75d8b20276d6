# pwabundler/app/config.py
from __future__ import annotations
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pwabundler.config.providers import DefaultsProvider, EnvProvider, FileProvider, OverrideProvider
from pwabundler.config.settings import DEFAULTS, BundleSettings, knownKeys
from pwabundler.config.store import ConfigStore

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_PATH_ENV", "initConfig", "resetConfig", "getGlobalConfig",
    "config", "configBool", "getBundleSettings",
]

CONFIG_PATH_ENV = "PWABUNDLER_CONFIG"
DEFAULT_CONFIG_FILE = "pwabundler.json5"

# ------------------------------------------------------------------ #
# Module singletons
# ------------------------------------------------------------------ #

_CONFIG_STORE: ConfigStore | None = None

# ------------------------------------------------------------------ #
# Core initialization
# ------------------------------------------------------------------ #

def initConfig(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    force: bool = False,
) -> ConfigStore:
    """
    Initialize config subsystem (idempotent unless force=True).

    Layers, lowest precedence first:
      defaults → config file → PWABUNDLER__* env vars → runtime overrides
    """
    global _CONFIG_STORE
    if _CONFIG_STORE is not None and not force:
        return _CONFIG_STORE

    env = os.environ if environ is None else environ
    cfgPath = Path(path or env.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE)

    _CONFIG_STORE = ConfigStore(providers=[
        DefaultsProvider(data=DEFAULTS),
        FileProvider(cfgPath),
        EnvProvider(environ=env, knownKeys=knownKeys()),
        OverrideProvider(),
    ])
    logger.debug("Config initialized (file '%s')", cfgPath)
    return _CONFIG_STORE



def resetConfig() -> None:
    """Drops the process-wide store; the next access re-initializes it."""
    global _CONFIG_STORE
    _CONFIG_STORE = None



def getGlobalConfig() -> ConfigStore:
    global _CONFIG_STORE
    if _CONFIG_STORE is None:
        initConfig()
    assert _CONFIG_STORE is not None
    return _CONFIG_STORE



def config(key: str, default: Any = None) -> Any:
    return getGlobalConfig().get(key, default)



def configBool(key: str, default: bool = False) -> bool:
    value = config(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)



def getBundleSettings() -> BundleSettings:
    return BundleSettings.model_validate(getGlobalConfig().section("bundle"))
