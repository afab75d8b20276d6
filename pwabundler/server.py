# pwabundler/server.py
from __future__ import annotations

import logging

from pwabundler.app.factory import createApp

# Basic logging setup, before config is read
logging.basicConfig(level=logging.INFO)

app = createApp()
