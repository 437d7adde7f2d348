# passgauge/config.py
"""
Read-only settings for passgauge.
Settings are read from %APPDATA%/passgauge/config.json (Windows) or ~/.passgauge/config.json (fallback).
PASSGAUGE_CONFIG overrides the path.
"""

import os
import json
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "debounce_ms": 500,
    "default_backend": "native",
    "script_bundle_path": None,  # zxcvbn-ts browser bundle; script backends are unavailable without it
    "user_inputs": [],
    "log_level": "INFO",
}

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "passgauge")
    return os.path.join(os.path.expanduser("~"), ".passgauge")

def config_path() -> str:
    override = os.getenv("PASSGAUGE_CONFIG")
    if override:
        return override
    return os.path.join(_appdata_dir(), "config.json")

def load_config(path: str = None) -> Dict[str, Any]:
    p = path or config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        return DEFAULTS.copy()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", p)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    out.update(data)
    return out

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
