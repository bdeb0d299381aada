"""
iclock/config.py
Parser and server settings. Persists to iclock_config.json in the project
root; missing or unreadable files fall back to defaults.
ICLOCK_TZ_OFFSET in the environment overrides the device timezone offset.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from iclock.models.record import ParserOptions
from iclock.parsers.attlog_parser import resolve_options

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "iclock_config.json"
TZ_ENV_VAR = "ICLOCK_TZ_OFFSET"
PARSER_KEYS = ("strict_mode", "include_raw_data", "timestamp_format", "timezone_offset")

DEFAULT_CONFIG = {
    "timezone_offset": 4,
    "strict_mode": False,
    "include_raw_data": False,
    "timestamp_format": "auto",
    "host": "127.0.0.1",
    "port": 8088,
}


def _config_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path.cwd()
    return root / CONFIG_FILENAME


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load config from iclock_config.json. Returns defaults if missing."""
    config = dict(DEFAULT_CONFIG)
    path = _config_path(project_root)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                config.update(data)
            else:
                logger.warning(f"Config ignored, expected a JSON object: {path}")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Config load failed: {e}")

    env_tz = os.environ.get(TZ_ENV_VAR)
    if env_tz:
        try:
            config["timezone_offset"] = float(env_tz)
        except ValueError:
            logger.warning(f"Ignoring {TZ_ENV_VAR}={env_tz!r}: not a number")
    return config


def save_config(config: Dict[str, Any], project_root: Optional[Path] = None) -> Path:
    """Persist config to iclock_config.json."""
    path = _config_path(project_root)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path


def options_from_config(config: Dict[str, Any]) -> ParserOptions:
    """
    ParserOptions from the parser keys of a config dict. A value that
    cannot be used is logged and replaced by its default.
    """
    values: Dict[str, Any] = {}
    for key in PARSER_KEYS:
        value = config.get(key)
        try:
            resolve_options({key: value})
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring config {key}={value!r}: {e}")
            continue
        values[key] = value
    return resolve_options(values)
