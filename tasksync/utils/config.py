# tasksync/utils/config.py
# Rev 0.1.0
import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .paths import config_dir

SETTINGS_NAME = "settings.json"

_DEFAULTS: Dict[str, Any] = {
    "api": {
        "base_url": "http://127.0.0.1:8000",
        "timeout": 10.0,
    },
    "sync": {
        # a newer edit of the same field cancels the older in-flight call
        "cancel_superseded": True,
    },
    "logging": {
        "level": "INFO",
        "max_bytes": 5_000_000,
        "backups": 7,
    },
}


def settings_file() -> Path:
    return config_dir() / SETTINGS_NAME


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
    url = os.environ.get("TASKSYNC_API_URL")
    if url:
        data["api"]["base_url"] = url
    timeout = os.environ.get("TASKSYNC_API_TIMEOUT")
    if timeout:
        try:
            data["api"]["timeout"] = float(timeout)
        except ValueError:
            pass
    return data


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    data = copy.deepcopy(_DEFAULTS)
    if path.exists():
        try:
            data = _merge(_DEFAULTS, json.loads(path.read_text()))
        except (OSError, ValueError):
            data = copy.deepcopy(_DEFAULTS)
    return _apply_env(data)


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
