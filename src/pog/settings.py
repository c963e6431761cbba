"""Settings storage for the pog command line.

Stores a small JSON settings file in a per-user application data location
and layers environment overrides (``POG_*``, optionally read from a
``.env`` file) on top of it. Writes use an atomic replace; on POSIX
systems the settings directory and file are created with restrictive
permissions where possible.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values, find_dotenv

logger = logging.getLogger(__name__)

_APP_NAME = "pog"
_SETTINGS_FILE = "settings.json"

DEFAULTS: Dict[str, Any] = {
    "digest": "sha256",
    "hash_format": "hex",
    "salt_length": 8,
    "salt_placement": "suffix",
    "password_length": 8,
    "strength_level": "medium_low",
    "random_source": "system",
}

_INT_KEYS = {"salt_length", "password_length"}

ENV_PREFIX = "POG_"


def _get_user_data_dir() -> Path:
    """Return a platform-appropriate per-user data directory for the app."""
    system = platform.system()
    home = Path.home()
    if system == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / _APP_NAME
        return home / f".{_APP_NAME}"
    if system == "Darwin":
        return home / "Library" / "Application Support" / _APP_NAME
    # Linux / other: honor XDG_DATA_HOME if set
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / _APP_NAME
    return home / ".local" / "share" / _APP_NAME


def ensure_settings_dir() -> Path:
    d = _get_user_data_dir()
    d.mkdir(parents=True, exist_ok=True)
    if os.name == "posix":
        try:
            d.chmod(0o700)
        except OSError:
            logger.debug("could not restrict permissions on %s", d)
    return d


def settings_path() -> Path:
    return ensure_settings_dir() / _SETTINGS_FILE


def load_settings() -> Dict[str, Any]:
    p = settings_path()
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable settings file %s: %s", p, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring settings file %s: top level is not an object", p)
        return {}
    return data


def save_settings(data: Dict[str, Any]) -> None:
    p = settings_path()
    # atomic write: write to temp then replace
    tmp = p.with_suffix(".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        if os.name == "posix":
            tmp.chmod(0o600)
        os.replace(str(tmp), str(p))
    finally:
        if tmp.exists():
            tmp.unlink()
    logger.debug("saved settings to %s", p)


def get_setting(key: str, default: Optional[Any] = None) -> Any:
    s = load_settings()
    return s.get(key, default)


def set_setting(key: str, value: Any) -> None:
    s = load_settings()
    s[key] = value
    save_settings(s)


def reset_setting(key: str) -> None:
    """Remove a stored key so its default applies again."""
    s = load_settings()
    if key in s:
        del s[key]
        save_settings(s)


def _coerce(key: str, value: Any) -> Any:
    if key in _INT_KEYS:
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("ignoring non-integer %s=%r", key, value)
            return DEFAULTS[key]
    return value


def env_overrides(dotenv: bool = True) -> Dict[str, Any]:
    """``POG_*`` values from the environment, falling back to a ``.env`` file.

    The ``.env`` file is read without modifying ``os.environ``.
    """
    source: Dict[str, Optional[str]] = {}
    if dotenv:
        path = find_dotenv(usecwd=True)
        if path:
            source.update(dotenv_values(path))
    source.update(os.environ)
    out = {}
    for key in DEFAULTS:
        val = source.get(ENV_PREFIX + key.upper())
        if val is not None and val != "":
            out[key] = val
    return out


def effective_settings(dotenv: bool = True) -> Dict[str, Any]:
    """Defaults, then the settings file, then ``POG_*`` environment variables."""
    merged = dict(DEFAULTS)
    for key, value in load_settings().items():
        if key in DEFAULTS:
            merged[key] = value
    merged.update(env_overrides(dotenv))
    return {k: _coerce(k, v) for k, v in merged.items()}
