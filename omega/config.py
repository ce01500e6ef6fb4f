"""Persistent JSON config helpers.

Stores the fallback key root, dirty-title marker, log level and the last
opened project. Malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .paths import DEFAULT_FALLBACK_ROOT
from .session import DIRTY_MARKER

logger = logging.getLogger(__name__)

APP_NAME = "omega"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_fallback_root() -> Path:
    """Key used for paths that cannot be canonicalized; must be absolute."""
    value = load_config().get("fallback_root")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_FALLBACK_ROOT
    candidate = Path(value.strip()).expanduser()
    return candidate if candidate.is_absolute() else DEFAULT_FALLBACK_ROOT


def load_dirty_marker() -> str:
    value = load_config().get("dirty_marker")
    if not isinstance(value, str) or not value.strip():
        return DIRTY_MARKER
    return value


def load_log_level() -> str | None:
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return None
    level = value.strip().upper()
    return level if level in LOG_LEVEL_NAMES else None


def load_last_project() -> Path | None:
    value = load_config().get("last_project")
    if not isinstance(value, str) or not value:
        return None
    return Path(value)


def save_last_project(project_root: Path) -> None:
    config = load_config()
    config["last_project"] = str(project_root)
    save_config(config)
