"""Persistent JSON settings.

Stores the per-file size ceiling, git diff ceiling, and watcher timings.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .content import DEFAULT_MAX_FILE_BYTES
from .git import DEFAULT_GIT_DIFF_MAX_BYTES

APP_NAME = "codecopier"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_WATCH_DEBOUNCE_SECONDS = 1.0
DEFAULT_WATCH_POLL_SECONDS = 1.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    git_diff_max_bytes: int = DEFAULT_GIT_DIFF_MAX_BYTES
    watch_debounce_seconds: float = DEFAULT_WATCH_DEBOUNCE_SECONDS
    watch_poll_seconds: float = DEFAULT_WATCH_POLL_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks a copy operation.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write config %s: %s", CONFIG_PATH, exc)


def _positive_int(value: object) -> int | None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _positive_float(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def load_settings() -> Settings:
    """Return settings with each invalid or missing key replaced by its default."""
    data = load_config()
    defaults = Settings()
    return Settings(
        max_file_bytes=_positive_int(data.get("max_file_bytes")) or defaults.max_file_bytes,
        git_diff_max_bytes=_positive_int(data.get("git_diff_max_bytes")) or defaults.git_diff_max_bytes,
        watch_debounce_seconds=(
            _positive_float(data.get("watch_debounce_seconds")) or defaults.watch_debounce_seconds
        ),
        watch_poll_seconds=_positive_float(data.get("watch_poll_seconds")) or defaults.watch_poll_seconds,
    )


def save_settings(settings: Settings) -> None:
    """Merge ``settings`` into the persisted config, keeping unrelated keys."""
    config = load_config()
    config.update(asdict(settings))
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "Settings",
    "load_config",
    "save_config",
    "load_settings",
    "save_settings",
]
