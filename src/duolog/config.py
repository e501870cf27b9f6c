"""Settings management for duolog.

In-memory key=value settings seeded with defaults, then layered
(highest priority wins):
  1. CLI flags — explicit on the command line
  2. Project config — nearest .duolog.json walking up from the cwd
  3. Global config — ~/.duolog/config.json
  4. Built-in defaults

Keys are dotted ("app.log_name"). JSON files may use dotted keys or
nested objects; {"file": {"filter": "error"}} sets "file.filter".
"""

import json
import os
from pathlib import Path

from duolog._version import BASE_VERSION, __app_name__


PROJECT_CONFIG_NAME = ".duolog.json"

DEFAULT_SETTINGS = {
    "app.name": __app_name__,
    "app.version": BASE_VERSION,
    "app.log_name": f"{__app_name__}.log",
    "console.filter": "all",
    "file.filter": "all",
}


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.duolog/)."""
    return Path.home() / ".duolog"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .duolog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def flatten(data, prefix=""):
    """Flatten nested dicts into dotted keys."""
    flat = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


def load_global_config():
    """Load the global config file as flat settings."""
    return flatten(load_json(get_global_config_path()))


def load_project_config(start_dir=None):
    """Load the nearest .duolog.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return flatten(load_json(path)), path
    return {}, None


# ---------------------------------------------------------------------------
# Settings store
# ---------------------------------------------------------------------------
class Settings:
    """In-memory settings map seeded with defaults."""

    def __init__(self, defaults=None):
        self._values = dict(DEFAULT_SETTINGS if defaults is None else defaults)

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = value

    def update(self, values):
        """Overlay values; None entries are ignored so unset flags don't mask."""
        for key, value in values.items():
            if value is not None:
                self._values[key] = value

    def as_dict(self):
        return dict(self._values)


def resolve_settings(overrides=None, start_dir=None):
    """Resolve settings using the four-layer precedence.

    Args:
        overrides: Dict of dotted keys from the CLI (None values skipped)
        start_dir: Where to start looking for .duolog.json

    Returns:
        Settings with every layer applied.
    """
    settings = Settings()
    settings.update(load_global_config())
    project_cfg, _ = load_project_config(start_dir)
    settings.update(project_cfg)
    settings.update(overrides or {})
    return settings
