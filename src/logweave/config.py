"""Configuration management for logweave.

Three-layer config resolution (highest priority wins):
  1. Explicit overrides — keyword arguments passed by the host program
  2. Project config — .logweave.json in the working directory or above
  3. Global config — ~/.logweave/config.json

Anything still unset falls back to DEFAULTS.
"""

import json
import os
from pathlib import Path

from logweave.lib.hook_lib.levels import VERBOSITIES


PROJECT_CONFIG_NAME = ".logweave.json"

DEFAULTS = {
    "verbosity": "info",
    "prefix": None,
    "timestamps": True,
}


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.logweave/)."""
    return Path.home() / ".logweave"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .logweave.json.

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
    """Load a JSON object from path, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config():
    """Load the global config file."""
    return load_json(get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .logweave.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_config(overrides=None, start_dir=None):
    """Resolve logger settings using three-layer precedence.

    Only keys in DEFAULTS are resolved; unknown keys in files are ignored.
    An override of None counts as unset.

    Raises:
        ValueError: if the resolved verbosity is not a known verbosity
    """
    overrides = overrides or {}
    project_cfg, _ = load_project_config(start_dir)
    global_cfg = load_global_config()

    resolved = {}
    for key, default in DEFAULTS.items():
        for layer in (overrides, project_cfg, global_cfg):
            value = layer.get(key)
            if value is not None:
                resolved[key] = value
                break
        else:
            resolved[key] = default

    if resolved["verbosity"] not in VERBOSITIES:
        raise ValueError(f"Unknown verbosity {resolved['verbosity']!r} in config")
    return resolved


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_project_config(data, project_dir=None):
    """Write .logweave.json to the project directory."""
    target = Path(project_dir or os.getcwd()) / PROJECT_CONFIG_NAME
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return target


def save_global_config(data):
    """Write the global config file."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = get_global_config_path()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return config_path
