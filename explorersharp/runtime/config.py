"""Persistent JSON settings helpers.

Stores the two flattening flags and the hidden-folder list of each workspace.
All reads are defensive: malformed or missing settings fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..explorer_model import ExplorerSettings

logger = logging.getLogger(__name__)

APP_NAME = "explorersharp"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

FLATTEN_SINGLE_FILE_KEY = "flatten_single_file_directories"
FLATTEN_SINGLE_CHILD_KEY = "flatten_single_child_directories"
WORKSPACES_KEY = "workspaces"
HIDDEN_FOLDERS_KEY = "hidden_folders"


def _resolve_config_path(config_path: Path | None) -> Path:
    return config_path if config_path is not None else CONFIG_PATH


def load_config(config_path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = _resolve_config_path(config_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object], config_path: Path | None = None) -> bool:
    """Persist config data as pretty-printed JSON.

    Returns ``False`` (after logging) when the file cannot be written, so
    callers can keep running with in-memory state.
    """
    path = _resolve_config_path(config_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        logger.warning("Failed to write settings file %s", path, exc_info=True)
        return False
    return True


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    """Only explicit booleans are accepted; anything else is the default."""
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _workspace_key(root: Path) -> str:
    return str(root.resolve())


def _workspace_section(data: dict[str, object], root: Path) -> dict[str, object]:
    workspaces = data.get(WORKSPACES_KEY)
    if not isinstance(workspaces, dict):
        return {}
    section = workspaces.get(_workspace_key(root))
    return section if isinstance(section, dict) else {}


def _hidden_from_section(section: dict[str, object]) -> list[str]:
    value = section.get(HIDDEN_FOLDERS_KEY)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


def load_hidden_folders(root: Path, config_path: Path | None = None) -> list[str]:
    """Return hidden relative paths for the workspace at ``root``.

    Non-string and empty entries are dropped; order is preserved.
    """
    return _hidden_from_section(_workspace_section(load_config(config_path), root))


def save_hidden_folders(root: Path, hidden: list[str], config_path: Path | None = None) -> bool:
    """Replace the hidden-folder list of the workspace at ``root``."""
    config = load_config(config_path)
    workspaces = config.get(WORKSPACES_KEY)
    if not isinstance(workspaces, dict):
        workspaces = {}
    key = _workspace_key(root)
    section = workspaces.get(key)
    if not isinstance(section, dict):
        section = {}
    section[HIDDEN_FOLDERS_KEY] = [str(item) for item in hidden]
    workspaces[key] = section
    config[WORKSPACES_KEY] = workspaces
    return save_config(config, config_path)


def load_settings(root: Path, config_path: Path | None = None) -> ExplorerSettings:
    """Read one listing-settings snapshot for the workspace at ``root``."""
    config = load_config(config_path)
    return ExplorerSettings(
        hidden_folders=frozenset(_hidden_from_section(_workspace_section(config, root))),
        flatten_single_file=_load_bool(config, FLATTEN_SINGLE_FILE_KEY, True),
        flatten_single_child=_load_bool(config, FLATTEN_SINGLE_CHILD_KEY, True),
    )


def save_flatten_single_file(enabled: bool, config_path: Path | None = None) -> bool:
    """Persist whether single-file folders collapse into their file."""
    config = load_config(config_path)
    config[FLATTEN_SINGLE_FILE_KEY] = bool(enabled)
    return save_config(config, config_path)


def save_flatten_single_child(enabled: bool, config_path: Path | None = None) -> bool:
    """Persist whether single-child folder chains collapse."""
    config = load_config(config_path)
    config[FLATTEN_SINGLE_CHILD_KEY] = bool(enabled)
    return save_config(config, config_path)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_hidden_folders",
    "save_hidden_folders",
    "load_settings",
    "save_flatten_single_file",
    "save_flatten_single_child",
]
