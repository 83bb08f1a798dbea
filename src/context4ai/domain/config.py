from __future__ import annotations

"""
Configuration Domain Management.

Handles the dict-based runtime configuration that drives the context
assembly pipeline, with JSON persistence of the last session under the
user data directory.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from context4ai.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_ALWAYS_HIDE_GLOBS,
    DEFAULT_ALWAYS_SHOW_GLOBS,
    DEFAULT_CORE_IGNORE_GLOBS,
    DEFAULT_EXPLORER_IGNORE_GLOBS,
    DEFAULT_HIDE_CHILDREN_GLOBS,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL_KEY,
    DEFAULT_SHOW_IF_SELECTED_GLOBS,
    TREE_MODE_SELECTED,
)
from context4ai.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_file() -> str:
    """Resolve the absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "project_root": os.getcwd(),
        "tree_mode": TREE_MODE_SELECTED,
        "max_tokens": DEFAULT_MAX_TOKENS,
        "target_model": DEFAULT_MODEL_KEY,

        # Scan rules
        "core_ignore_globs": list(DEFAULT_CORE_IGNORE_GLOBS),
        "explorer_ignore_globs": list(DEFAULT_EXPLORER_IGNORE_GLOBS),
        "hide_children_globs": list(DEFAULT_HIDE_CHILDREN_GLOBS),

        # Project tree output rules
        "always_show_globs": list(DEFAULT_ALWAYS_SHOW_GLOBS),
        "always_hide_globs": list(DEFAULT_ALWAYS_HIDE_GLOBS),
        "show_if_selected_globs": list(DEFAULT_SHOW_IF_SELECTED_GLOBS),

        # Toggleable glob groups: {"name": {"items": [...], "visible": bool}}
        "file_groups": {},
    }


def get_hidden_group_globs(config: Dict[str, Any]) -> List[str]:
    """
    Collect the globs of every file group switched off by the user.

    Args:
        config: Runtime configuration.

    Returns:
        List[str]: Globs to append to the core ignore rules.
    """
    globs: List[str] = []
    groups = config.get("file_groups") or {}
    for name, group in groups.items():
        if not isinstance(group, dict):
            logger.warning(f"Ignoring malformed file group '{name}'.")
            continue
        if group.get("visible", True) is False:
            globs.extend(str(g) for g in group.get("items", []) or [])
    return globs


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the last session configuration from disk, merged over defaults.

    Args:
        path: Optional explicit JSON file. Defaults to the user data directory.

    Returns:
        Dict[str, Any]: The loaded configuration or defaults on failure.
    """
    defaults = get_default_config()
    config_file = path or get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    session = data.get("last_session", data)
    if isinstance(session, dict):
        defaults.update(session)
    return defaults


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the provided config as the 'last_session'.

    Args:
        config: The configuration dictionary to save.
        path: Optional explicit JSON file.
    """
    config_file = path or get_config_file()
    state = {"version": CURRENT_CONFIG_VERSION, "last_session": config}
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_file)), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
