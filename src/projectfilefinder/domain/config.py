from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of finder settings (linked resources, symlink
policy and diagnostics) as JSON, with default fallback on missing or
corrupted files.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from projectfilefinder.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_config_file() -> str:
    """Default location of the persisted configuration."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Project model
        "linked_resources": {},
        "follow_symlinks": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration from disk, merged over the defaults.

    Args:
        path: JSON file to read. Defaults to the user data directory file.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults on failure.
    """
    config_path = path or get_config_file()
    conf = get_default_config()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at '{config_path}'. Using defaults.")
        return conf

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config from '{config_path}': {e}. Using defaults.")
        return conf

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{config_path}'. Using defaults.")
        return conf

    conf.update(data)
    return conf


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist the configuration as JSON.

    Args:
        config: Configuration dictionary to save.
        path: Target file. Defaults to the user data directory file.

    Returns:
        bool: True when the file was written.
    """
    config_path = path or get_config_file()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration to '{config_path}': {e}")
        return False

    logger.debug(f"Configuration saved to {config_path}")
    return True
