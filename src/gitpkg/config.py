"""Configuration file loading and runtime overrides.

A config file (YAML or JSON) may override the tunables held on Constants.
Keys live either at the top level or under a ``gitpkg:`` section.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from gitpkg.constants import Constants
from gitpkg.errors import ConfigError

logger = logging.getLogger(__name__)

# Config key -> Constants attribute
CONFIG_KEYS = {
    "manifest_file": "MANIFEST_FILE",
    "install_dir": "INSTALL_DIR",
    "native_build_file": "NATIVE_BUILD_FILE",
    "native_build_command": "NATIVE_BUILD_COMMAND",
    "git_binary": "GIT_BINARY",
}


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML or JSON file.

    Args:
        config_path: Path to the config file.

    Returns:
        Configuration dict; empty when no path is given or the file is missing.

    Raises:
        ConfigError: The file exists but is not valid YAML or JSON.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, ValueError) as err:
            raise ConfigError(config_path, str(err)) from err

    if not isinstance(data, dict):
        return {}
    section = data.get("gitpkg", data)
    return section if isinstance(section, dict) else {}


def apply_config_overrides(config: Dict[str, Any]) -> None:
    """Apply configuration values onto Constants.

    Unknown keys are reported and ignored.
    """
    for key, value in config.items():
        attr = CONFIG_KEYS.get(key)
        if attr is None:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        if value is None:
            continue
        if attr == "NATIVE_BUILD_COMMAND" and not isinstance(value, (str, list)):
            logger.warning("native_build_command must be a string or list, got %r", value)
            continue
        setattr(Constants, attr, value)
        logger.debug("Config override %s=%r", attr, value)
