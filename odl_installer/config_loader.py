# odl_installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the installer.

Handles loading settings from Pydantic model defaults, environment variables,
a YAML file and command-line options, applying this order of precedence
(lowest first):
1. Pydantic Model Defaults
2. Environment Variables (ODL_ prefix, loaded by BaseSettings)
3. YAML Configuration File
4. Command-Line Options
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from odl_installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively update ``source`` with ``overrides``.

    Nested dictionaries are merged key by key. ``None`` values in
    ``overrides`` never replace an existing value, so unset CLI options leave
    lower-precedence values alone.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def load_yaml_config(
    config_file_path: Union[str, Path],
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Read a YAML mapping from ``config_file_path``.

    A missing file yields {}. A file that is not a mapping is ignored with a
    warning; a file that cannot be parsed aborts.
    """
    logger_to_use = current_logger if current_logger else module_logger
    path = Path(config_file_path)

    if not path.is_file():
        logger_to_use.info(
            f"Configuration file '{path}' not found. Using defaults, environment variables, and CLI options."
        )
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.error(f"Could not parse YAML config file '{path}': {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {path}")
    return yaml_data


def load_app_settings(
    cli_overrides: Optional[Dict[str, Any]] = None,
    config_file_path: Union[str, Path] = DEFAULT_CONFIG_FILE,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Load the fully resolved application settings.

    Args:
        cli_overrides: Setting values taken from command-line options. Keys
            follow AppSettings field names; None values are ignored.
        config_file_path: Path to the YAML configuration file.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        The validated AppSettings.

    Raises:
        SystemExit: The merged configuration does not validate.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        # Defaults < environment variables.
        env_settings = AppSettings()
    except ValidationError as e:
        logger_to_use.error(f"Invalid environment configuration: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    current_values = env_settings.model_dump()
    # Excluded from dumps; carried over explicitly.
    current_values["password"] = env_settings.password

    current_values = _deep_update(
        current_values, load_yaml_config(config_file_path, logger_to_use)
    )
    if cli_overrides:
        current_values = _deep_update(current_values, dict(cli_overrides))

    try:
        final_settings = AppSettings(**current_values)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug("Successfully loaded and validated application settings")
    return final_settings
