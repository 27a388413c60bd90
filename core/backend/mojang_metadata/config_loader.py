"""
Configuration Loader

Loads and validates client settings from YAML files.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional

import yaml

from .config import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_PROGRAM_NAME,
    DEFAULT_TIMEOUT_MS,
    ENDPOINTS,
    USER_CONFIG_FILE,
)

logger = logging.getLogger(__name__)


def get_config_paths() -> list[Path]:
    """
    Get list of config file paths to check in priority order

    Returns:
        List of paths to check (first found wins)
    """
    return [
        # 1. User config directory
        USER_CONFIG_FILE,
        # 2. Current working directory
        Path.cwd() / "config.yaml",
    ]


def default_config() -> Dict:
    return {
        'program_name': DEFAULT_PROGRAM_NAME,
        'timeout_ms': DEFAULT_TIMEOUT_MS,
        'max_workers': DEFAULT_MAX_WORKERS,
        'endpoints': dict(ENDPOINTS),
    }


def load_config(config_path: Optional[Path] = None) -> Dict:
    """
    Load configuration from YAML file

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Configuration dict with program_name, timeout_ms, max_workers, endpoints
    """
    config = default_config()

    # Determine which config file to use
    if config_path:
        config_files = [Path(config_path)]
    else:
        config_files = get_config_paths()

    loaded_from = None
    for path in config_files:
        if path.exists():
            loaded_from = path
            break

    if not loaded_from:
        logger.info("No config file found, using defaults")
        return config

    logger.info(f"Loading configuration from: {loaded_from}")

    try:
        with open(loaded_from, 'r') as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML config: {e}")
        logger.info("Falling back to defaults")
        return config
    except OSError as e:
        logger.error(f"Error loading config: {e}")
        logger.info("Falling back to defaults")
        return config

    if not user_config:
        logger.warning(f"Config file {loaded_from} is empty")
        return config

    if not isinstance(user_config, dict):
        logger.error(f"Config file {loaded_from} must contain a mapping")
        return config

    # Process environment variable substitution
    user_config = substitute_env_vars(user_config)

    # Merge user config with defaults
    for key in ('program_name', 'timeout_ms', 'max_workers'):
        if key in user_config:
            config[key] = user_config[key]

    # Values substituted from the environment arrive as strings
    for key in ('timeout_ms', 'max_workers'):
        if isinstance(config[key], str) and config[key].strip().isdigit():
            config[key] = int(config[key])

    if isinstance(user_config.get('endpoints'), dict):
        config['endpoints'].update(user_config['endpoints'])

    return config


def substitute_env_vars(config: Dict) -> Dict:
    """
    Substitute environment variables in config values

    Handles patterns like:
    - ${ENV_VAR}
    - ${ENV_VAR:-default_value}

    Args:
        config: Configuration dict

    Returns:
        Config with environment variables substituted
    """
    pattern = r'\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}'

    def replacer(match):
        var_name = match.group(1)
        default_value = match.group(2) or ""
        return os.environ.get(var_name, default_value)

    def substitute_value(value):
        if isinstance(value, str):
            return re.sub(pattern, replacer, value)
        elif isinstance(value, dict):
            return {k: substitute_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [substitute_value(item) for item in value]
        else:
            return value

    return substitute_value(config)


def validate_config(config: Dict) -> tuple[bool, list[str]]:
    """
    Validate configuration structure

    Args:
        config: Configuration dict to validate

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []

    program_name = config.get('program_name')
    if not isinstance(program_name, str) or not program_name.strip():
        errors.append("'program_name' must be a non-empty string")

    for key in ('timeout_ms', 'max_workers'):
        value = config.get(key)
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            errors.append(f"'{key}' must be a positive integer (got {value!r})")

    endpoints = config.get('endpoints', {})
    if not isinstance(endpoints, dict):
        errors.append("'endpoints' must be a mapping")
    else:
        for name, url in endpoints.items():
            if name not in ENDPOINTS:
                errors.append(f"Unknown endpoint '{name}'")
            elif not isinstance(url, str) or not url.startswith(('http://', 'https://')):
                errors.append(f"Endpoint '{name}' must be an http(s) URL (got {url!r})")

    is_valid = len(errors) == 0
    return is_valid, errors


def save_config(config: Dict, config_path: Optional[Path] = None) -> bool:
    """
    Save configuration to YAML file

    Args:
        config: Configuration dict to save
        config_path: Optional path to save to (defaults to user config)

    Returns:
        True if saved successfully
    """
    if not config_path:
        config_path = USER_CONFIG_FILE
    config_path = Path(config_path)

    try:
        # Create directory if it doesn't exist
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w') as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)

        logger.info(f"✓ Configuration saved to: {config_path}")
        return True

    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to save config: {e}")
        return False
