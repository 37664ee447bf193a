#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path
from typing import Optional

import logging
import sys

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ['config.toml', 'config.json', 'config.yaml', 'config.yml']
PROJECT_CONFIG_FILENAMES = ['.gitcontext.toml', '.gitcontext.json', '.gitcontext.yaml', '.gitcontext.yml']


def get_config_path() -> Optional[Path]:
    """Get the path to the configuration file.

    Checks in order:
    1. GITCONTEXT_CONFIG environment variable
    2. .gitcontext.* in the current directory (project config)
    3. ~/.gitcontext/ directory (user config)

    Returns None when no configuration file exists.
    """
    # Check for environment variable override
    if 'GITCONTEXT_CONFIG' in os.environ:
        path = Path(os.environ['GITCONTEXT_CONFIG']).expanduser()
        if path.exists():
            return path
        logger.debug(f"GITCONTEXT_CONFIG points to missing file {path}")

    # Project config next to the sources being built
    for filename in PROJECT_CONFIG_FILENAMES:
        path = Path.cwd() / filename
        if path.is_file():
            return path

    # User config
    user_dir = Path.home() / '.gitcontext'
    for filename in CONFIG_FILENAMES:
        path = user_dir / filename
        if path.is_file():
            return path

    return None


def get_default_config():
    """Get default configuration."""
    return {
        "reader": {
            "strict": False,        # Raise instead of falling back to defaults
            "directory": None,      # Start directory for .git discovery (None: cwd)
        },
        "generate": {
            "output": "_gitcontext.py",
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s",
        },
    }


def read_config_file(config_path: Path) -> dict:
    """
    Parse a configuration file based on its suffix.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        if config_path.suffix.lower() == '.toml':
            with open(config_path, 'rb') as f:
                file_config = tomllib.load(f)
        elif config_path.suffix.lower() in ['.yaml', '.yml']:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f)
        else:
            # Default to JSON format
            with open(config_path, 'r') as f:
                file_config = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config from {config_path}: {e}") from e

    if file_config is None:
        return {}
    if not isinstance(file_config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return file_config


def load_config(config_path: Optional[Path] = None):
    """Load configuration from file, defaults and environment."""
    if config_path is None:
        config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path is not None:
        config = merge_configs(config, read_config_file(Path(config_path)))
        logger.debug(f"Loaded config from {config_path}")

    # Apply environment variable overrides
    return apply_env_overrides(config)


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def convert_env_value(value, current):
    """
    Convert an environment string to the type of the setting it replaces.

    Only boolean and integer settings are converted. Paths and other strings
    are kept verbatim, so GITCONTEXT_READER_DIRECTORY=2024 stays "2024".
    """
    if isinstance(current, bool):
        if value.lower() in ('true', '1', 'yes', 'on'):
            return True
        if value.lower() in ('false', '0', 'no', 'off'):
            return False
        raise ConfigError(f"Expected a boolean, got {value!r}")
    if isinstance(current, int) and value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GITCONTEXT_SECTION_KEY
    For example: GITCONTEXT_READER_STRICT=true
    """
    env_prefix = "GITCONTEXT_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts_from_key = config_key.split('_')
                if key_parts[i : i + len(config_key_parts_from_key)] == config_key_parts_from_key:
                    if len(config_key_parts_from_key) > best_match_len:
                        best_match_len = len(config_key_parts_from_key)
                        matched_key = config_key

            if matched_key:
                # If we are at the end of the env var, we have found the key to set
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = convert_env_value(value, current_level[matched_key])
                    break

                # Otherwise, we descend into the dictionary
                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                # No match found
                break

    return config


def setup_logging(config=None):
    """Configure the root logger from the 'logging' config section."""
    if config is None:
        config = get_default_config()
    logging_config = config.get('logging', {})

    level_name = str(logging_config.get('level', 'WARNING')).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        raise ConfigError(f"Invalid logging level: {level_name!r}")

    logging.basicConfig(
        level=level,
        format=logging_config.get('format', "%(levelname)s: %(message)s"),
        handlers=[
            logging.StreamHandler(sys.stderr)  # Default to stderr
        ],
        force=True,
    )
