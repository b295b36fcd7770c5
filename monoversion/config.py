#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import toml
import yaml

from .domain.version import Increment
from .exit_codes import ConfigError

logger = logging.getLogger("monoversion")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
PROJECT_CONFIG_FILENAMES = [
    '.monoversion.toml',
    '.monoversion.json',
    '.monoversion.yaml',
    '.monoversion.yml',
]


def configure_logging(level="WARNING", fmt="%(levelname)s: %(message)s"):
    """Send monoversion log records to stderr; stdout is reserved for the version."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.handlers = [handler]
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. MONOVERSION_CONFIG environment variable
    2. .monoversion.{toml,json,yaml,yml} in the working directory
    3. ~/.monoversion/ directory
    """
    # Check for environment variable override
    if 'MONOVERSION_CONFIG' in os.environ:
        path = Path(os.environ['MONOVERSION_CONFIG'])
        if path.exists():
            return path
        logger.warning(f"MONOVERSION_CONFIG points to missing file {path}")

    # Project-level file next to the repository
    for filename in PROJECT_CONFIG_FILENAMES:
        path = Path.cwd() / filename
        if path.exists():
            return path

    monoversion_dir = Path.home() / '.monoversion'
    for filename in CONFIG_FILENAMES:
        path = monoversion_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return monoversion_dir / 'config.json'


def _read_config_file(config_path):
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ['.yaml', '.yml']:
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    with open(config_path, 'r') as f:
        return json.load(f)


def load_config():
    """Load configuration from file.

    Raises:
        ConfigError: If the config file exists but cannot be parsed
    """
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            file_config = _read_config_file(config_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        logger.debug(f"Loaded config from {config_path}")
        # Merge file config with defaults
        config = merge_configs(config, file_config)

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def save_config(config, config_path=None):
    """Save configuration to file."""
    config_path = Path(config_path) if config_path else get_config_path()

    # Create directory if it doesn't exist
    config_path.parent.mkdir(parents=True, exist_ok=True)

    if config_path.suffix.lower() in ['.toml']:
        with open(config_path, 'w') as f:
            toml.dump(config, f)
    elif config_path.suffix.lower() in ['.yaml', '.yml']:
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        # Default to JSON format
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def get_default_config():
    """Get default configuration."""
    return {
        "branches": {
            "stable": "main",
            "stable_ref": None,             # Ref for the stable branch, e.g. "origin/main"
            "feature_prefixes": ["feature/", "topic/", "task/"],
            "hotfix_prefixes": ["hotfix/"]
        },
        "increments": {
            "default": "patch",             # Commits without a +semver directive
            "feature": "minor",             # Pre-release bump on feature/topic/task branches
            "hotfix": "patch"               # Pre-release bump on hotfix branches
        },
        "tags": {
            "remote": "origin",
            "push": True,
            "annotate": False
        },
        "git": {
            "timeout": None
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        }
    }


def get_increment(config, key, default="patch"):
    """Read increments.<key> as an Increment.

    Raises:
        ConfigError: If the value is not major, minor or patch
    """
    name = config.get('increments', {}).get(key, default)
    try:
        return Increment.from_name(str(name))
    except ValueError as e:
        raise ConfigError(f"Invalid increments.{key} in configuration: {e}") from e


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


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: MONOVERSION_SECTION_KEY
    For example: MONOVERSION_BRANCHES_STABLE=trunk
    """
    env_prefix = "MONOVERSION_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == "MONOVERSION_CONFIG":
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

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
                    current_level[matched_key] = typed_value
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
