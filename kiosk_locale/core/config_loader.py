#!/usr/bin/env python3
"""Configuration loader with environment-based config support."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from kiosk_locale.core.config_schema import config_to_dict, validate_config
from kiosk_locale.core.logging_utils import setup_logger

logger = setup_logger(__name__)


def load_config(config_path: str | Path = "config/base.yaml") -> dict[str, Any]:
    """Load configuration from YAML files with environment-based overrides.

    Loads the base config and merges the environment-specific config from
    envs/{KIOSK_LOCALE_ENV}.yaml next to it (default: dev).

    Args:
        config_path: Path to base config file (default: config/base.yaml)

    Returns:
        Validated configuration dictionary with environment overrides applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        pydantic.ValidationError: If config values are invalid

    Environment Variables:
        KIOSK_LOCALE_ENV: Environment name (dev|prod, default: dev)
    """
    # Which envs/ overlay to apply
    env = os.getenv("KIOSK_LOCALE_ENV", "dev")

    # Base config
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    # Overlay from envs/ next to the base file
    env_config_path = config_file.parent / "envs" / f"{env}.yaml"
    if env_config_path.exists():
        logger.info(f"Loading {env} environment config")
        with open(env_config_path, encoding="utf-8") as f:
            env_config = yaml.safe_load(f)
        if env_config:
            # Overlay wins key by key
            _deep_merge(config, env_config)
    else:
        logger.debug(f"No environment config found for '{env}' (expected: {env_config_path})")

    # ${VAR} references, e.g. the production sources URL
    config = _expand_env_vars(config)

    # Fill defaults and reject bad values
    return config_to_dict(validate_config(config))


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand ${VAR} environment variables in config.

    Args:
        obj: Config object (dict, list, str, or other)

    Returns:
        Object with environment variables expanded
    """
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):

        # ${VAR} or $VAR
        def replace_env(match):
            var_name = match.group(1) or match.group(2)
            return os.getenv(var_name, match.group(0))  # Keep original if not found

        return re.sub(r"\$\{([^}]+)\}|\$([A-Z_][A-Z0-9_]*)", replace_env, obj)
    else:
        return obj


def _deep_merge(base: dict, override: dict):
    """Deep merge override dict into base dict in-place.

    Args:
        base: Base configuration dictionary (modified in-place)
        override: Override configuration dictionary
    """
    for key, value in override.items():
        if isinstance(value, dict) and key in base and isinstance(base[key], dict):
            # Both sides are sections
            _deep_merge(base[key], value)
        else:
            # Scalars and lists replace
            base[key] = value


def get_nested(config: dict, path: str, default: Any = None) -> Any:
    """Get nested config value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'sources.location')
        default: Default value if path not found

    Returns:
        Config value or default

    Examples:
        >>> config = {'sources': {'kind': 'file'}}
        >>> get_nested(config, 'sources.kind')
        'file'
        >>> get_nested(config, 'sources.missing', default=2)
        2
    """
    value = config

    for key in path.split("."):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def set_nested(config: dict, path: str, value: Any):
    """Set nested config value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'localization.default_language')
        value: Value to set

    Examples:
        >>> config = {}
        >>> set_nested(config, 'sources.kind', 'http')
        >>> config
        {'sources': {'kind': 'http'}}
    """
    keys = path.split(".")
    current = config

    # Walk (and create) the parent sections
    for key in keys[:-1]:
        if key not in current:
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value


# CLI argument override helpers
def override_from_args(config: dict, args):
    """Apply CLI argument overrides to config.

    Args:
        config: Configuration dictionary
        args: Parsed argparse arguments

    Common overrides:
        --sources PATH_OR_URL -> sources.location
        --http -> sources.kind ('http')
        --log-level LEVEL -> logging.level
    """
    if getattr(args, "sources", None):
        set_nested(config, "sources.location", args.sources)

    if getattr(args, "http", False):
        set_nested(config, "sources.kind", "http")

    if getattr(args, "log_level", None):
        set_nested(config, "logging.level", args.log_level.upper())
