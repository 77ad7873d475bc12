"""
Environment variable references in configuration values.

Values may embed ``${ENV_VAR}`` references, which are resolved from the
process environment when the configuration is loaded.
"""
import logging
import os
import re
from typing import Any

logger = logging.getLogger(__name__)

ENV_VAR_PATTERN = re.compile(r"\${([A-Za-z0-9_]+)}")


def is_env_reference(value: Any) -> bool:
    """Check if a value contains an ``${ENV_VAR}`` reference."""
    if not isinstance(value, str):
        return False
    return ENV_VAR_PATTERN.search(value) is not None


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string.

    Args:
        value: String potentially containing ${ENV_VAR} references

    Returns:
        String with all environment variables resolved

    Raises:
        ValueError: If an environment variable is not set
    """
    matches = ENV_VAR_PATTERN.findall(value)
    if not matches:
        return value

    result = value
    for env_var in matches:
        if env_var not in os.environ:
            raise ValueError(f"Environment variable {env_var} is not set")
        result = result.replace(f"${{{env_var}}}", os.environ[env_var])

    return result


def interpolate_env(config: Any) -> Any:
    """Recursively resolve ``${ENV_VAR}`` references in a loaded configuration."""
    if isinstance(config, dict):
        return {key: interpolate_env(value) for key, value in config.items()}
    if isinstance(config, list):
        return [interpolate_env(item) for item in config]
    if is_env_reference(config):
        logger.debug("Resolving environment reference in configuration value")
        return resolve_env_var(config)
    return config
