import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from social_login.auth.models import GitHubLoginConfigModel
from social_login.config.references import interpolate_env

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SOCIAL_LOGIN_CONFIG"

__all__ = ["CONFIG_ENV_VAR", "default_config_path", "load_login_config"]


def default_config_path() -> Path:
    """Return ``$SOCIAL_LOGIN_CONFIG`` or ``~/.social-login/config.yml``."""
    return Path(os.environ.get(CONFIG_ENV_VAR, Path.home() / ".social-login" / "config.yml"))


def load_login_config(
    path: str | Path | None = None, resolve_refs: bool = True
) -> GitHubLoginConfigModel:
    """Load the GitHub adapter configuration from a YAML file.

    The file holds a ``github`` section:

        github:
          app_id: ${GITHUB_CLIENT_ID}
          redirect_uri: https://app.example.com/login
          relay_base_url: https://gatekeeper.example.com

    Args:
        path: Config file; defaults to ``$SOCIAL_LOGIN_CONFIG`` or
            ``~/.social-login/config.yml``
        resolve_refs: Whether to resolve ``${ENV_VAR}`` references

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the file is malformed, a referenced environment variable
            is not set, or the ``github`` section is invalid
    """
    config_path = Path(path) if path is not None else default_config_path()
    logger.debug(f"Looking for login config at: {config_path}")

    if not config_path.exists():
        raise FileNotFoundError(f"Social login config not found at {config_path}")

    with open(config_path) as f:
        config_data = yaml.safe_load(f) or {}

    if not isinstance(config_data, dict):
        raise ValueError("Social login config must be a mapping")

    section: Any = config_data.get("github")
    if not isinstance(section, dict):
        raise ValueError(f"Missing 'github' section in {config_path}")

    if resolve_refs:
        section = interpolate_env(section)

    try:
        return GitHubLoginConfigModel.model_validate(section)
    except ValidationError as exc:
        raise ValueError(f"Invalid login config: {exc}") from exc
