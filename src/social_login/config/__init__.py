from .login_config import CONFIG_ENV_VAR, default_config_path, load_login_config
from .references import interpolate_env, resolve_env_var

__all__ = [
    "CONFIG_ENV_VAR",
    "default_config_path",
    "interpolate_env",
    "load_login_config",
    "resolve_env_var",
]
