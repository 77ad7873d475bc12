import json
import logging
import math
import os
import traceback
from typing import Any, Dict

import click

from social_login.auth.contracts import AdapterError

DEBUG_ENV_VAR = "SOCIAL_LOGIN_DEBUG"


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Get a boolean flag from an environment variable.

    Args:
        env_var: Name of the environment variable
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to "1", "true", or "yes" (case insensitive)
        False otherwise
    """
    value = os.environ.get(env_var, "").lower()
    return value in ("1", "true", "yes") if value else default


def configure_logging(debug: bool = False) -> None:
    """Configure logging for all modules.

    Args:
        debug: Whether to enable debug logging
    """
    if not debug:
        debug = get_env_flag(DEBUG_ENV_VAR)

    log_level = logging.DEBUG if debug else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def format_error(error: Exception, debug: bool = False) -> Dict[str, Any]:
    """Format an error for output.

    Args:
        error: The exception that occurred
        debug: Whether to include debug information

    Returns:
        Dict containing error information
    """
    error_info: Dict[str, Any] = {"error": str(error)}

    if isinstance(error, AdapterError):
        details = error.to_dict()
        error_info["provider"] = details["provider"]
        error_info["type"] = details["type"]
        error_info["cause"] = details["error"]

    if debug:
        error_info["traceback"] = traceback.format_exc()
        error_info["exception"] = error.__class__.__name__

    return error_info


def to_json_value(value: Any) -> Any:
    """Replace non-finite floats (e.g. a token that never expires) with ``None``.

    Strict JSON has no Infinity or NaN, so they are written as ``null``.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    return value


def output_result(result: Any, json_output: bool = False) -> None:
    """Output a result in either JSON or human-readable format.

    Args:
        result: The result to output; mappings are printed one ``key: value`` per line
        json_output: Whether to output in JSON format
    """
    if json_output:
        print(
            json.dumps(
                {"status": "ok", "result": to_json_value(result)},
                indent=2,
                default=str,
                allow_nan=False,
            )
        )
    elif isinstance(result, dict):
        for key, value in result.items():
            if isinstance(value, dict):
                click.echo(f"{key}:")
                for sub_key, sub_value in value.items():
                    click.echo(f"  {sub_key}: {sub_value}")
            else:
                click.echo(f"{key}: {value}")
    else:
        click.echo(result)


def output_error(error: Exception, json_output: bool = False, debug: bool = False) -> None:
    """Output an error in either JSON or human-readable format.

    Args:
        error: The exception that occurred
        json_output: Whether to output in JSON format
        debug: Whether to include debug information
    """
    error_info = format_error(error, debug)

    if json_output:
        print(
            json.dumps(
                {"status": "error", **to_json_value(error_info)},
                indent=2,
                default=str,
                allow_nan=False,
            )
        )
    else:
        click.echo(f"Error: {error_info['error']}", err=True)
        if debug and "traceback" in error_info:
            click.echo("\nTraceback:", err=True)
            click.echo(error_info["traceback"], err=True)

    raise click.Abort()
