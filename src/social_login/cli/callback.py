"""CLI command completing the redirect flow from a callback URL."""

import asyncio
from typing import Any, Dict, Optional

import click

from social_login.auth import GitHubLoginAdapter, ViewerResponse
from social_login.cli.utils import configure_logging, output_error, output_result
from social_login.config import load_login_config


@click.command(name="callback")
@click.argument("callback_url")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def callback(
    callback_url: str, config_path: Optional[str], json_output: bool, debug: bool
) -> None:
    """Exchange the code in CALLBACK_URL for a token and print the user.

    CALLBACK_URL is the full URL GitHub redirected to, including the
    rslCallback, code and state parameters.
    """
    configure_logging(debug)

    try:
        result = asyncio.run(_callback_async(callback_url, config_path))
        output_result(result, json_output)
    except click.ClickException:
        raise
    except Exception as e:
        output_error(e, json_output, debug)


async def _callback_async(callback_url: str, config_path: Optional[str]) -> Dict[str, Any]:
    adapter = GitHubLoginAdapter()
    token = await adapter.load(load_login_config(config_path), location=callback_url)
    if token is None:
        raise ValueError("URL does not carry a GitHub authorization callback")

    response = await adapter.check_login()
    assert isinstance(response, ViewerResponse)
    return adapter.generate_user(response).model_dump(by_alias=True)
