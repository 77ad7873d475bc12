"""CLI command printing the GitHub authorization URL."""

import asyncio
from typing import Optional

import click

from social_login.auth import AdapterMode, GitHubLoginAdapter
from social_login.cli.utils import configure_logging, output_error, output_result
from social_login.config import load_login_config


@click.command(name="url")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def url(config_path: Optional[str], json_output: bool, debug: bool) -> None:
    """Print the GitHub authorization URL for the redirect flow.

    Requires relay_base_url and redirect_uri in the configuration.
    """
    configure_logging(debug)

    try:
        result = asyncio.run(_url_async(config_path))
        output_result(result, json_output)
    except click.ClickException:
        raise
    except Exception as e:
        output_error(e, json_output, debug)


async def _url_async(config_path: Optional[str]) -> dict:
    adapter = GitHubLoginAdapter()
    await adapter.load(load_login_config(config_path))
    if adapter.mode is not AdapterMode.REDIRECT_OAUTH:
        raise ValueError("Redirect flow is not configured (relay_base_url is missing)")
    return {"authorization_url": adapter.authorization_url, "state": adapter.state_token}
