"""CLI command probing GitHub with a bearer token."""

import asyncio
from typing import Any, Dict, Optional

import click

from social_login.auth import GitHubLoginAdapter, GitHubLoginConfigModel, ViewerResponse
from social_login.cli.utils import configure_logging, output_error, output_result
from social_login.config import load_login_config


@click.command(name="whoami")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option("--token", envvar="GITHUB_TOKEN", help="Bearer token to probe with (default: app_id)")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def whoami(
    config_path: Optional[str], token: Optional[str], json_output: bool, debug: bool
) -> None:
    """Print the GitHub user behind a token.

    Uses --token (or GITHUB_TOKEN) when given, otherwise the configured app_id.
    No config file is needed when a token is given.
    """
    configure_logging(debug)

    try:
        result = asyncio.run(_whoami_async(config_path, token))
        output_result(result, json_output)
    except click.ClickException:
        raise
    except Exception as e:
        output_error(e, json_output, debug)


def _direct_token_config(
    config_path: Optional[str], token: Optional[str]
) -> GitHubLoginConfigModel:
    if token is None:
        config = load_login_config(config_path)
        return GitHubLoginConfigModel(
            app_id=config.app_id, graphql_url=config.graphql_url, timeout=config.timeout
        )

    try:
        config = load_login_config(config_path)
    except FileNotFoundError:
        if config_path is not None:
            raise
        return GitHubLoginConfigModel(app_id=token)
    return GitHubLoginConfigModel(
        app_id=token, graphql_url=config.graphql_url, timeout=config.timeout
    )


async def _whoami_async(config_path: Optional[str], token: Optional[str]) -> Dict[str, Any]:
    adapter = GitHubLoginAdapter()
    await adapter.load(_direct_token_config(config_path, token))

    response = await adapter.check_login()
    assert isinstance(response, ViewerResponse)
    return adapter.generate_user(response).model_dump(by_alias=True)
