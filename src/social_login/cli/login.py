"""CLI command running the adapter's login flow."""

import asyncio
import webbrowser
from typing import Any, Dict, Optional

import click

from social_login.auth import AuthorizationRedirect, GitHubLoginAdapter
from social_login.cli.utils import configure_logging, output_error, output_result
from social_login.config import load_login_config


@click.command(name="login")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option(
    "--open", "open_browser", is_flag=True, help="Open the authorization URL in a browser"
)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def login(config_path: Optional[str], open_browser: bool, json_output: bool, debug: bool) -> None:
    """Log in to GitHub.

    Prints the user when the configured credential is valid. Otherwise, in
    redirect mode, prints the URL the user must visit; finish the flow with
    the `callback` command.

    \b
    Examples:
        social-login-github login            # Probe, or print the authorization URL
        social-login-github login --open     # Also open the URL in a browser
    """
    configure_logging(debug)

    try:
        result = asyncio.run(_login_async(config_path, open_browser))
        output_result(result, json_output)
    except click.ClickException:
        raise
    except KeyboardInterrupt:
        if not json_output:
            click.echo("\nOperation cancelled by user", err=True)
        raise click.Abort()
    except Exception as e:
        output_error(e, json_output, debug)


async def _login_async(config_path: Optional[str], open_browser: bool) -> Dict[str, Any]:
    adapter = GitHubLoginAdapter(navigator=webbrowser.open if open_browser else None)
    await adapter.load(load_login_config(config_path))

    result = await adapter.login()
    if isinstance(result, AuthorizationRedirect):
        return {"authorization_url": result.url, "state": result.state}
    return adapter.generate_user(result).model_dump(by_alias=True)
