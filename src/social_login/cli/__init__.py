import click

from social_login import __version__
from social_login.cli.callback import callback
from social_login.cli.login import login
from social_login.cli.url import url
from social_login.cli.whoami import whoami


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="social-login-github")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """GitHub social login adapter CLI"""
    if ctx.invoked_subcommand is None:
        # Show help when no subcommand is provided
        click.echo(ctx.get_help())


cli.add_command(url)
cli.add_command(login)
cli.add_command(callback)
cli.add_command(whoami)
