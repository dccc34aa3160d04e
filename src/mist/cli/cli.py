import logging
import os

import click

from mist.cli.commands.config import config_group
from mist.cli.commands.list_cmd import list_cmd
from mist.cli.output import output_error
from mist.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def configure_logging(debug: bool) -> None:
    """Enable DEBUG logging when --debug is passed or MIST_DEBUG is set."""
    if debug or os.getenv("MIST_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="mist")
@click.option("--debug", is_flag=True, help="Show debug logging (also enabled by MIST_DEBUG).")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """List and export macOS firmwares and installers."""
    configure_logging(debug)

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except ValueError as e:
            output_error(str(e))
            raise SystemExit(1) from e


cli.add_command(config_group)
cli.add_command(list_cmd)


def main() -> None:
    """CLI entry point used by the `mist` console script."""
    cli()
