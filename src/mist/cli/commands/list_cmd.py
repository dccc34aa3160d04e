"""Command to list (and optionally export) macOS firmwares or installers."""

from typing import get_args

import click

from mist.cli.output import output_error
from mist.core.catalog.abc import CatalogError
from mist.core.catalog.types import Platform
from mist.core.context import MistContext
from mist.core.errors import MistError
from mist.core.listing import list_firmwares, list_products


@click.command("list")
@click.argument("platform", type=click.Choice(get_args(Platform)))
@click.option(
    "--export",
    "-e",
    "export_path",
    help="Export the full list to a .csv, .json, .plist or .yaml file.",
)
@click.option(
    "--catalog-url",
    "-c",
    help="Software update catalog to search (intel only, ignored for apple; overrides config).",
)
@click.pass_obj
def list_cmd(
    ctx: MistContext, platform: Platform, export_path: str | None, catalog_url: str | None
) -> None:
    """List all macOS firmwares (apple) or installers (intel) available for download."""
    try:
        if platform == "apple":
            list_firmwares(ctx, export_path)
        else:
            list_products(ctx, export_path, catalog_url)
    except (MistError, CatalogError, OSError) as e:
        output_error(str(e))
        raise SystemExit(1) from e
