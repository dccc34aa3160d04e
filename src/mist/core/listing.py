"""Listing pipeline: validate, retrieve, export and render catalog records.

Both platforms run the same linear sequence and stop at the first failure:

    validate export path -> retrieve records -> export (if requested) -> render table

Validation always happens before retrieval, so a bad export path never costs a
network round trip.
"""

from pathlib import Path

from rich.console import Console

from mist.cli.output import machine_output, output_header, output_step
from mist.core.context import MistContext
from mist.core.display_utils import render_firmware_table, render_product_table
from mist.core.export_path import validate_export_path
from mist.core.exporters import export_firmwares, export_products


def run_sanity_checks(export_path: str | None) -> None:
    """Validate the export path, reporting progress under a SANITY CHECKS header.

    Raises:
        MistError: If the export path is empty or has an unsupported extension
    """
    if export_path is None:
        return

    output_header("SANITY CHECKS")
    validate_export_path(export_path)
    output_step(f"Export path is '{export_path}'...")
    output_step("Export path file extension is valid...", last=True)


def list_firmwares(ctx: MistContext, export_path: str | None) -> None:
    """List macOS firmwares for Apple Silicon Macs.

    Firmwares come from the ipsw.me API, so the configured software update
    catalog (and any --catalog-url) plays no part here.

    Args:
        ctx: Application context
        export_path: Optional file to export the full listing to

    Raises:
        MistError: If the export path is invalid or the export cannot be encoded
        CatalogError: If the firmwares cannot be retrieved
        OSError: If the export file cannot be written
    """
    run_sanity_checks(export_path)

    output_header("SEARCH")
    output_step("Searching for macOS Firmware versions...")
    with Console(stderr=True).status("Searching...", spinner="dots"):
        firmwares = ctx.catalog.get_firmwares()

    if export_path is not None:
        export_firmwares(Path(export_path), firmwares)

    output_step(f"Found {len(firmwares)} macOS Firmwares available for download", last=True)

    table = render_firmware_table(firmwares, ctx.global_config.date_format)
    if table:
        machine_output(table, nl=False)


def list_products(ctx: MistContext, export_path: str | None, catalog_url: str | None) -> None:
    """List macOS installers from a software update catalog.

    Args:
        ctx: Application context
        export_path: Optional file to export the full listing to
        catalog_url: Catalog to read; None uses the configured catalog

    Raises:
        MistError: If the export path is invalid or the export cannot be encoded
        CatalogError: If the catalog cannot be retrieved
        OSError: If the export file cannot be written
    """
    run_sanity_checks(export_path)

    resolved_url = catalog_url if catalog_url is not None else ctx.global_config.catalog_url

    output_header("SEARCH")
    output_step("Searching for macOS Installer versions...")
    with Console(stderr=True).status("Searching...", spinner="dots"):
        products = ctx.catalog.get_products(resolved_url)

    if export_path is not None:
        export_products(Path(export_path), products)

    output_step(f"Found {len(products)} macOS Installers available for download", last=True)

    table = render_product_table(products, ctx.global_config.date_format)
    if table:
        machine_output(table, nl=False)
