import click

from mist.cli.output import machine_output, output_error
from mist.core.context import MistContext
from mist.core.global_config import CONFIG_KEYS, GlobalConfig, parse_global_config


def _format_value(config: GlobalConfig, key: str) -> str:
    match key:
        case "catalog_url":
            return config.catalog_url
        case "date_format":
            return config.date_format
        case "timeout":
            return f"{config.timeout:g}"
        case _:
            output_error(f"Invalid config key: {key} (valid keys: {', '.join(CONFIG_KEYS)})")
            raise SystemExit(1)


def _update_global_config_field(
    current_config: GlobalConfig, key: str, value: str
) -> GlobalConfig:
    """Return a new GlobalConfig with one field replaced.

    Raises:
        SystemExit: If the key is unknown or the value is invalid
    """
    data: dict[str, object] = {
        "catalog_url": current_config.catalog_url,
        "date_format": current_config.date_format,
        "timeout": current_config.timeout,
    }
    match key:
        case "catalog_url" | "date_format":
            data[key] = value
        case "timeout":
            try:
                data[key] = float(value)
            except ValueError as e:
                output_error(f"Invalid number for timeout: {value}")
                raise SystemExit(1) from e
        case _:
            output_error(f"Invalid config key: {key} (valid keys: {', '.join(CONFIG_KEYS)})")
            raise SystemExit(1)

    try:
        return parse_global_config(data, "command line")
    except ValueError as e:
        output_error(str(e))
        raise SystemExit(1) from e


@click.group("config")
def config_group() -> None:
    """Manage mist configuration."""


@config_group.command("list")
@click.pass_obj
def config_list(ctx: MistContext) -> None:
    """Print a list of configuration keys and values."""
    click.echo(click.style("Global configuration:", bold=True))
    if not ctx.config_store.exists():
        click.echo(f"  (defaults - no config file at {ctx.config_store.path()})")
    for key in CONFIG_KEYS:
        click.echo(f"  {key}={_format_value(ctx.global_config, key)}")


@config_group.command("get")
@click.argument("key", metavar="KEY")
@click.pass_obj
def config_get(ctx: MistContext, key: str) -> None:
    """Print the value of a given configuration key."""
    machine_output(_format_value(ctx.global_config, key))


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.pass_obj
def config_set(ctx: MistContext, key: str, value: str) -> None:
    """Update a configuration key with a value."""
    new_config = _update_global_config_field(ctx.global_config, key, value)
    ctx.config_store.save(new_config)
    click.echo(f"Set {key}={_format_value(new_config, key)}")
