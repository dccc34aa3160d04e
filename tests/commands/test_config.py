"""Tests for the config command group."""

from click.testing import CliRunner

from mist.cli.cli import cli
from mist.core.context import MistContext
from mist.core.global_config import DEFAULT_CATALOG_URL, FakeConfigStore, GlobalConfig


def test_config_list_shows_defaults_when_unconfigured() -> None:
    """Test config list prints every key and notes the missing file."""
    ctx = MistContext.for_test(config_store=FakeConfigStore())
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "list"], obj=ctx)

    assert result.exit_code == 0
    assert "(defaults - no config file at" in result.output
    assert f"catalog_url={DEFAULT_CATALOG_URL}" in result.output
    assert "date_format=%Y-%m-%d" in result.output
    assert "timeout=30" in result.output


def test_config_get_prints_value() -> None:
    """Test config get prints a single value on stdout."""
    ctx = MistContext.for_test(global_config=GlobalConfig(date_format="%d/%m/%Y"))
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "get", "date_format"], obj=ctx)

    assert result.exit_code == 0
    assert result.stdout == "%d/%m/%Y\n"


def test_config_get_unknown_key_fails() -> None:
    """Test an unknown key exits with an error."""
    ctx = MistContext.for_test()
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "get", "color"], obj=ctx)

    assert result.exit_code == 1
    assert "Invalid config key: color" in result.stderr


def test_config_set_saves_new_config() -> None:
    """Test config set saves a copy with only the given key changed."""
    # Arrange
    store = FakeConfigStore(GlobalConfig())
    ctx = MistContext.for_test(config_store=store)
    runner = CliRunner()

    # Act
    result = runner.invoke(cli, ["config", "set", "timeout", "90"], obj=ctx)

    # Assert
    assert result.exit_code == 0
    assert store.saved_configs == [GlobalConfig(timeout=90.0)]
    assert "Set timeout=90" in result.output


def test_config_set_rejects_invalid_timeout() -> None:
    """Test non-numeric and non-positive timeouts are refused without saving."""
    store = FakeConfigStore(GlobalConfig())
    ctx = MistContext.for_test(config_store=store)
    runner = CliRunner()

    not_a_number = runner.invoke(cli, ["config", "set", "timeout", "soon"], obj=ctx)
    zero = runner.invoke(cli, ["config", "set", "timeout", "0"], obj=ctx)
    negative = runner.invoke(cli, ["config", "set", "timeout", "--", "-5"], obj=ctx)

    assert not_a_number.exit_code == 1
    assert "Invalid number for timeout: soon" in not_a_number.stderr
    assert zero.exit_code == 1
    assert "'timeout' must be a positive number" in zero.stderr
    assert negative.exit_code == 1
    assert "'timeout' must be a positive number" in negative.stderr
    assert store.saved_configs == []
