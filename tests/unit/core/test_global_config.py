"""Tests for global config loading and saving."""

from pathlib import Path

import pytest

from mist.core.global_config import (
    DEFAULT_CATALOG_URL,
    DEFAULT_DATE_FORMAT,
    GlobalConfig,
    RealConfigStore,
)


def test_missing_file_loads_defaults(tmp_path: Path) -> None:
    """Test a missing config file is not an error."""
    store = RealConfigStore(tmp_path / ".mist" / "config.toml")

    config = store.load()

    assert store.exists() is False
    assert config == GlobalConfig()
    assert config.catalog_url == DEFAULT_CATALOG_URL
    assert config.date_format == DEFAULT_DATE_FORMAT


def test_keys_override_defaults(tmp_path: Path) -> None:
    """Test configured keys replace defaults and unset keys keep them."""
    # Arrange
    config_path = tmp_path / "config.toml"
    config_path.write_text('date_format = "%d/%m/%Y"\ntimeout = 60\n', encoding="utf-8")

    # Act
    config = RealConfigStore(config_path).load()

    # Assert
    assert config.date_format == "%d/%m/%Y"
    assert config.timeout == 60.0
    assert config.catalog_url == DEFAULT_CATALOG_URL


@pytest.mark.parametrize(
    "content",
    [
        'timeout = "soon"\n',
        "timeout = 0\n",
        'catalog_url = ""\n',
        "date_format = 3\n",
        "not toml at all [\n",
    ],
)
def test_malformed_config_raises_value_error(tmp_path: Path, content: str) -> None:
    """Test invalid values and invalid TOML are reported as ValueError."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        RealConfigStore(config_path).load()


def test_save_then_load(tmp_path: Path) -> None:
    """Test a saved config loads back unchanged, creating the directory."""
    # Arrange
    store = RealConfigStore(tmp_path / ".mist" / "config.toml")
    config = GlobalConfig(catalog_url="https://example.com/test.sucatalog", timeout=45.0)

    # Act
    store.save(config)

    # Assert
    assert store.exists()
    assert store.load() == config


def test_save_preserves_comments(tmp_path: Path) -> None:
    """Test saving over an existing file keeps the user's comments."""
    config_path = tmp_path / "config.toml"
    config_path.write_text('# my settings\ndate_format = "%Y"\n', encoding="utf-8")
    store = RealConfigStore(config_path)

    store.save(GlobalConfig(date_format="%m/%Y"))

    content = config_path.read_text(encoding="utf-8")
    assert "# my settings" in content
    assert store.load().date_format == "%m/%Y"
