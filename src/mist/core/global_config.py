"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.mist/config.toml.
A missing file is not an error: every key has a default.

Example config:
  catalog_url = "https://swscan.apple.com/content/catalogs/others/index-15-14.merged-1.sucatalog"
  date_format = "%d/%m/%Y"
  timeout = 60
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import tomlkit

DEFAULT_CATALOG_URL = (
    "https://swscan.apple.com/content/catalogs/others/"
    "index-26-15-14-13-12-10.16-10.15-10.14-10.13-10.12-10.11-10.10-10.9"
    "-mountainlion-lion-snowleopard-leopard.merged-1.sucatalog"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIMEOUT = 30.0

CONFIG_KEYS: tuple[str, ...] = ("catalog_url", "date_format", "timeout")


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in MistContext.
    All fields are read-only after construction.
    """

    catalog_url: str = DEFAULT_CATALOG_URL
    date_format: str = DEFAULT_DATE_FORMAT  # strftime format for the table Date column
    timeout: float = DEFAULT_TIMEOUT  # seconds per HTTP request


def parse_global_config(data: dict, source: str) -> GlobalConfig:
    """Build a GlobalConfig from decoded TOML, falling back to defaults.

    Args:
        data: Decoded TOML document
        source: Where data came from (for error messages)

    Raises:
        ValueError: If a key has the wrong type or an unusable value
    """
    catalog_url = data.get("catalog_url", DEFAULT_CATALOG_URL)
    if not isinstance(catalog_url, str) or not catalog_url:
        raise ValueError(f"'catalog_url' must be a non-empty string in {source}")

    date_format = data.get("date_format", DEFAULT_DATE_FORMAT)
    if not isinstance(date_format, str) or not date_format:
        raise ValueError(f"'date_format' must be a non-empty string in {source}")

    timeout = data.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValueError(f"'timeout' must be a positive number in {source}")

    return GlobalConfig(
        catalog_url=catalog_url,
        date_format=date_format,
        timeout=float(timeout),
    )


class ConfigStore(ABC):
    """Abstract interface for global config operations.

    Provides dependency injection for global config access, enabling
    in-memory implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if global config exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load global config, using defaults for anything not configured.

        Raises:
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: GlobalConfig) -> None:
        """Save global config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the global config file (for messages and debugging)."""
        ...


class RealConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.mist/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        if config_path is None:
            config_path = Path.home() / ".mist" / "config.toml"
        self._path = config_path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> GlobalConfig:
        if not self._path.exists():
            return GlobalConfig()

        try:
            data = tomllib.loads(self._path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {self._path}: {e}") from e
        return parse_global_config(data, str(self._path))

    def save(self, config: GlobalConfig) -> None:
        """Write config, preserving comments and formatting of an existing file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)

        if self._path.exists():
            doc = tomlkit.parse(self._path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("Global mist configuration"))

        doc["catalog_url"] = config.catalog_url
        doc["date_format"] = config.date_format
        doc["timeout"] = config.timeout

        self._path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        return self._path


class FakeConfigStore(ConfigStore):
    """In-memory config store for tests.

    All state is provided via constructor; saved configs are tracked for assertions.
    """

    def __init__(self, config: GlobalConfig | None = None) -> None:
        self._config = config
        self._saved: list[GlobalConfig] = []

    @property
    def saved_configs(self) -> list[GlobalConfig]:
        """Configs passed to save(), in call order."""
        return self._saved

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        return self._config if self._config is not None else GlobalConfig()

    def save(self, config: GlobalConfig) -> None:
        self._config = config
        self._saved.append(config)

    def path(self) -> Path:
        return Path("/test/.mist/config.toml")
