"""Application context with dependency injection."""

from dataclasses import dataclass

from mist.core.catalog.abc import Catalog
from mist.core.catalog.real import RealCatalog, make_session
from mist.core.global_config import ConfigStore, GlobalConfig, RealConfigStore


@dataclass(frozen=True)
class MistContext:
    """Immutable context holding all dependencies for mist operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    catalog: Catalog
    config_store: ConfigStore
    global_config: GlobalConfig

    @staticmethod
    def for_test(
        catalog: Catalog | None = None,
        config_store: ConfigStore | None = None,
        global_config: GlobalConfig | None = None,
    ) -> "MistContext":
        """Create test context with fake implementations for anything not given.

        Args:
            catalog: Catalog implementation. If None, an empty FakeCatalog.
            config_store: Config store. If None, a FakeConfigStore holding global_config.
            global_config: Loaded configuration. If None, defaults.

        Returns:
            MistContext suitable for CliRunner.invoke(cli, ..., obj=ctx)

        Example:
            >>> catalog = FakeCatalog(firmwares=[sonoma])
            >>> ctx = MistContext.for_test(catalog=catalog)
            >>> result = runner.invoke(cli, ["list", "apple"], obj=ctx)
        """
        from mist.core.catalog.fake import FakeCatalog
        from mist.core.global_config import FakeConfigStore

        if global_config is None:
            global_config = GlobalConfig()
        if config_store is None:
            config_store = FakeConfigStore(global_config)
        if catalog is None:
            catalog = FakeCatalog()

        return MistContext(
            catalog=catalog,
            config_store=config_store,
            global_config=global_config,
        )


def create_context() -> MistContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Raises:
        ValueError: If ~/.mist/config.toml exists but is malformed
    """
    config_store = RealConfigStore()
    global_config = config_store.load()
    catalog = RealCatalog(make_session(), timeout=global_config.timeout)

    return MistContext(
        catalog=catalog,
        config_store=config_store,
        global_config=global_config,
    )
