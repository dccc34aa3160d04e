"""Fake catalog operations for testing.

FakeCatalog is an in-memory implementation that accepts pre-configured records
in its constructor. Construct instances directly with keyword arguments.
"""

from mist.core.catalog.abc import Catalog, CatalogError
from mist.core.catalog.types import FirmwareRecord, ProductRecord


class FakeCatalog(Catalog):
    """In-memory fake implementation of catalog operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty lists).
    """

    def __init__(
        self,
        *,
        firmwares: list[FirmwareRecord] | None = None,
        products: list[ProductRecord] | None = None,
        error: str | None = None,
    ) -> None:
        """Create FakeCatalog with pre-configured state.

        Args:
            firmwares: Records returned by get_firmwares()
            products: Records returned by get_products()
            error: If set, every retrieval raises CatalogError with this message
        """
        self._firmwares = firmwares if firmwares is not None else []
        self._products = products if products is not None else []
        self._error = error
        self._firmware_calls = 0
        self._product_calls: list[str] = []

    @property
    def firmware_calls(self) -> int:
        """Number of times get_firmwares() was called."""
        return self._firmware_calls

    @property
    def product_calls(self) -> list[str]:
        """Catalog URLs passed to get_products(), in call order."""
        return self._product_calls

    def get_firmwares(self) -> list[FirmwareRecord]:
        self._firmware_calls += 1
        if self._error is not None:
            raise CatalogError(self._error)
        return list(self._firmwares)

    def get_products(self, catalog_url: str) -> list[ProductRecord]:
        self._product_calls.append(catalog_url)
        if self._error is not None:
            raise CatalogError(self._error)
        return list(self._products)
