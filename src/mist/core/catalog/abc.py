"""Abstract base class for catalog operations."""

from abc import ABC, abstractmethod

from mist.core.catalog.types import FirmwareRecord, ProductRecord


class CatalogError(RuntimeError):
    """Raised when catalog data cannot be retrieved or parsed."""


class Catalog(ABC):
    """Abstract interface for retrieving firmware and installer records.

    All implementations (real and fake) must implement this interface.
    Implementations return records in the order they should be displayed;
    callers never re-sort them.
    """

    @abstractmethod
    def get_firmwares(self) -> list[FirmwareRecord]:
        """Retrieve all macOS firmwares available for Apple Silicon Macs.

        Returns:
            Firmware records, newest first

        Raises:
            CatalogError: If the firmware listing cannot be retrieved or parsed
        """
        ...

    @abstractmethod
    def get_products(self, catalog_url: str) -> list[ProductRecord]:
        """Retrieve all macOS installer products listed in a software update catalog.

        Args:
            catalog_url: URL of the software update catalog to read

        Returns:
            Product records, newest first

        Raises:
            CatalogError: If the catalog cannot be retrieved or parsed
        """
        ...
