"""Catalog integration: retrieval of firmware and installer product records."""

from mist.core.catalog.abc import Catalog, CatalogError
from mist.core.catalog.types import FirmwareRecord, Platform, ProductRecord

__all__ = [
    "Catalog",
    "CatalogError",
    "FirmwareRecord",
    "Platform",
    "ProductRecord",
]
