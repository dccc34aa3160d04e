"""Type definitions for catalog records."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

# "apple" lists Apple Silicon firmwares, "intel" lists macOS installer products
Platform = Literal["apple", "intel"]


@dataclass(frozen=True)
class FirmwareRecord:
    """A macOS firmware (IPSW) available for Apple Silicon Macs."""

    signed: bool  # True if Apple is still signing this firmware
    name: str  # e.g. "macOS Sonoma"
    version: str  # e.g. "14.0"
    build: str  # e.g. "23A344"
    date: date
    url: str
    checksum: str

    @property
    def signed_description(self) -> str:
        return "True" if self.signed else "False"


@dataclass(frozen=True)
class ProductRecord:
    """A macOS installer product from an Apple software update catalog."""

    identifier: str  # Catalog product key, e.g. "042-58254"
    name: str
    version: str
    build: str
    date: date
    distribution_url: str
