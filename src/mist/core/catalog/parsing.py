"""Parsing helpers for catalog responses.

Pure functions that turn already-downloaded payloads into records, so they can
be tested without network access.
"""

import logging
import plistlib
import re
from datetime import date, datetime
from typing import Any, NamedTuple
from xml.parsers.expat import ExpatError

from mist.core.catalog.types import FirmwareRecord, ProductRecord

logger = logging.getLogger(__name__)

# Marketing names keyed by major version, for firmwares the ipsw.me API leaves unnamed
MACOS_NAMES: dict[int, str] = {
    11: "macOS Big Sur",
    12: "macOS Monterey",
    13: "macOS Ventura",
    14: "macOS Sonoma",
    15: "macOS Sequoia",
    26: "macOS Tahoe",
}

_SU_TITLE_RE = re.compile(r'"SU_TITLE"\s*=\s*"([^"]+)"\s*;')
_TITLE_RE = re.compile(r"<title>\s*([^<]+?)\s*</title>")


class CatalogEntry(NamedTuple):
    """Installer product entry read from a software update catalog."""

    identifier: str
    date: date
    distribution_url: str


class DistributionInfo(NamedTuple):
    """Name, version and build read from a product's distribution file."""

    name: str
    version: str
    build: str


def version_key(version: str) -> tuple[int, ...]:
    """Sort key for dotted numeric versions ("14.0.1" -> (14, 0, 1)).

    Non-numeric components sort as 0.
    """
    parts: list[int] = []
    for part in version.split("."):
        parts.append(int(part) if part.isdigit() else 0)
    return tuple(parts)


def firmware_name(version: str) -> str:
    """Derive the macOS marketing name from a firmware version.

    Args:
        version: Dotted version string, e.g. "14.0"

    Returns:
        Marketing name such as "macOS Sonoma", or "macOS 16" for unknown majors
    """
    major = version_key(version)[0]
    return MACOS_NAMES.get(major, f"macOS {major}")


def is_mac_identifier(identifier: str) -> bool:
    """Check whether an ipsw.me device identifier belongs to a Mac.

    Covers "MacBookPro18,3", "iMac21,1", "Macmini9,1", "Mac14,2" and "VirtualMac2,1".
    """
    return "Mac" in identifier


def parse_ipsw_devices(data: Any) -> list[str]:
    """Extract Mac device identifiers from an ipsw.me /v4/devices response.

    Args:
        data: Decoded JSON response (expected: list of device objects)

    Returns:
        Mac device identifiers in response order

    Raises:
        ValueError: If the response is not a list of device objects
    """
    if not isinstance(data, list):
        raise ValueError("Device listing must be a JSON array")

    identifiers: list[str] = []
    for device in data:
        if not isinstance(device, dict):
            logger.warning(f"Skipping malformed device entry: {device!r}")
            continue
        identifier = device.get("identifier")
        if isinstance(identifier, str) and is_mac_identifier(identifier):
            identifiers.append(identifier)
    return identifiers


def _parse_iso_date(value: str) -> date:
    # ipsw.me dates look like "2023-09-26T17:05:47Z"
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def parse_ipsw_firmwares(data: Any) -> list[FirmwareRecord]:
    """Convert an ipsw.me /v4/device/{identifier} response into firmware records.

    Entries missing a version, build or URL are skipped with a warning.

    Args:
        data: Decoded JSON response (expected: object with a "firmwares" array)

    Returns:
        Firmware records in response order

    Raises:
        ValueError: If the response has no "firmwares" array
    """
    if not isinstance(data, dict) or not isinstance(data.get("firmwares"), list):
        raise ValueError("Device response must contain a 'firmwares' array")

    records: list[FirmwareRecord] = []
    for entry in data["firmwares"]:
        try:
            version = str(entry["version"])
            build = str(entry["buildid"])
            url = str(entry["url"])
            raw_date = entry.get("releasedate") or entry.get("uploaddate")
            if raw_date is None:
                raise KeyError("releasedate")
            record_date = _parse_iso_date(str(raw_date))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed firmware entry: {e}")
            continue

        records.append(
            FirmwareRecord(
                signed=bool(entry.get("signed", False)),
                name=firmware_name(version),
                version=version,
                build=build,
                date=record_date,
                url=url,
                checksum=str(entry.get("sha1sum") or ""),
            )
        )
    return records


def sort_firmwares(firmwares: list[FirmwareRecord]) -> list[FirmwareRecord]:
    """De-duplicate firmwares by build and order them newest first.

    Several devices share the same universal IPSW; the first occurrence of a
    build wins.
    """
    unique: dict[str, FirmwareRecord] = {}
    for firmware in firmwares:
        if firmware.build not in unique:
            unique[firmware.build] = firmware
    return sorted(
        unique.values(),
        key=lambda firmware: (version_key(firmware.version), firmware.date),
        reverse=True,
    )


def parse_catalog(payload: bytes) -> list[CatalogEntry]:
    """Extract macOS installer entries from a software update catalog.

    Only products advertising InstallAssistant packages are full macOS installers;
    everything else in the catalog (updates, Safari, ...) is ignored.

    Args:
        payload: Raw property list bytes of the .sucatalog file

    Returns:
        Catalog entries in catalog order

    Raises:
        ValueError: If the payload is not a catalog property list
    """
    try:
        catalog = plistlib.loads(payload)
    except (plistlib.InvalidFileException, ExpatError) as e:
        raise ValueError(f"Catalog is not a valid property list: {e}") from e

    if not isinstance(catalog, dict) or not isinstance(catalog.get("Products"), dict):
        raise ValueError("Catalog property list has no 'Products' dictionary")

    entries: list[CatalogEntry] = []
    for identifier, product in catalog["Products"].items():
        if not isinstance(product, dict):
            continue
        meta = product.get("ExtendedMetaInfo")
        if not isinstance(meta, dict) or "InstallAssistantPackageIdentifiers" not in meta:
            continue

        distributions = product.get("Distributions")
        if not isinstance(distributions, dict):
            logger.warning(f"Skipping catalog product {identifier}: malformed distributions")
            continue
        distribution_url = distributions.get("English") or distributions.get("en")
        post_date = product.get("PostDate")
        if distribution_url is None or not isinstance(post_date, datetime):
            logger.warning(f"Skipping catalog product {identifier}: missing distribution or date")
            continue

        entries.append(
            CatalogEntry(
                identifier=str(identifier),
                date=post_date.date(),
                distribution_url=str(distribution_url),
            )
        )
    return entries


def _auxinfo_value(text: str, key: str) -> str | None:
    match = re.search(rf"<key>{key}</key>\s*<string>([^<]*)</string>", text)
    if match is None:
        return None
    return match.group(1).strip()


def parse_distribution(text: str) -> DistributionInfo | None:
    """Read the installer name, version and build from a distribution file.

    Args:
        text: Contents of the product's English .dist file

    Returns:
        DistributionInfo, or None if the file lacks a version or build
    """
    version = _auxinfo_value(text, "VERSION")
    build = _auxinfo_value(text, "BUILD")
    if not version or not build:
        return None

    title_match = _SU_TITLE_RE.search(text) or _TITLE_RE.search(text)
    if title_match is not None and title_match.group(1) != "SU_TITLE":
        name = title_match.group(1).strip()
    else:
        name = firmware_name(version)

    return DistributionInfo(name=name, version=version, build=build)


def build_product(entry: CatalogEntry, info: DistributionInfo) -> ProductRecord:
    """Combine a catalog entry and its distribution details into a record."""
    return ProductRecord(
        identifier=entry.identifier,
        name=info.name,
        version=info.version,
        build=info.build,
        date=entry.date,
        distribution_url=entry.distribution_url,
    )


def sort_products(products: list[ProductRecord]) -> list[ProductRecord]:
    """Order installer products newest first (by version, then post date)."""
    return sorted(
        products,
        key=lambda product: (version_key(product.version), product.date),
        reverse=True,
    )
