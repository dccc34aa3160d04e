"""Production implementation of catalog operations."""

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter, Retry

from mist import __version__
from mist.core.catalog.abc import Catalog, CatalogError
from mist.core.catalog.parsing import (
    build_product,
    parse_catalog,
    parse_distribution,
    parse_ipsw_devices,
    parse_ipsw_firmwares,
    sort_firmwares,
    sort_products,
)
from mist.core.catalog.types import FirmwareRecord, ProductRecord

logger = logging.getLogger(__name__)

IPSW_API_URL = "https://api.ipsw.me/v4"
USER_AGENT = f"mist/{__version__}"


def make_session() -> requests.Session:
    """Create an HTTP session that retries transient server errors."""
    session = requests.Session()
    retries = Retry(
        total=3,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset(["GET"]),
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"User-Agent": USER_AGENT})
    return session


class RealCatalog(Catalog):
    """Production implementation using HTTP.

    Firmwares come from the ipsw.me API; installer products come from an Apple
    software update catalog and the distribution files it references.
    """

    def __init__(self, session: requests.Session, *, timeout: float) -> None:
        """Initialize RealCatalog.

        Args:
            session: HTTP session used for every request
            timeout: Per-request timeout in seconds
        """
        self._session = session
        self._timeout = timeout

    def _get(self, url: str, operation_context: str, **kwargs: Any) -> requests.Response:
        """GET a URL, re-raising transport and HTTP errors as CatalogError."""
        logger.debug(f"GET {url}")
        try:
            response = self._session.get(url, timeout=self._timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise CatalogError(f"Failed to {operation_context}\nURL: {url}\n{e}") from e
        return response

    def _get_json(self, url: str, operation_context: str, **kwargs: Any) -> Any:
        response = self._get(url, operation_context, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(f"Failed to {operation_context}: invalid JSON from {url}") from e

    def get_firmwares(self) -> list[FirmwareRecord]:
        devices = self._get_json(f"{IPSW_API_URL}/devices", "retrieve device list")
        try:
            identifiers = parse_ipsw_devices(devices)
        except ValueError as e:
            raise CatalogError(f"Failed to parse device list: {e}") from e
        logger.debug(f"Found {len(identifiers)} Mac devices")

        firmwares: list[FirmwareRecord] = []
        for identifier in identifiers:
            data = self._get_json(
                f"{IPSW_API_URL}/device/{identifier}",
                f"retrieve firmwares for {identifier}",
                params={"type": "ipsw"},
            )
            try:
                firmwares.extend(parse_ipsw_firmwares(data))
            except ValueError as e:
                raise CatalogError(f"Failed to parse firmwares for {identifier}: {e}") from e

        return sort_firmwares(firmwares)

    def get_products(self, catalog_url: str) -> list[ProductRecord]:
        response = self._get(catalog_url, "retrieve software update catalog")
        try:
            entries = parse_catalog(response.content)
        except ValueError as e:
            raise CatalogError(f"Failed to parse catalog {catalog_url}: {e}") from e
        logger.debug(f"Found {len(entries)} installer products in catalog")

        products: list[ProductRecord] = []
        for entry in entries:
            distribution = self._get(
                entry.distribution_url, f"retrieve distribution for product {entry.identifier}"
            )
            info = parse_distribution(distribution.text)
            if info is None:
                logger.warning(f"Skipping product {entry.identifier}: incomplete distribution")
                continue
            products.append(build_product(entry, info))

        return sort_products(products)
