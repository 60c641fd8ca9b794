"""Network catalog loading for multichain-deployments library."""

import json
import logging
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .constants import CATALOG_PATH_ENV, CATALOG_RESOURCE, DEFAULT_NETWORK
from .exceptions import CatalogError, CatalogNotFoundError, DefectiveCatalogEntryError
from .types import Explorer, NativeCurrency, NetworkCatalogEntry

logger = logging.getLogger(__name__)


class NetworkCatalog:
    """
    Ordered, read-only collection of known networks.

    Iteration order is the order entries were supplied in, and it is the
    tie-break order for approximate name matching.
    """

    def __init__(
        self,
        entries: Iterable[NetworkCatalogEntry],
        default_name: str = DEFAULT_NETWORK,
    ):
        """
        Build a catalog.

        Args:
            entries: Catalog entries in priority order
            default_name: Name of the entry used as fallback of last resort

        Raises:
            CatalogError: If the catalog is empty, has duplicate names or chain IDs,
                          or does not contain the default entry
        """
        self._entries: Tuple[NetworkCatalogEntry, ...] = tuple(entries)
        if not self._entries:
            raise CatalogError("Network catalog is empty")

        self._by_name: Dict[str, NetworkCatalogEntry] = {}
        self._by_chain_id: Dict[int, NetworkCatalogEntry] = {}
        for entry in self._entries:
            key = entry.name.lower()
            if key in self._by_name:
                raise CatalogError(f"Duplicate network name in catalog: '{entry.name}'")
            if entry.chain_id in self._by_chain_id:
                raise CatalogError(f"Duplicate chain ID in catalog: {entry.chain_id}")
            self._by_name[key] = entry
            self._by_chain_id[entry.chain_id] = entry

        default = self._by_name.get(default_name.lower())
        if default is None:
            raise CatalogError(f"Default network '{default_name}' not found in catalog")
        self._default = default

    @property
    def entries(self) -> Tuple[NetworkCatalogEntry, ...]:
        return self._entries

    @property
    def default_entry(self) -> NetworkCatalogEntry:
        """Entry used when nothing else matches."""
        return self._default

    def names(self) -> List[str]:
        """Network names in catalog order."""
        return [entry.name for entry in self._entries]

    def get(self, name: str) -> Optional[NetworkCatalogEntry]:
        """
        Look up an entry by name, ignoring case.

        Args:
            name: Network name

        Returns:
            Matching entry, or None
        """
        return self._by_name.get(name.lower())

    def by_chain_id(self, chain_id: int) -> Optional[NetworkCatalogEntry]:
        return self._by_chain_id.get(chain_id)

    def __iter__(self) -> Iterator[NetworkCatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name


def parse_catalog_entry(record: Dict[str, Any]) -> NetworkCatalogEntry:
    """
    Parse one chainlist-style network record.

    Args:
        record: Mapping with name, chainId, nativeCurrency, rpc and optional explorers

    Returns:
        NetworkCatalogEntry

    Raises:
        DefectiveCatalogEntryError: If a required field is missing or has the wrong type
    """
    if not isinstance(record, dict):
        raise DefectiveCatalogEntryError(f"Catalog record is not an object: {record!r}")

    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        raise DefectiveCatalogEntryError(f"Catalog record has no name: {record!r}")

    chain_id = record.get("chainId")
    # bool is an int subclass; reject it explicitly
    if not isinstance(chain_id, int) or isinstance(chain_id, bool):
        raise DefectiveCatalogEntryError(f"Network '{name}' has no integer chainId")

    currency = record.get("nativeCurrency")
    try:
        native_currency = NativeCurrency(
            name=str(currency["name"]),
            symbol=str(currency["symbol"]),
            decimals=int(currency["decimals"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DefectiveCatalogEntryError(
            f"Network '{name}' has an invalid nativeCurrency: {currency!r}"
        ) from e

    rpc = record.get("rpc")
    if not isinstance(rpc, list) or not rpc or not all(isinstance(u, str) for u in rpc):
        raise DefectiveCatalogEntryError(f"Network '{name}' has no RPC URLs")

    explorers: List[Explorer] = []
    for explorer in record.get("explorers") or []:
        try:
            explorers.append(Explorer(name=str(explorer["name"]), url=str(explorer["url"])))
        except (KeyError, TypeError) as e:
            raise DefectiveCatalogEntryError(
                f"Network '{name}' has an invalid explorer: {explorer!r}"
            ) from e

    return NetworkCatalogEntry(
        name=name,
        chain_id=chain_id,
        native_currency=native_currency,
        rpc=tuple(rpc),
        explorers=tuple(explorers),
    )


def parse_catalog(records: List[Dict[str, Any]], default_name: str = DEFAULT_NETWORK) -> NetworkCatalog:
    """
    Build a catalog from raw records, skipping defective ones.

    Args:
        records: List of chainlist-style network records
        default_name: Name of the fallback network

    Returns:
        NetworkCatalog

    Raises:
        CatalogError: If the records do not form a usable catalog
    """
    if not isinstance(records, list):
        raise CatalogError("Network catalog must be a JSON array of network records")

    entries: List[NetworkCatalogEntry] = []
    for record in records:
        try:
            entries.append(parse_catalog_entry(record))
        except DefectiveCatalogEntryError as e:
            # Skip defective records, the rest of the catalog stays usable
            logger.warning("Skipping catalog record: %s", e)

    return NetworkCatalog(entries, default_name=default_name)


def load_catalog(
    path: Optional[Union[Path, str]] = None, default_name: str = DEFAULT_NETWORK
) -> NetworkCatalog:
    """
    Load the network catalog.

    Args:
        path: JSON catalog file. Defaults to $MULTICHAIN_CATALOG_PATH, then the
              catalog bundled with the package.
        default_name: Name of the fallback network

    Returns:
        NetworkCatalog

    Raises:
        CatalogNotFoundError: If the catalog file does not exist
        CatalogError: If the file is not valid JSON or not a usable catalog
    """
    if path is None:
        path = os.environ.get(CATALOG_PATH_ENV)

    if path is None:
        source = f"package resource {CATALOG_RESOURCE}"
        text = resources.files(__package__).joinpath("data").joinpath(CATALOG_RESOURCE).read_text()
    else:
        catalog_path = Path(path)
        if not catalog_path.exists():
            raise CatalogNotFoundError(f"Network catalog not found at {catalog_path}")
        source = str(catalog_path)
        text = catalog_path.read_text()

    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Network catalog {source} is not valid JSON: {e}") from e

    catalog = parse_catalog(records, default_name=default_name)
    logger.debug("Loaded %d networks from %s", len(catalog), source)
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> NetworkCatalog:
    """Process-wide catalog, loaded once on first use."""
    return load_catalog()
