"""Chain reference resolution for multichain-deployments library."""

import logging
import re
from typing import Mapping, Optional

from .catalog import NetworkCatalog, default_catalog, load_catalog
from .config import Settings
from .constants import EXPLORER_API_URLS
from .matching import closest_network
from .types import NetworkCatalogEntry, NetworkProfile

logger = logging.getLogger(__name__)

# ${INFURA_API_KEY} style placeholders in RPC URL templates
_PLACEHOLDER = re.compile(r"\$\{([A-Za-z0-9_]+)\}")


def substitute_placeholders(template: str, secrets: Mapping[str, str]) -> str:
    """
    Replace ${VAR} placeholders in a URL template.

    Args:
        template: URL template, e.g. "https://mainnet.infura.io/v3/${INFURA_API_KEY}"
        secrets: Placeholder name -> value

    Returns:
        URL with every placeholder replaced; unknown placeholders become ""
    """
    return _PLACEHOLDER.sub(lambda m: secrets.get(m.group(1), ""), template)


class NetworkResolver:
    """Turns free-text chain references into network profiles."""

    def __init__(
        self,
        catalog: Optional[NetworkCatalog] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the resolver.

        Args:
            catalog: Networks to resolve against (defaults to settings.catalog_path,
                     then the bundled catalog)
            settings: Secrets for RPC placeholders and explorer API keys
                      (defaults to Settings.from_env())
        """
        if settings is None:
            settings = Settings.from_env()
        if catalog is None:
            if settings.catalog_path:
                catalog = load_catalog(settings.catalog_path)
            else:
                catalog = default_catalog()

        self._catalog = catalog
        self._settings = settings

    @property
    def catalog(self) -> NetworkCatalog:
        return self._catalog

    def match(self, reference: Optional[str]) -> NetworkCatalogEntry:
        """
        Pick the catalog entry a chain reference refers to.

        Matching order:
        1. Empty or missing reference -> default network
        2. Case-insensitive exact name match
        3. Smallest edit distance between normalized names (catalog order breaks ties)
        4. Default network

        Args:
            reference: Chain name as typed by a user

        Returns:
            NetworkCatalogEntry (never None)
        """
        if reference is None or not str(reference).strip():
            reference = self._catalog.default_entry.name
        reference = str(reference).strip()

        entry = self._catalog.get(reference)
        if entry is not None:
            return entry

        entry, distance = closest_network(reference, self._catalog)
        if entry is not None:
            logger.debug(
                "Resolved chain '%s' to '%s' (edit distance %d)", reference, entry.name, distance
            )
            return entry

        logger.warning(
            "No catalog match for chain '%s', falling back to '%s'",
            reference,
            self._catalog.default_entry.name,
        )
        return self._catalog.default_entry

    def build_profile(self, entry: NetworkCatalogEntry) -> NetworkProfile:
        """
        Project a catalog entry into a ready-to-use profile.

        Uses the first RPC URL template with placeholders substituted and the
        first listed explorer.

        Args:
            entry: Catalog entry

        Returns:
            NetworkProfile
        """
        rpc_url = substitute_placeholders(entry.rpc[0], self._settings.rpc_secrets)
        explorer = entry.explorers[0] if entry.explorers else None

        return NetworkProfile(
            id=entry.chain_id,
            name=entry.name,
            native_currency=entry.native_currency,
            rpc_url=rpc_url,
            explorer_url=explorer.url if explorer else None,
            explorer_name=explorer.name if explorer else None,
            explorer_api_url=EXPLORER_API_URLS.get(entry.name),
            explorer_api_key=self._settings.explorer_api_keys.get(entry.name),
        )

    def resolve(self, reference: Optional[str]) -> NetworkProfile:
        """
        Resolve a chain reference to a network profile.

        Never raises for unknown names: a typo degrades to the nearest catalog
        entry, and an empty reference to the default network.

        Args:
            reference: Chain name as typed by a user, e.g. "arbitrum-one"

        Returns:
            NetworkProfile
        """
        return self.build_profile(self.match(reference))
