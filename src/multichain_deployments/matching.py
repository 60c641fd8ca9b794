"""Approximate chain name matching for multichain-deployments library."""

from typing import Iterable, Optional, Tuple

from rapidfuzz.distance import Levenshtein

from .constants import IGNORED_NAME_CHARS
from .types import NetworkCatalogEntry

_STRIP_TABLE = str.maketrans("", "", IGNORED_NAME_CHARS)


def normalize_network_name(name: str) -> str:
    """
    Convert a chain name to the form used for approximate comparison.

    Lower-cases and drops hyphens and underscores, so "Arbitrum_One",
    "arbitrum-one" and "ARBITRUMONE" compare close to "arbitrum one".

    Args:
        name: Chain name as typed by a user or listed in the catalog

    Returns:
        Normalized name
    """
    return name.lower().translate(_STRIP_TABLE)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings."""
    return Levenshtein.distance(a, b)


def closest_network(
    reference: str, entries: Iterable[NetworkCatalogEntry]
) -> Tuple[Optional[NetworkCatalogEntry], Optional[int]]:
    """
    Find the entry whose normalized name is nearest to the reference.

    Ties go to the entry that comes first in iteration order.

    Args:
        reference: Chain name as typed by a user
        entries: Candidate entries, in tie-break order

    Returns:
        Tuple of (best entry, distance), or (None, None) if there are no entries
    """
    target = normalize_network_name(reference)
    best: Optional[NetworkCatalogEntry] = None
    best_distance: Optional[int] = None

    for entry in entries:
        distance = edit_distance(target, normalize_network_name(entry.name))
        # Strict comparison keeps the earliest entry on ties
        if best_distance is None or distance < best_distance:
            best = entry
            best_distance = distance

    return best, best_distance
