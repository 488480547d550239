"""Hierarchy walks: descendants at a resolution, and the ancestor chain.

Both operations validate the starting identifier against the provider
before returning, so an unknown id fails at call time rather than on
first iteration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dggs_query.models.zone import parent_id
from dggs_query.query._validation import check_resolution
from dggs_query.query.iterator import ZoneTreeIterator

if TYPE_CHECKING:
    from collections.abc import Iterator

    from dggs_query.models.zone import Zone
    from dggs_query.providers.base import GridProvider


def children(provider: GridProvider, zone_id: str, resolution: int) -> Iterator[Zone]:
    """Lazily yield every descendant of *zone_id* at *resolution*.

    Yields ``9 ** (resolution - zone.resolution)`` zones in depth-first
    digit order, or nothing when the zone is already at or below
    *resolution*.

    Raises:
        InvalidZoneIdError: If *zone_id* does not resolve.
        InvalidResolutionError: If *resolution* is outside the provider's range.
    """
    check_resolution(provider, resolution)
    parent = provider.zone_by_id(zone_id)
    if parent.resolution >= resolution:
        return iter(())

    return ZoneTreeIterator(
        provider,
        descend=lambda zone: zone.resolution < resolution,
        accept=lambda zone: zone.resolution == resolution,
        mapper=lambda zone: zone,
        seeds=[parent],
    )


def parents(provider: GridProvider, zone_id: str) -> Iterator[str]:
    """Lazily yield the ancestor ids of *zone_id*, nearest first.

    ``parents(p, "N14")`` yields ``"N1"`` then ``"N"``.  The zone itself is
    not included; a root face has no ancestors.

    Raises:
        InvalidZoneIdError: If *zone_id* does not resolve.
    """
    provider.zone_by_id(zone_id)
    return _ancestor_ids(zone_id)


def _ancestor_ids(zone_id: str) -> Iterator[str]:
    current = parent_id(zone_id)
    while current is not None:
        yield current
        current = parent_id(current)
