"""Radius-bounded neighbor balls over the grid's adjacency graph.

A breadth-first expansion: ring ``k`` holds the zones first reached
after ``k`` adjacency hops.  The result is the whole ball up to the
radius, not just its outer ring, and never contains the seed.  No
geometry is involved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dggs_query.query._validation import check_radius

if TYPE_CHECKING:
    from dggs_query.providers.base import GridProvider

logger = logging.getLogger(__name__)


def neighbors(provider: GridProvider, zone_id: str, radius: int) -> set[str]:
    """Return the ids of all zones within *radius* hops of *zone_id*.

    Raises:
        InvalidZoneIdError: If *zone_id* does not resolve.
        InvalidRadiusError: If *radius* is negative.
    """
    check_radius(radius)
    provider.zone_by_id(zone_id)

    # the seed doubles as an exclusion mask until the end
    result = {zone_id}
    to_explore = {zone_id}
    for _ring in range(radius):
        next_round: set[str] = set()
        for cell in to_explore:
            new_zones = set(provider.neighbors_of(cell)) - result
            result |= new_zones
            next_round |= new_zones
        to_explore = next_round

    result.discard(zone_id)
    logger.debug(
        "Neighbor ball | zone=%s | radius=%d | size=%d",
        zone_id,
        radius,
        len(result),
    )
    return result
