"""Polygon-to-zones decomposition with compaction and lazy expansion.

Phase 1 (compact) walks the hierarchy once against the prepared polygon:

- a branch disjoint from the polygon is pruned, nothing below can match;
- a zone fully inside the polygon is emitted whole and not descended;
- a zone at the target resolution is emitted when its center is inside.

Phase 2 (expand) replaces each coarse zone from phase 1 by its
descendants at the target resolution, one at a time as the consumer
pulls them.  A continent-sized covered area costs nothing until read.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from shapely.prepared import prep

from dggs_query.core.constants import WORLD
from dggs_query.models.envelope import Envelope
from dggs_query.query._validation import check_resolution
from dggs_query.query.hierarchy import children
from dggs_query.query.iterator import ZoneTreeIterator
from dggs_query.query.relations import contains_geometry, disjoint

if TYPE_CHECKING:
    from collections.abc import Iterator

    from shapely.geometry import MultiPolygon, Polygon

    from dggs_query.models.zone import Zone
    from dggs_query.providers.base import GridProvider

logger = logging.getLogger(__name__)


def compact_polygon_zones(
    provider: GridProvider,
    polygon: Polygon | MultiPolygon,
    resolution: int,
) -> Iterator[Zone]:
    """Lazily yield the compact cover of *polygon* (phase 1 only).

    Emitted zones are either at *resolution* with their center inside the
    polygon, or coarser and fully inside the polygon.

    Raises:
        InvalidResolutionError: If *resolution* is outside the provider's range.
    """
    check_resolution(provider, resolution)
    if Envelope.from_geometry(polygon).intersection(WORLD).is_null:
        logger.warning("Polygon outside world, no zones | bounds=%s", polygon.bounds)
        return iter(())

    prepared = prep(polygon)

    def descend(zone: Zone) -> bool:
        # fully covered zones are emitted whole and expanded in phase 2
        return (
            zone.resolution < resolution
            and not disjoint(prepared, zone.boundary)
            and not contains_geometry(prepared, zone.boundary)
        )

    def accept(zone: Zone) -> bool:
        if zone.resolution == resolution and contains_geometry(prepared, zone.center):
            return True
        return contains_geometry(prepared, zone.boundary)

    return ZoneTreeIterator(provider, descend=descend, accept=accept, mapper=lambda zone: zone)


def polygon_zones(
    provider: GridProvider,
    polygon: Polygon | MultiPolygon,
    resolution: int,
) -> Iterator[Zone]:
    """Lazily yield the zones at *resolution* covering *polygon*.

    Raises:
        InvalidResolutionError: If *resolution* is outside the provider's range.
    """
    compact = compact_polygon_zones(provider, polygon, resolution)
    return itertools.chain.from_iterable(
        _expand(provider, zone, resolution) for zone in compact
    )


def _expand(provider: GridProvider, zone: Zone, resolution: int) -> Iterator[Zone]:
    if zone.resolution < resolution:
        return children(provider, zone.id, resolution)
    return iter((zone,))
