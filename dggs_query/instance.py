"""DGGS instance — one query session over one grid provider.

``DGGSInstance`` is the entry point callers use.  It owns a provider
session, caches the pole zone sets for that session, and delegates every
question to the query modules.

Usage::

    from dggs_query.core.config import DGGSConfig
    from dggs_query.instance import open_instance

    with open_instance(DGGSConfig.from_env()) as dggs:
        count = dggs.count_zones_from_envelope(Envelope(-10, 35, 30, 60), 4)
        for zone in dggs.polygon(field_boundary, 9):
            ...
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import TYPE_CHECKING

from dggs_query.core.constants import NORTH_POLE, SOUTH_POLE
from dggs_query.providers.factory import get_provider
from dggs_query.query.envelope import count_zones_from_envelope, zones_from_envelope
from dggs_query.query.hierarchy import children, parents
from dggs_query.query.neighbors import neighbors
from dggs_query.query._validation import check_resolution
from dggs_query.query.polygon import compact_polygon_zones, polygon_zones

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from shapely.geometry import MultiPolygon, Point, Polygon

    from dggs_query.core.config import DGGSConfig
    from dggs_query.models.envelope import Envelope
    from dggs_query.models.zone import Zone
    from dggs_query.providers.base import GridProvider

logger = logging.getLogger(__name__)


class DGGSInstance:
    """Query facade over a single grid provider session.

    Attributes:
        provider: The grid session every query runs against.
        identifier: Public name of this DGGS (e.g. ``"rHEALPix"``).
    """

    def __init__(self, provider: GridProvider, identifier: str) -> None:
        self.provider = provider
        self.identifier = identifier

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the provider session."""
        logger.info("Closing DGGS instance | identifier=%s", self.identifier)
        self.provider.close()

    def __enter__(self) -> DGGSInstance:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Grid facts
    # ------------------------------------------------------------------

    @property
    def resolutions(self) -> list[int]:
        return self.provider.resolutions_supported()

    @property
    def max_resolution(self) -> int:
        return self.provider.max_resolution()

    @cached_property
    def north_pole_zones(self) -> frozenset[str]:
        """Ids of the zone holding the north pole, one per resolution.

        Computed on first access and kept for the life of this session.
        """
        lat, lon = NORTH_POLE
        return frozenset(self.provider.zone_at(lat, lon, r).id for r in self.resolutions)

    @cached_property
    def south_pole_zones(self) -> frozenset[str]:
        """Ids of the zone holding the south pole, one per resolution."""
        lat, lon = SOUTH_POLE
        return frozenset(self.provider.zone_at(lat, lon, r).id for r in self.resolutions)

    def is_pole_zone(self, zone_id: str) -> bool:
        return zone_id in self.north_pole_zones or zone_id in self.south_pole_zones

    # ------------------------------------------------------------------
    # Point lookups
    # ------------------------------------------------------------------

    def zone(self, zone_id: str) -> Zone:
        """Resolve an identifier; raises ``InvalidZoneIdError`` if unknown."""
        return self.provider.zone_by_id(zone_id)

    def zone_at(self, lat: float, lon: float, resolution: int) -> Zone:
        check_resolution(self.provider, resolution)
        return self.provider.zone_at(lat, lon, resolution)

    def point(self, point: Point, resolution: int) -> Zone:
        """Zone containing a shapely point (x = lon, y = lat)."""
        check_resolution(self.provider, resolution)
        return self.provider.zone_at(point.y, point.x, resolution)

    # ------------------------------------------------------------------
    # Region queries
    # ------------------------------------------------------------------

    def zones_from_envelope(self, envelope: Envelope, resolution: int) -> Iterator[Zone]:
        return zones_from_envelope(self.provider, envelope, resolution)

    def count_zones_from_envelope(self, envelope: Envelope, resolution: int) -> int:
        return count_zones_from_envelope(self.provider, envelope, resolution)

    def polygon(self, region: Polygon | MultiPolygon, resolution: int) -> Iterator[Zone]:
        return polygon_zones(self.provider, region, resolution)

    def compact_polygon(self, region: Polygon | MultiPolygon, resolution: int) -> Iterator[Zone]:
        return compact_polygon_zones(self.provider, region, resolution)

    # ------------------------------------------------------------------
    # Hierarchy and adjacency
    # ------------------------------------------------------------------

    def children(self, zone_id: str, resolution: int) -> Iterator[Zone]:
        return children(self.provider, zone_id, resolution)

    def parents(self, zone_id: str) -> Iterator[str]:
        return parents(self.provider, zone_id)

    def neighbors(self, zone_id: str, radius: int) -> set[str]:
        return neighbors(self.provider, zone_id, radius)


def open_instance(config: DGGSConfig) -> DGGSInstance:
    """Open a provider session from *config* and wrap it in an instance."""
    provider = get_provider(config.provider, config.provider_config())
    logger.info(
        "Opened DGGS instance | identifier=%s | provider=%s",
        config.identifier,
        config.provider,
    )
    return DGGSInstance(provider, config.identifier)
