"""Axis-aligned geographic envelope.

An ``Envelope`` is the rectangular query region of the envelope queries
and the shape of the world domain.  Coordinates are WGS 84 degrees,
longitude first, matching the ``(min_lon, min_lat, max_lon, max_lat)``
bbox convention used by shapely's ``bounds``.

A *null* envelope (``min > max`` on either axis) is the empty region;
it is what ``intersection`` returns for disjoint inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapely.geometry import box

if TYPE_CHECKING:
    from shapely.geometry import Polygon
    from shapely.geometry.base import BaseGeometry


@dataclass(frozen=True, slots=True)
class Envelope:
    """A ``(min_lon, min_lat, max_lon, max_lat)`` rectangle in degrees.

    Attributes:
        min_lon: Western edge.
        min_lat: Southern edge.
        max_lon: Eastern edge.
        max_lat: Northern edge.
    """

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def null(cls) -> Envelope:
        """Return the empty envelope."""
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @classmethod
    def from_bounds(cls, bounds: tuple[float, float, float, float]) -> Envelope:
        """Build from a shapely-style ``bounds`` tuple."""
        min_lon, min_lat, max_lon, max_lat = bounds
        return cls(float(min_lon), float(min_lat), float(max_lon), float(max_lat))

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> Envelope:
        """Return the bounding envelope of a shapely geometry."""
        if geometry.is_empty:
            return cls.null()
        return cls.from_bounds(geometry.bounds)

    @property
    def is_null(self) -> bool:
        """Whether this is the empty envelope."""
        return self.min_lon > self.max_lon or self.min_lat > self.max_lat

    @property
    def width(self) -> float:
        return 0.0 if self.is_null else self.max_lon - self.min_lon

    @property
    def height(self) -> float:
        return 0.0 if self.is_null else self.max_lat - self.min_lat

    def intersection(self, other: Envelope) -> Envelope:
        """Return the overlapping rectangle, or the null envelope if disjoint."""
        if self.is_null or other.is_null:
            return Envelope.null()
        result = Envelope(
            max(self.min_lon, other.min_lon),
            max(self.min_lat, other.min_lat),
            min(self.max_lon, other.max_lon),
            min(self.max_lat, other.max_lat),
        )
        return Envelope.null() if result.is_null else result

    def to_polygon(self) -> Polygon:
        """Return the envelope as a shapely rectangle."""
        return box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)
