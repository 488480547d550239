"""Antimeridian-aware geometric relation tests.

Zone boundaries and query regions near the +-180 degree seam may carry
longitudes outside ``[-180, 180]``.  Every relation here is tested on the
geometry as given and, where asked, once more on its copy shifted by 360
degrees to the other side of the seam.

Only one shift is ever tried.  A geometry wrapping the globe more than
once is not corrected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from shapely import affinity
from shapely.prepared import prep

from dggs_query.core.constants import DATELINE_SHIFT_DEG, WORLD

if TYPE_CHECKING:
    from collections.abc import Callable

    from shapely.geometry.base import BaseGeometry
    from shapely.prepared import PreparedGeometry

    from dggs_query.models.envelope import Envelope

G = TypeVar("G", bound="BaseGeometry")


def flip_dateline_side(geometry: G) -> G | None:
    """Return *geometry* moved to the other side of the antimeridian.

    Returns ``None`` when the geometry's longitudes already lie within
    ``[-180, 180]``.  Otherwise every longitude is shifted by +360 if the
    western edge is below -180, else by -360.
    """
    if geometry.is_empty:
        return None
    min_lon, _min_lat, max_lon, _max_lat = geometry.bounds
    if min_lon >= WORLD.min_lon and max_lon <= WORLD.max_lon:
        return None
    offset = DATELINE_SHIFT_DEG if min_lon < WORLD.min_lon else -DATELINE_SHIFT_DEG
    return affinity.translate(geometry, xoff=offset)


def _test_relation(
    geometry: BaseGeometry,
    relation: Callable[[BaseGeometry], bool],
    test_across_dateline: bool,
) -> bool:
    """Works for relations where either representation is enough (intersects, contains)."""
    if relation(geometry):
        return True
    if not test_across_dateline:
        return False
    other_side = flip_dateline_side(geometry)
    if other_side is None:
        return False
    return relation(other_side)


class EnvelopeTester:
    """Rectangle relations against one query envelope.

    The envelope is prepared once and reused for every zone a traversal
    visits.
    """

    def __init__(self, envelope: Envelope) -> None:
        self.envelope = envelope
        self._prepared = prep(envelope.to_polygon())

    def overlaps(self, boundary: BaseGeometry, test_across_dateline: bool) -> bool:
        """Whether *boundary* intersects the envelope."""
        return _test_relation(boundary, self._prepared.intersects, test_across_dateline)

    def contained(self, boundary: BaseGeometry, test_across_dateline: bool) -> bool:
        """Whether the envelope fully contains *boundary*."""
        return _test_relation(boundary, self._prepared.contains, test_across_dateline)


def overlaps(boundary: BaseGeometry, envelope: Envelope, test_across_dateline: bool) -> bool:
    """Whether *boundary* (or, if enabled, its shifted copy) intersects *envelope*."""
    return EnvelopeTester(envelope).overlaps(boundary, test_across_dateline)


def contained(boundary: BaseGeometry, envelope: Envelope, test_across_dateline: bool) -> bool:
    """Whether *envelope* contains *boundary* (or, if enabled, its shifted copy)."""
    return EnvelopeTester(envelope).contained(boundary, test_across_dateline)


def disjoint(region: PreparedGeometry, geometry: BaseGeometry) -> bool:
    """True only if both representations of *geometry* miss *region*."""
    if not region.disjoint(geometry):
        return False
    other_side = flip_dateline_side(geometry)
    if other_side is None:
        return True
    return region.disjoint(other_side)


def contains_geometry(region: PreparedGeometry, geometry: BaseGeometry) -> bool:
    """True if either representation of *geometry* lies inside *region*."""
    return _test_relation(geometry, region.contains, test_across_dateline=True)
