"""rHEALPix grid adapter (rhealpixdggs library).

Concrete ``GridProvider`` backed by ``rhealpixdggs.dggs.RHEALPixDGGS``
with ``N_side = 3``: six resolution 0 faces (``N O P Q R S``), each cell
splitting into 3 x 3 children.

Geometry conventions:
    - Boundaries are built from the cell vertices in lon/lat.
    - A cell whose vertices span more than 180 degrees of longitude is
      straddling the antimeridian; its western vertices are moved by
      +360 so the outline is a single continuous polygon, and a western
      nucleus moves with them.  The relation tester shifts the outline
      back when testing the other side of the seam.
    - The cell holding a pole degenerates in lon/lat.  Its outline is the
      band from the cell's lowest (highest) vertex latitude to the pole,
      across all longitudes.

The library object is not re-entrant: every call goes through
``_run_safe`` which serialises access and wraps library failures in
``ProviderQueryError``.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, TypeVar

from rhealpixdggs.dggs import Cell, RHEALPixDGGS
from rhealpixdggs.ellipsoids import UNIT_SPHERE, WGS84_ELLIPSOID
from shapely.geometry import Point, Polygon, box

from dggs_query.core.constants import CHILDREN_PER_ZONE, NORTH_POLE, ROOT_FACES, SOUTH_POLE
from dggs_query.models.zone import (
    Zone,
    ZoneIdFormatError,
    parse_zone_id,
    suid,
    zone_id_from_suid,
)
from dggs_query.providers.base import (
    GridProvider,
    InvalidZoneIdError,
    ProviderContractError,
    ProviderQueryError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from dggs_query.models.provider import ProviderConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

N_SIDE = 3

_ELLIPSOIDS = {
    "WGS84": WGS84_ELLIPSOID,
    "UNIT_SPHERE": UNIT_SPHERE,
}

# Vertex longitude span beyond which a cell is taken to wrap the seam.
_DATELINE_SPAN_DEG = 180.0


class RHealPixGridProvider(GridProvider):
    """rHEALPix DGGS adapter.

    ``extra_params`` keys (all optional, strings):
        ``ellipsoid``     — ``WGS84`` (default) or ``UNIT_SPHERE``.
        ``north_square``  — position 0-3 of the north polar square.
        ``south_square``  — position 0-3 of the south polar square.
    """

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        params = config.extra_params
        ellipsoid_name = params.get("ellipsoid", "WGS84")
        ellipsoid = _ELLIPSOIDS.get(ellipsoid_name)
        if ellipsoid is None:
            msg = f"Unsupported ellipsoid {ellipsoid_name!r}"
            raise ProviderQueryError(provider=self.name, message=msg)
        self._dggs = RHEALPixDGGS(
            ellipsoid=ellipsoid,
            N_side=N_SIDE,
            north_square=int(params.get("north_square", "0")),
            south_square=int(params.get("south_square", "0")),
        )
        self._lock = threading.Lock()
        # resolution -> (north pole cell id, south pole cell id)
        self._pole_ids: dict[int, tuple[str, str]] = {}
        logger.info(
            "rHEALPix provider ready | ellipsoid=%s | max_resolution=%d",
            ellipsoid_name,
            self.max_resolution(),
        )

    # ------------------------------------------------------------------
    # GridProvider
    # ------------------------------------------------------------------

    def root_zone_ids(self) -> list[str]:
        return list(ROOT_FACES)

    def zone_at(self, lat: float, lon: float, resolution: int) -> Zone:
        """Return the zone containing ``(lat, lon)`` at *resolution*."""
        self._check_resolution(resolution)
        cell = self._cell_at(lat, lon, resolution)
        if cell is None:
            msg = f"No cell contains lat={lat}, lon={lon} at resolution {resolution}"
            raise ProviderQueryError(provider=self.name, message=msg)
        return self._to_zone(cell)

    def zone_by_id(self, zone_id: str) -> Zone:
        """Resolve *zone_id*; raises ``InvalidZoneIdError`` if it is not a cell."""
        try:
            face, digits = parse_zone_id(zone_id)
        except ZoneIdFormatError as exc:
            raise InvalidZoneIdError(self.name, zone_id) from exc
        if face not in self.root_zone_ids() or len(digits) > self.max_resolution():
            raise InvalidZoneIdError(self.name, zone_id)

        with self._lock:
            try:
                cell = Cell(self._dggs, (face, *digits))
            except Exception as exc:
                raise InvalidZoneIdError(self.name, zone_id) from exc
        return self._to_zone(cell)

    def children_of(self, zone: Zone) -> list[Zone]:
        """Return the 9 children of *zone*, empty at the maximum resolution."""
        if zone.resolution >= self.max_resolution():
            return []
        parent = self._cell(zone.id)
        cells = self._run_safe(lambda: list(parent.subcells()))
        if len(cells) != CHILDREN_PER_ZONE:
            msg = f"Zone {zone.id} has {len(cells)} children, expected {CHILDREN_PER_ZONE}"
            raise ProviderContractError(provider=self.name, message=msg)
        return [self._to_zone(cell) for cell in cells]

    def neighbors_of(self, zone_id: str) -> list[str]:
        """Return the edge-adjacent zone ids (up/down/left/right), excluding self."""
        cell = self._cell(zone_id)
        found = self._run_safe(lambda: list(cell.neighbors(plane=False).values()))
        result: list[str] = []
        for neighbor in found:
            neighbor_id = zone_id_from_suid(neighbor.suid)
            if neighbor_id != zone_id and neighbor_id not in result:
                result.append(neighbor_id)
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _run_safe(self, call: Callable[[], T]) -> T:
        """Run a library call under the session lock, wrapping failures."""
        with self._lock:
            try:
                return call()
            except Exception as exc:
                msg = f"rHEALPix call failed: {exc}"
                raise ProviderQueryError(provider=self.name, message=msg) from exc

    def _check_resolution(self, resolution: int) -> None:
        if not 0 <= resolution <= self.max_resolution():
            msg = f"Resolution {resolution} outside 0..{self.max_resolution()}"
            raise ProviderQueryError(provider=self.name, message=msg)

    def _cell_at(self, lat: float, lon: float, resolution: int) -> Cell:
        return self._run_safe(
            lambda: self._dggs.cell_from_point(resolution, (lon, lat), plane=False)
        )

    def _cell(self, zone_id: str) -> Cell:
        try:
            cell_suid = suid(zone_id)
        except ZoneIdFormatError as exc:
            raise InvalidZoneIdError(self.name, zone_id) from exc
        return self._run_safe(lambda: Cell(self._dggs, cell_suid))

    def _pole_zone_ids(self, resolution: int) -> tuple[str, str]:
        """Ids of the cells holding the north and south pole at *resolution*."""
        cached = self._pole_ids.get(resolution)
        if cached is not None:
            return cached
        north = self._cell_at(*NORTH_POLE, resolution)
        south = self._cell_at(*SOUTH_POLE, resolution)
        pair = (zone_id_from_suid(north.suid), zone_id_from_suid(south.suid))
        self._pole_ids[resolution] = pair
        return pair

    def _to_zone(self, cell: Cell) -> Zone:
        zone_id = zone_id_from_suid(cell.suid)
        resolution = len(cell.suid) - 1
        vertices = self._run_safe(lambda: [tuple(v) for v in cell.vertices(plane=False)])
        center_lon, center_lat = self._run_safe(lambda: tuple(cell.nucleus(plane=False)))

        north_id, south_id = self._pole_zone_ids(resolution)
        if zone_id == north_id:
            boundary = box(-180.0, min(lat for _lon, lat in vertices), 180.0, 90.0)
        elif zone_id == south_id:
            boundary = box(-180.0, -90.0, 180.0, max(lat for _lon, lat in vertices))
        else:
            ring = _unwrap_dateline(vertices)
            boundary = Polygon(ring)
            if ring is not vertices and center_lon < 0:
                center_lon += 360.0

        return Zone(
            id=zone_id,
            resolution=resolution,
            boundary=boundary,
            center=Point(center_lon, center_lat),
        )


def _unwrap_dateline(vertices: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Make a seam-straddling ring continuous by moving western vertices east.

    Returns *vertices* itself when the ring does not straddle the seam.
    """
    lons = [lon for lon, _lat in vertices]
    if max(lons) - min(lons) <= _DATELINE_SPAN_DEG:
        return vertices
    return [(lon + 360.0 if lon < 0 else lon, lat) for lon, lat in vertices]
