"""Shared pytest fixtures for the DGGS query engine test suite."""

from __future__ import annotations

from collections import Counter

import pytest
from shapely.geometry import Point, box

from dggs_query.core.constants import ROOT_FACES
from dggs_query.models.provider import ProviderConfig
from dggs_query.models.zone import Zone, ZoneIdFormatError, child_ids, parse_zone_id
from dggs_query.providers.base import GridProvider, InvalidZoneIdError

# ---------------------------------------------------------------------------
# In-memory planar grid
# ---------------------------------------------------------------------------

FAKE = "fake_planar"

# Faces tile the lon/lat rectangle as two rows of three:
#   N O P   (lat 0..90,   lon -180..-60, -60..60, 60..180)
#   Q R S   (lat -90..0)
_FACE_COLUMNS = 3
_FACE_WIDTH_DEG = 120.0
_FACE_HEIGHT_DEG = 90.0


class FakePlanarGridProvider(GridProvider):
    """Deterministic 3 x 3 planar grid with no external dependencies.

    Child digit ``d`` sits at row ``d // 3`` (from the north) and column
    ``d % 3`` (from the west) of its parent.  Neighbors are edge
    adjacent, wrap across the antimeridian and stop at the poles.

    ``calls`` counts provider calls by method name.
    """

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config or ProviderConfig(name=FAKE, max_resolution=4))
        self.calls: Counter[str] = Counter()
        self.closed = False

    def root_zone_ids(self) -> list[str]:
        self.calls["root_zone_ids"] += 1
        return list(ROOT_FACES)

    def zone_at(self, lat: float, lon: float, resolution: int) -> Zone:
        self.calls["zone_at"] += 1
        side = 3**resolution
        columns, rows = _FACE_COLUMNS * side, 2 * side
        ix = min(int((lon + 180.0) / (_FACE_WIDTH_DEG / side)), columns - 1)
        iy = min(int((90.0 - lat) / (_FACE_HEIGHT_DEG / side)), rows - 1)
        return self._build(_id_from_index(ix, iy, resolution))

    def zone_by_id(self, zone_id: str) -> Zone:
        self.calls["zone_by_id"] += 1
        try:
            face, digits = parse_zone_id(zone_id)
        except ZoneIdFormatError as exc:
            raise InvalidZoneIdError(self.name, zone_id) from exc
        if face not in ROOT_FACES or len(digits) > self.max_resolution():
            raise InvalidZoneIdError(self.name, zone_id)
        return self._build(zone_id)

    def children_of(self, zone: Zone) -> list[Zone]:
        self.calls["children_of"] += 1
        if zone.resolution >= self.max_resolution():
            return []
        return [self._build(child) for child in child_ids(zone.id)]

    def neighbors_of(self, zone_id: str) -> list[str]:
        self.calls["neighbors_of"] += 1
        ix, iy, resolution = _index_from_id(zone_id)
        side = 3**resolution
        columns, rows = _FACE_COLUMNS * side, 2 * side
        found = [
            _id_from_index((ix - 1) % columns, iy, resolution),
            _id_from_index((ix + 1) % columns, iy, resolution),
        ]
        if iy > 0:
            found.append(_id_from_index(ix, iy - 1, resolution))
        if iy < rows - 1:
            found.append(_id_from_index(ix, iy + 1, resolution))
        return [cell for cell in dict.fromkeys(found) if cell != zone_id]

    def close(self) -> None:
        self.closed = True

    def _build(self, zone_id: str) -> Zone:
        ix, iy, resolution = _index_from_id(zone_id)
        width = _FACE_WIDTH_DEG / 3**resolution
        height = _FACE_HEIGHT_DEG / 3**resolution
        west = -180.0 + ix * width
        north = 90.0 - iy * height
        return Zone(
            id=zone_id,
            resolution=resolution,
            boundary=box(west, north - height, west + width, north),
            center=Point(west + width / 2, north - height / 2),
        )


def _index_from_id(zone_id: str) -> tuple[int, int, int]:
    """Global (column, row, resolution) of a zone, rows counted from the north."""
    face, digits = parse_zone_id(zone_id)
    face_index = ROOT_FACES.index(face)
    ix, iy = face_index % _FACE_COLUMNS, face_index // _FACE_COLUMNS
    for digit in digits:
        ix = ix * 3 + digit % 3
        iy = iy * 3 + digit // 3
    return ix, iy, len(digits)


def _id_from_index(ix: int, iy: int, resolution: int) -> str:
    side = 3**resolution
    face = ROOT_FACES[(iy // side) * _FACE_COLUMNS + ix // side]
    digits = []
    for level in range(resolution - 1, -1, -1):
        step = 3**level
        digits.append(str((iy // step % 3) * 3 + ix // step % 3))
    return face + "".join(digits)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_provider() -> FakePlanarGridProvider:
    """A planar grid serving resolutions 0-4."""
    return FakePlanarGridProvider()


@pytest.fixture()
def make_fake_provider():
    """Factory for planar grids with a chosen maximum resolution."""

    def _make(max_resolution: int = 4) -> FakePlanarGridProvider:
        return FakePlanarGridProvider(ProviderConfig(name=FAKE, max_resolution=max_resolution))

    return _make


@pytest.fixture()
def fake_provider_cls() -> type[FakePlanarGridProvider]:
    """The planar grid class, for registering with the provider factory."""
    return FakePlanarGridProvider
