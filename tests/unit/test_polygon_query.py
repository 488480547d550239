"""Tests for polygon decomposition with compaction and lazy expansion."""

from __future__ import annotations

import itertools

import pytest
from shapely.geometry import MultiPolygon, box

from dggs_query.core.exceptions import InvalidResolutionError
from dggs_query.query.polygon import compact_polygon_zones, polygon_zones

# Slightly larger than face O (lon -60..60, lat 0..90).
AROUND_FACE_O = box(-60.5, -0.5, 60.5, 90.0)
# Small square straddling the equator at lon 0.
EQUATOR_SQUARE = box(-10.0, -10.0, 10.0, 10.0)


class TestCompactPolygonZones:
    """Phase 1 emits covered coarse zones whole."""

    def test_covered_face_emitted_whole(self, fake_provider) -> None:
        ids = [zone.id for zone in compact_polygon_zones(fake_provider, AROUND_FACE_O, 2)]
        assert ids == ["O"]

    def test_center_rule_at_target(self, fake_provider) -> None:
        ids = {zone.id for zone in compact_polygon_zones(fake_provider, EQUATOR_SQUARE, 2)}
        assert ids == {"O77", "R11"}

    def test_outside_world_is_empty(self, fake_provider) -> None:
        assert list(compact_polygon_zones(fake_provider, box(200, 0, 210, 10), 2)) == []
        assert sum(fake_provider.calls.values()) == 0


class TestPolygonZones:
    """Phase 2 expands every compact zone to the target resolution."""

    def test_face_expanded_to_81(self, fake_provider) -> None:
        zones = list(polygon_zones(fake_provider, AROUND_FACE_O, 2))
        assert len(zones) == 81
        assert all(zone.resolution == 2 for zone in zones)
        assert all(zone.id.startswith("O") for zone in zones)

    def test_expansion_is_lazy(self, fake_provider) -> None:
        """Reading a few zones does not expand the whole covered face."""
        it = polygon_zones(fake_provider, AROUND_FACE_O, 4)
        first = list(itertools.islice(it, 3))
        assert [zone.id for zone in first] == ["O0000", "O0001", "O0002"]
        assert fake_provider.calls["children_of"] < 100

    def test_target_zones_are_kept(self, fake_provider) -> None:
        ids = {zone.id for zone in polygon_zones(fake_provider, EQUATOR_SQUARE, 2)}
        assert ids == {"O77", "R11"}

    def test_multipolygon(self, fake_provider) -> None:
        region = MultiPolygon([AROUND_FACE_O, box(-179.0, -89.0, -61.0, -1.0)])
        ids = {zone.id for zone in polygon_zones(fake_provider, region, 1)}
        assert {f"O{d}" for d in range(9)} <= ids
        assert all(zone_id[0] in {"O", "Q"} for zone_id in ids)

    def test_invalid_resolution(self, fake_provider) -> None:
        with pytest.raises(InvalidResolutionError):
            polygon_zones(fake_provider, AROUND_FACE_O, 9)
