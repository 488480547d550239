"""Tests for bounding-box enumeration and analytic counting.

Covers: world coverage per resolution, count equals enumeration,
short-circuit for regions outside the world, argument validation and
pruning of fully covered branches.
"""

from __future__ import annotations

import pytest

from dggs_query.core.constants import WORLD
from dggs_query.core.exceptions import InvalidResolutionError
from dggs_query.models.envelope import Envelope
from dggs_query.query.envelope import (
    count_zones_from_envelope,
    descendant_count,
    zones_from_envelope,
)

# Edges deliberately off the planar grid lines.
CONTINENT = Envelope(-101.5, -33.3, 17.2, 41.7)


class TestDescendantCount:
    def test_powers_of_nine(self) -> None:
        assert [descendant_count(d) for d in range(4)] == [1, 9, 81, 729]


class TestZonesFromEnvelope:
    """zones_from_envelope lists the zones meeting the box."""

    def test_world_at_root_is_all_faces(self, fake_provider) -> None:
        ids = [zone.id for zone in zones_from_envelope(fake_provider, WORLD, 0)]
        assert ids == ["N", "O", "P", "Q", "R", "S"]

    def test_world_at_resolution_one(self, fake_provider) -> None:
        zones = list(zones_from_envelope(fake_provider, WORLD, 1))
        assert len(zones) == 54
        assert all(zone.resolution == 1 for zone in zones)

    def test_continent_at_resolution_two(self, fake_provider) -> None:
        """10 columns x 9 rows of 13.3° x 10° cells meet the box."""
        zones = list(zones_from_envelope(fake_provider, CONTINENT, 2))
        assert len(zones) == 90
        assert len({zone.id for zone in zones}) == 90

    def test_every_zone_meets_the_box(self, fake_provider) -> None:
        region = CONTINENT.to_polygon()
        for zone in zones_from_envelope(fake_provider, CONTINENT, 2):
            assert zone.boundary.intersects(region)

    def test_outside_world_yields_nothing(self, fake_provider) -> None:
        assert list(zones_from_envelope(fake_provider, Envelope(190, 0, 200, 10), 3)) == []
        assert sum(fake_provider.calls.values()) == 0

    def test_partly_outside_world(self, fake_provider) -> None:
        ids = [zone.id for zone in zones_from_envelope(fake_provider, Envelope(-200, 10, -170, 20), 1)]
        assert ids == ["N6"]

    @pytest.mark.parametrize("resolution", [-1, 5])
    def test_invalid_resolution(self, fake_provider, resolution: int) -> None:
        with pytest.raises(InvalidResolutionError):
            zones_from_envelope(fake_provider, WORLD, resolution)


class TestCountZonesFromEnvelope:
    """count_zones_from_envelope agrees with enumeration without listing."""

    @pytest.mark.parametrize("resolution", [0, 1, 2, 3])
    def test_world_count(self, fake_provider, resolution: int) -> None:
        assert count_zones_from_envelope(fake_provider, WORLD, resolution) == 6 * 9**resolution

    @pytest.mark.parametrize("resolution", [0, 1, 2, 3])
    def test_count_matches_enumeration(self, make_fake_provider, resolution: int) -> None:
        listed = sum(1 for _ in zones_from_envelope(make_fake_provider(), CONTINENT, resolution))
        counted = count_zones_from_envelope(make_fake_provider(), CONTINENT, resolution)
        assert counted == listed

    def test_count_is_idempotent(self, fake_provider) -> None:
        first = count_zones_from_envelope(fake_provider, CONTINENT, 3)
        assert count_zones_from_envelope(fake_provider, CONTINENT, 3) == first

    def test_covered_branches_are_not_expanded(self, make_fake_provider) -> None:
        listing = make_fake_provider()
        counting = make_fake_provider()
        list(zones_from_envelope(listing, CONTINENT, 4))
        count_zones_from_envelope(counting, CONTINENT, 4)
        assert counting.calls["children_of"] < listing.calls["children_of"]

    def test_world_count_never_descends(self, fake_provider) -> None:
        assert count_zones_from_envelope(fake_provider, WORLD, 4) == 6 * 9**4
        assert fake_provider.calls["children_of"] == 0

    def test_outside_world_is_zero(self, fake_provider) -> None:
        assert count_zones_from_envelope(fake_provider, Envelope(-250, 0, -190, 10), 2) == 0
        assert sum(fake_provider.calls.values()) == 0

    def test_invalid_resolution(self, fake_provider) -> None:
        with pytest.raises(InvalidResolutionError):
            count_zones_from_envelope(fake_provider, WORLD, 99)
