"""Bounding-box queries: enumerate or count the zones touching an envelope.

Both queries clip the envelope to the world first; a region outside the
world yields nothing without any provider call.

``zones_from_envelope`` descends with the dateline-aware overlap test so
that no branch reachable only through the wrapped representation is
pruned, but accepts target-resolution zones on the direct test only.

``count_zones_from_envelope`` never materialises a fully covered branch:
once a zone lies inside the envelope its ``9 ** depth`` descendants are
counted analytically and the branch is not descended.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dggs_query.core.constants import CHILDREN_PER_ZONE, WORLD
from dggs_query.query._validation import check_resolution
from dggs_query.query.iterator import ZoneTreeIterator
from dggs_query.query.relations import EnvelopeTester

if TYPE_CHECKING:
    from collections.abc import Iterator

    from dggs_query.models.envelope import Envelope
    from dggs_query.models.zone import Zone
    from dggs_query.providers.base import GridProvider

logger = logging.getLogger(__name__)


def descendant_count(resolution_difference: int) -> int:
    """Number of descendants a zone has *resolution_difference* levels down."""
    return CHILDREN_PER_ZONE**resolution_difference


def zones_from_envelope(
    provider: GridProvider,
    envelope: Envelope,
    resolution: int,
) -> Iterator[Zone]:
    """Lazily yield the zones at *resolution* whose boundary meets *envelope*.

    Raises:
        InvalidResolutionError: If *resolution* is outside the provider's range.
    """
    check_resolution(provider, resolution)
    if envelope.intersection(WORLD).is_null:
        logger.debug("Envelope outside world | envelope=%s", envelope.as_tuple())
        return iter(())

    tester = EnvelopeTester(envelope)
    return ZoneTreeIterator(
        provider,
        descend=lambda zone: (
            zone.resolution < resolution and tester.overlaps(zone.boundary, True)
        ),
        accept=lambda zone: (
            zone.resolution == resolution and tester.overlaps(zone.boundary, False)
        ),
        mapper=lambda zone: zone,
    )


def count_zones_from_envelope(
    provider: GridProvider,
    envelope: Envelope,
    resolution: int,
) -> int:
    """Count the zones at *resolution* meeting *envelope* without listing them.

    The traversal emits a weight per accepted zone: 1 for a zone at the
    target resolution, ``9 ** depth`` for a coarser zone fully inside the
    envelope.  The count is the sum of the weights.

    Raises:
        InvalidResolutionError: If *resolution* is outside the provider's range.
    """
    check_resolution(provider, resolution)
    if envelope.intersection(WORLD).is_null:
        return 0

    tester = EnvelopeTester(envelope)

    def descend(zone: Zone) -> bool:
        if zone.resolution >= resolution:
            return False
        if not tester.overlaps(zone.boundary, True):
            return False
        return not tester.contained(zone.boundary, True)

    def accept(zone: Zone) -> bool:
        if zone.resolution == resolution:
            return tester.overlaps(zone.boundary, True)
        return tester.contained(zone.boundary, True)

    weights = ZoneTreeIterator(
        provider,
        descend=descend,
        accept=accept,
        mapper=lambda zone: descendant_count(resolution - zone.resolution),
    )
    count = sum(weights)
    logger.debug(
        "Envelope count | resolution=%d | count=%d | visited=%d",
        resolution,
        count,
        weights.visited,
    )
    return count
