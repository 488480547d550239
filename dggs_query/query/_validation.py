"""Argument checks shared by the query operations.

Bad arguments are rejected before any traversal starts, so a caller
never receives a partially consumed iterator for an invalid request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dggs_query.core.exceptions import InvalidRadiusError, InvalidResolutionError

if TYPE_CHECKING:
    from dggs_query.providers.base import GridProvider


def check_resolution(provider: GridProvider, resolution: int) -> None:
    """Raise ``InvalidResolutionError`` unless the provider serves *resolution*."""
    if not 0 <= resolution <= provider.max_resolution():
        raise InvalidResolutionError(
            resolution,
            f"Resolution {resolution} outside 0..{provider.max_resolution()}",
        )


def check_radius(radius: int) -> None:
    """Raise ``InvalidRadiusError`` for a negative neighbor radius."""
    if radius < 0:
        raise InvalidRadiusError(radius)
