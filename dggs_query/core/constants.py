"""Shared grid constants — single source of truth.

Centralises the world domain and hierarchy shape shared by the providers
and the query modules.
"""

from __future__ import annotations

from dggs_query.models.envelope import Envelope

# ---------------------------------------------------------------------------
# Geographic domain
# ---------------------------------------------------------------------------

WORLD: Envelope = Envelope(-180.0, -90.0, 180.0, 90.0)
"""Valid geographic coordinates. Every region query is clipped to it first."""

DATELINE_SHIFT_DEG: float = 360.0
"""Longitude offset between the two representations of the antimeridian seam."""

NORTH_POLE: tuple[float, float] = (90.0, 0.0)
SOUTH_POLE: tuple[float, float] = (-90.0, 0.0)
"""Pole coordinates as ``(lat, lon)``."""

# ---------------------------------------------------------------------------
# Hierarchy shape
# ---------------------------------------------------------------------------

CHILDREN_PER_ZONE: int = 9
"""Every non-maximal zone splits into exactly 9 children (3 x 3)."""

ROOT_FACES: tuple[str, ...] = ("N", "O", "P", "Q", "R", "S")
"""Resolution 0 face symbols of the rHEALPix grid."""

DEFAULT_MAX_RESOLUTION: int = 13
"""Deepest resolution served unless configured otherwise."""

MAX_CONFIGURABLE_RESOLUTION: int = 15
