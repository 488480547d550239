"""Data model for a single grid cell (zone) and its identifier.

A zone identifier is a face symbol followed by zero or more digits, each
in ``0..8``: ``"N"`` is a resolution 0 face, ``"N14"`` its resolution 2
descendant reached through child 1 then child 4.  The identifier alone
fixes the zone's position in the hierarchy, so parents and children are
pure string operations; geometry needs a grid provider.

The rHEALPix library addresses cells by *suid* tuples (``('N', 1, 4)``);
``suid`` and ``zone_id_from_suid`` convert between the two forms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dggs_query.core.exceptions import ValidationError

if TYPE_CHECKING:
    from shapely.geometry import Point, Polygon

#: Digit alphabet of the identifier suffix, in child visiting order.
ZONE_DIGITS = "012345678"


class ZoneIdFormatError(ValueError, ValidationError):
    """Raised when a zone identifier is not ``<face><digits>`` text."""

    default_stage = "zone_id"
    default_code = "ZONE_ID_MALFORMED"

    def __init__(self, zone_id: object, reason: str) -> None:
        self.zone_id = zone_id
        ValidationError.__init__(self, f"Malformed zone identifier {zone_id!r}: {reason}")


@dataclass(frozen=True, slots=True)
class Zone:
    """One immutable cell of the hierarchical grid.

    Equality and hashing use the identifier only; two lookups of the same
    id are the same zone even if they hold distinct geometry objects.

    Attributes:
        id: Face symbol plus digit suffix (e.g. ``"N14"``).
        resolution: Depth in the hierarchy (number of digits, root = 0).
        boundary: Cell outline as a lon/lat polygon.  Cells straddling the
            antimeridian may use longitudes beyond +-180.
        center: Cell center point (x = lon, y = lat).
    """

    id: str
    resolution: int
    boundary: Polygon = field(compare=False, repr=False)
    center: Point = field(compare=False, repr=False)

    @property
    def face(self) -> str:
        return self.id[0]

    @property
    def parent_id(self) -> str | None:
        """Identifier of the parent zone, ``None`` for a root face."""
        return parent_id(self.id)

    @property
    def area_m2(self) -> float:
        """Geodesic area of the boundary on the WGS 84 ellipsoid, in m^2.

        Uses pyproj.Geod so the value is correct at every latitude.
        Winding-order agnostic.
        """
        from pyproj import Geod

        geod = Geod(ellps="WGS84")
        area, _perimeter = geod.geometry_area_perimeter(self.boundary)
        return abs(area)


# ---------------------------------------------------------------------------
# Identifier helpers
# ---------------------------------------------------------------------------


def parse_zone_id(zone_id: str) -> tuple[str, tuple[int, ...]]:
    """Split an identifier into its face symbol and digit tuple.

    Raises:
        ZoneIdFormatError: If the text is empty, the face is not a letter,
            or a suffix character is not one of ``0..8``.
    """
    if not isinstance(zone_id, str) or not zone_id:
        raise ZoneIdFormatError(zone_id, "must be a non-empty string")
    face, suffix = zone_id[0], zone_id[1:]
    if not face.isalpha():
        raise ZoneIdFormatError(zone_id, "must start with a face symbol")
    for char in suffix:
        if char not in ZONE_DIGITS:
            raise ZoneIdFormatError(zone_id, f"digit {char!r} is outside 0-8")
    return face, tuple(int(char) for char in suffix)


def zone_resolution(zone_id: str) -> int:
    """Resolution encoded by an identifier (length of the digit suffix)."""
    parse_zone_id(zone_id)
    return len(zone_id) - 1


def parent_id(zone_id: str) -> str | None:
    """Identifier one level up, ``None`` for a root face."""
    parse_zone_id(zone_id)
    if len(zone_id) == 1:
        return None
    return zone_id[:-1]


def child_ids(zone_id: str) -> list[str]:
    """The 9 child identifiers, in digit (visiting) order."""
    parse_zone_id(zone_id)
    return [zone_id + digit for digit in ZONE_DIGITS]


def suid(zone_id: str) -> tuple[str | int, ...]:
    """Convert ``"N14"`` to the rHEALPix suid tuple ``('N', 1, 4)``."""
    face, digits = parse_zone_id(zone_id)
    return (face, *digits)


def zone_id_from_suid(cell_suid: tuple[object, ...] | list[object]) -> str:
    """Convert an rHEALPix suid tuple back to identifier text."""
    return "".join(str(part) for part in cell_suid)
