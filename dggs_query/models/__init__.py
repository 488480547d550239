"""Data models and schemas.

Defines the data structures used throughout the engine:
- Envelope: Axis-aligned lon/lat query rectangle
- Zone: One immutable grid cell with boundary and center
- ProviderConfig: Configuration handed to a grid provider backend
"""

from dggs_query.models.envelope import Envelope
from dggs_query.models.provider import ModelValidationError, ProviderConfig
from dggs_query.models.zone import (
    Zone,
    ZoneIdFormatError,
    child_ids,
    parent_id,
    parse_zone_id,
    suid,
    zone_id_from_suid,
    zone_resolution,
)

__all__ = [
    "Envelope",
    "ModelValidationError",
    "ProviderConfig",
    "Zone",
    "ZoneIdFormatError",
    "child_ids",
    "parent_id",
    "parse_zone_id",
    "suid",
    "zone_id_from_suid",
    "zone_resolution",
]
