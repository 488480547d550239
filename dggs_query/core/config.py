"""DGGS session configuration loaded from environment variables.

All configuration values have defaults matching the rHEALPix grid the
engine was built against (N_side 3, WGS 84, polar squares at position 0).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range.  Bad configuration is caught when the session is
    opened rather than midway through a traversal.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dggs_query.core.constants import DEFAULT_MAX_RESOLUTION, MAX_CONFIGURABLE_RESOLUTION
from dggs_query.core.exceptions import DGGSError
from dggs_query.models.provider import ProviderConfig

SUPPORTED_ELLIPSOIDS: tuple[str, ...] = ("WGS84", "UNIT_SPHERE")

# Polar squares sit on one of the four sides of the equatorial strip.
_MAX_POLAR_SQUARE = 3


class ConfigValidationError(DGGSError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class DGGSConfig:
    """Immutable DGGS session configuration.

    Attributes:
        provider: Grid provider registry key (``rhealpix`` by default).
        identifier: Public identifier of the DGGS instance.
        max_resolution: Deepest resolution the session serves.
        ellipsoid: Reference ellipsoid name for the rHEALPix projection.
        north_square: Position (0-3) of the north polar square.
        south_square: Position (0-3) of the south polar square.
    """

    provider: str = "rhealpix"
    identifier: str = "rHEALPix"
    max_resolution: int = DEFAULT_MAX_RESOLUTION
    ellipsoid: str = "WGS84"
    north_square: int = 0
    south_square: int = 0

    @classmethod
    def from_env(cls) -> DGGSConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``DGGS_MAX_RESOLUTION=abc``).
        """
        config = cls(
            provider=os.getenv("DGGS_PROVIDER", "rhealpix"),
            identifier=os.getenv("DGGS_IDENTIFIER", "rHEALPix"),
            max_resolution=int(os.getenv("DGGS_MAX_RESOLUTION", str(DEFAULT_MAX_RESOLUTION))),
            ellipsoid=os.getenv("DGGS_ELLIPSOID", "WGS84"),
            north_square=int(os.getenv("DGGS_NORTH_SQUARE", "0")),
            south_square=int(os.getenv("DGGS_SOUTH_SQUARE", "0")),
        )
        validate(config)
        return config

    def provider_config(self) -> ProviderConfig:
        """Build the ``ProviderConfig`` handed to the provider factory."""
        return ProviderConfig(
            name=self.provider,
            max_resolution=self.max_resolution,
            extra_params={
                "ellipsoid": self.ellipsoid,
                "north_square": str(self.north_square),
                "south_square": str(self.south_square),
            },
        )


def validate(config: DGGSConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.provider:
        raise ConfigValidationError("DGGS_PROVIDER", config.provider, "must not be empty")

    if not config.identifier:
        raise ConfigValidationError("DGGS_IDENTIFIER", config.identifier, "must not be empty")

    if not 0 <= config.max_resolution <= MAX_CONFIGURABLE_RESOLUTION:
        raise ConfigValidationError(
            "DGGS_MAX_RESOLUTION",
            config.max_resolution,
            f"must be between 0 and {MAX_CONFIGURABLE_RESOLUTION}",
        )

    if config.ellipsoid not in SUPPORTED_ELLIPSOIDS:
        raise ConfigValidationError(
            "DGGS_ELLIPSOID",
            config.ellipsoid,
            f"must be one of {', '.join(SUPPORTED_ELLIPSOIDS)}",
        )

    if not 0 <= config.north_square <= _MAX_POLAR_SQUARE:
        raise ConfigValidationError(
            "DGGS_NORTH_SQUARE",
            config.north_square,
            f"must be between 0 and {_MAX_POLAR_SQUARE}",
        )

    if not 0 <= config.south_square <= _MAX_POLAR_SQUARE:
        raise ConfigValidationError(
            "DGGS_SOUTH_SQUARE",
            config.south_square,
            f"must be between 0 and {_MAX_POLAR_SQUARE}",
        )
