"""GridProvider abstract base class.

Defines the contract that every grid backend adapter must implement.
The traversal and query engine interacts exclusively with this
interface — it never knows (or cares) which concrete grid is behind it.

Contract:
    - ``zone_at(lat, lon, resolution)`` — the zone containing a point.
    - ``zone_by_id(zone_id)``          — resolve an identifier (or fail).
    - ``children_of(zone)``             — the 9 children, in digit order.
    - ``neighbors_of(zone_id)``         — adjacent zone identifiers.
    - ``root_zone_ids()``               — the resolution 0 faces.
    - ``max_resolution()`` / ``resolutions_supported()``.

Provider calls are treated as blocking and potentially expensive.  A
single provider instance is one session: callers wanting parallel
queries open independent sessions.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from dggs_query.core.exceptions import ContractError, DGGSError, ValidationError

if TYPE_CHECKING:
    from dggs_query.models.provider import ProviderConfig
    from dggs_query.models.zone import Zone


class GridProvider(abc.ABC):
    """Abstract base class for grid backend adapters.

    Concrete implementations must override ``zone_at``, ``zone_by_id``,
    ``children_of``, ``neighbors_of`` and ``root_zone_ids``.  The
    constructor receives a ``ProviderConfig`` carrying the maximum
    resolution and backend-specific parameters.

    Example usage::

        provider = get_provider("rhealpix")
        zone = provider.zone_at(46.6, -120.5, 3)
        for child in provider.children_of(zone):
            print(child.id, child.center)
    """

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Return the provider name from configuration."""
        return self._config.name

    @property
    def config(self) -> ProviderConfig:
        """Return the provider configuration (read-only)."""
        return self._config

    def max_resolution(self) -> int:
        """Deepest resolution this provider serves."""
        return self._config.max_resolution

    def resolutions_supported(self) -> list[int]:
        """All served resolutions, coarsest first."""
        return list(range(self.max_resolution() + 1))

    def root_zones(self) -> list[Zone]:
        """Resolve every resolution 0 face, in face order."""
        return [self.zone_by_id(zone_id) for zone_id in self.root_zone_ids()]

    def close(self) -> None:  # noqa: B027
        """Release backend resources.  The default adapter holds none."""

    # ------------------------------------------------------------------
    # Abstract methods — every adapter must implement these
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def zone_at(self, lat: float, lon: float, resolution: int) -> Zone:
        """Return the zone containing ``(lat, lon)`` at *resolution*.

        Raises:
            ProviderError: On backend failures.
        """

    @abc.abstractmethod
    def zone_by_id(self, zone_id: str) -> Zone:
        """Resolve an identifier to its zone.

        Raises:
            InvalidZoneIdError: If *zone_id* does not name a zone of this grid.
        """

    @abc.abstractmethod
    def children_of(self, zone: Zone) -> list[Zone]:
        """Return the 9 direct children of *zone* in ascending digit order.

        Returns an empty list when *zone* is at the maximum resolution.
        """

    @abc.abstractmethod
    def neighbors_of(self, zone_id: str) -> list[str]:
        """Return identifiers of the zones adjacent to *zone_id*.

        The result never contains *zone_id* itself.
        """

    @abc.abstractmethod
    def root_zone_ids(self) -> list[str]:
        """Return the resolution 0 face identifiers in face order."""


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class ProviderError(DGGSError):
    """Base exception for grid provider errors.

    Attributes:
        provider: Name of the provider that raised the error.
        message: Human-readable error description.
        retryable: Whether the caller may retry the operation.
    """

    default_stage = "provider"
    default_code = "PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        self.provider = provider
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class InvalidZoneIdError(ValueError, ProviderError, ValidationError):
    """The identifier does not resolve to a zone of the grid.

    Surfaced immediately to the caller and never retryable.
    """

    default_stage = "zone_lookup"
    default_code = "INVALID_ZONE_ID"

    def __init__(self, provider: str, zone_id: object) -> None:
        self.zone_id = zone_id
        ProviderError.__init__(
            self, provider, f"Invalid zone identifier {zone_id!r}", retryable=False
        )


class ProviderQueryError(ProviderError):
    """A backend call failed while answering a grid question."""

    default_code = "PROVIDER_QUERY_FAILED"


class ProviderContractError(ProviderError, ContractError):
    """The backend returned data that breaks the grid contract."""

    default_code = "PROVIDER_CONTRACT_VIOLATED"
