"""Grid provider adapters.

Implements the backend-agnostic adapter pattern (Strategy pattern):
- GridProvider: Abstract base class defining the grid contract
- RHealPixGridProvider: rHEALPix DGGS via the rhealpixdggs library

The active provider is selected via configuration; the traversal engine
only ever sees a ``GridProvider``.
"""

from dggs_query.providers.base import (
    GridProvider,
    InvalidZoneIdError,
    ProviderContractError,
    ProviderError,
    ProviderQueryError,
)
from dggs_query.providers.factory import (
    RHEALPIX,
    get_provider,
    list_providers,
    register_provider,
    unregister_provider,
)

__all__ = [
    "RHEALPIX",
    "GridProvider",
    "InvalidZoneIdError",
    "ProviderContractError",
    "ProviderError",
    "ProviderQueryError",
    "get_provider",
    "list_providers",
    "register_provider",
    "unregister_provider",
]
