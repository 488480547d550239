"""Provider factory — selects the active grid provider by name.

The factory maintains a registry of known adapters. New adapters are
registered by adding an entry to ``_ADAPTER_REGISTRY`` or at runtime
through ``register_provider``.

Usage::

    from dggs_query.providers.factory import get_provider

    provider = get_provider("rhealpix")
    zone = provider.zone_by_id("N14")

The provider name is read from the ``DGGS_PROVIDER`` environment variable
via ``DGGSConfig.provider``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dggs_query.models.provider import ProviderConfig
from dggs_query.providers.base import GridProvider, ProviderError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Provider name constants
# ---------------------------------------------------------------------------

RHEALPIX = "rhealpix"

# ---------------------------------------------------------------------------
# Lazy-import adapter registry
# ---------------------------------------------------------------------------

# Each entry maps a provider name to a callable that returns the adapter
# *class*. The import is deferred so the grid library (rhealpixdggs and
# its numpy/scipy stack) only loads when that adapter is selected.

_ADAPTER_REGISTRY: dict[str, Callable[[], type[GridProvider]]] = {}


def _register_builtin_adapters() -> None:
    """Register the built-in grid adapters.

    Called once on first ``get_provider`` invocation.
    """

    def _rhealpix() -> type[GridProvider]:
        from dggs_query.providers.rhealpix import RHealPixGridProvider

        return RHealPixGridProvider

    _ADAPTER_REGISTRY[RHEALPIX] = _rhealpix


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _ADAPTER_REGISTRY:
        _register_builtin_adapters()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_provider(
    name: str,
    loader: Callable[[], type[GridProvider]],
) -> None:
    """Register a custom grid adapter.

    This allows other grid backends, or in-memory test grids, to be
    plugged in without modifying the factory.

    Args:
        name: Provider name (e.g. ``"my_grid"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Provider name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _ADAPTER_REGISTRY[name] = loader
    logger.debug("Registered grid provider: %s", name)


def unregister_provider(name: str) -> None:
    """Remove a registered adapter; unknown names are ignored."""
    _ensure_registry()
    _ADAPTER_REGISTRY.pop(name, None)


def get_provider(
    name: str,
    config: ProviderConfig | None = None,
) -> GridProvider:
    """Create and return a grid provider session.

    Args:
        name: Provider identifier (e.g. ``"rhealpix"``).
        config: Optional ``ProviderConfig``. If ``None``, a default config
                with just the provider name is used.

    Returns:
        A configured ``GridProvider`` instance.

    Raises:
        ProviderError: If the named provider is not registered or the
            config names a different provider.
    """
    _ensure_registry()

    loader = _ADAPTER_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_ADAPTER_REGISTRY))
        msg = f"Unknown grid provider: {name!r}. Available: {available}"
        raise ProviderError(provider=name, message=msg)

    adapter_cls = loader()

    if config is None:
        config = ProviderConfig(name=name)
    elif config.name != name:
        msg = f"ProviderConfig.name {config.name!r} does not match requested provider {name!r}"
        raise ProviderError(provider=name, message=msg)

    logger.info("Creating grid provider: %s | max_resolution=%d", name, config.max_resolution)
    return adapter_cls(config)


def list_providers() -> list[str]:
    """Return the names of all registered grid adapters."""
    _ensure_registry()
    return sorted(_ADAPTER_REGISTRY)
