"""Tests for the grid provider factory.

Covers: get_provider, list_providers, register_provider,
unregister_provider, error handling and lazy import behaviour.
"""

from __future__ import annotations

import sys

import pytest

from dggs_query.models.provider import ProviderConfig
from dggs_query.providers.base import GridProvider, ProviderError
from dggs_query.providers.factory import (
    _ADAPTER_REGISTRY,
    RHEALPIX,
    _ensure_registry,
    get_provider,
    list_providers,
    register_provider,
    unregister_provider,
)

CUSTOM = "test_custom"


@pytest.fixture()
def custom_registered(fake_provider_cls):
    """Register the planar test grid under CUSTOM for one test."""
    _ensure_registry()
    register_provider(CUSTOM, lambda: fake_provider_cls)
    yield fake_provider_cls
    unregister_provider(CUSTOM)


class TestListProviders:
    """list_providers returns known adapters."""

    def test_includes_builtin_provider(self) -> None:
        assert RHEALPIX in list_providers()

    def test_returns_sorted(self) -> None:
        providers = list_providers()
        assert providers == sorted(providers)

    def test_listing_does_not_import_adapter(self) -> None:
        """Registry entries are thunks; the grid library loads on demand."""
        module_name = "dggs_query.providers.rhealpix"
        saved = sys.modules.pop(module_name, None)
        try:
            list_providers()
            assert module_name not in sys.modules
        finally:
            if saved is not None:
                sys.modules[module_name] = saved


class TestGetProvider:
    """get_provider creates the requested adapter."""

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ProviderError) as exc_info:
            get_provider("nonexistent_provider")
        assert "nonexistent_provider" in str(exc_info.value)
        assert "Available:" in str(exc_info.value)

    def test_default_config_when_none(self, custom_registered) -> None:
        provider = get_provider(CUSTOM)
        assert isinstance(provider, GridProvider)
        assert provider.config.name == CUSTOM
        assert provider.max_resolution() == 13

    def test_custom_config_passed(self, custom_registered) -> None:
        cfg = ProviderConfig(name=CUSTOM, max_resolution=2)
        provider = get_provider(CUSTOM, config=cfg)
        assert provider.resolutions_supported() == [0, 1, 2]

    def test_config_name_mismatch_raises(self, custom_registered) -> None:
        cfg = ProviderConfig(name=RHEALPIX)
        with pytest.raises(ProviderError, match="does not match"):
            get_provider(CUSTOM, config=cfg)

    def test_each_call_is_a_new_session(self, custom_registered) -> None:
        assert get_provider(CUSTOM) is not get_provider(CUSTOM)


class TestRegisterProvider:
    """register_provider / unregister_provider manage custom adapters."""

    def test_register_and_get(self, custom_registered) -> None:
        assert CUSTOM in list_providers()
        assert isinstance(get_provider(CUSTOM), custom_registered)

    def test_register_empty_name_raises(self) -> None:
        with pytest.raises(ValueError):
            register_provider("", lambda: GridProvider)  # type: ignore[arg-type]

    def test_unregister_removes(self, fake_provider_cls) -> None:
        register_provider("short_lived", lambda: fake_provider_cls)
        unregister_provider("short_lived")
        assert "short_lived" not in _ADAPTER_REGISTRY

    def test_unregister_unknown_is_ignored(self) -> None:
        unregister_provider("never_registered")
        assert RHEALPIX in list_providers()
