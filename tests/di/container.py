"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from presence.config import Settings
from presence.util.di import PROVIDERS, Component, ProdConfigProvider, get_provider
from tests.di.core import StaticConfigProvider


def build_test_container(
    settings: Settings | None = None,
    unmock: set[Component] | None = None,
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are passed in rather than read from the environment, so tests
    never depend on a local config.toml.

    Args:
        settings: Settings to serve, defaults to an empty test configuration
        unmock: Components to use production implementations for.
                All others use mocks if available.

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # All upstreams mocked
        container = build_test_container(make_settings())

        # Real Steam client, e.g. against a local stub server
        container = build_test_container(settings, unmock={"steam"})
    """
    settings = settings or Settings(environment="test")
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        if base is ProdConfigProvider:
            provider_instances.append(StaticConfigProvider(settings))
            continue

        is_mockable = bool(base.__subclasses__())
        if not is_mockable:
            provider_class = get_provider(base, use_mock=False)
        else:
            component_name = getattr(base, "__mock_component__", None)
            use_mock = component_name not in unmock if component_name else False
            provider_class = get_provider(base, use_mock=use_mock)

        provider_instances.append(provider_class())

    return make_async_container(*provider_instances, FastapiProvider())


def _validate_unmock(unmock: set[Component]) -> None:
    """Validate unmock configuration.

    Args:
        unmock: Set of components to unmock

    Raises:
        ValueError: If unknown components are requested
    """
    all_components = {
        getattr(p, "__mock_component__")
        for p in PROVIDERS
        if p.__subclasses__() and getattr(p, "__mock_component__", None)
    }

    unknown = unmock - all_components
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
