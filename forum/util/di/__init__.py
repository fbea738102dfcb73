"""Dependency injection wiring.

Config, domain and application providers are concrete and always used as
they are. Persistence is a swappable component: ``PersistenceProvider``
names the component, and its production and in-memory implementations
subclass it, told apart by ``__is_mock__``.
"""

from typing import Type

from forum.util.di.application import ProdApplicationProvider
from forum.util.di.base import Component, ProviderBase
from forum.util.di.core import ProdConfigProvider
from forum.util.di.domain import ProdDomainProvider
from forum.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for an entry of PROVIDERS.

    Args:
        base: Entry of PROVIDERS
        use_mock: Pick the mock implementation of a swappable component

    Returns:
        ``base`` itself for concrete providers, else the matching subclass

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if implementation.__is_mock__ is use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} provider registered for {base.__mock_component__}")


def swappable_components() -> set[Component]:
    """Names of the components that have a mock implementation to swap in."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None
    }


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "swappable_components",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
