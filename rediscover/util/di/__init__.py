"""Dependency injection module."""

from typing import Type

from rediscover.util.di.application import ProdApplicationProvider
from rediscover.util.di.base import Component, ProviderBase
from rediscover.util.di.core import ProdConfigProvider
from rediscover.util.di.domain import ProdDomainProvider
from rediscover.util.di.infrastructure import (
    GoogleProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdGoogleProvider,
    ProdPersistenceProvider,
)

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    GoogleProvider,
    PersistenceProvider,
    # OAuth aggregator (combines all OAuth clients)
    OAuthAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    A provider with no subclasses is concrete and used as-is. A provider
    with subclasses is a mockable component; the subclass whose
    `__is_mock__` flag matches `use_mock` is selected.

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    # Infrastructure implementations
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]
