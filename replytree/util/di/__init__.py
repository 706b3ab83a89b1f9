"""Dependency injection module.

Providers are listed once in ``PROVIDERS``. A provider with subclasses is a
swappable component (persistence): production and mock implementations
subclass it and are picked by ``get_provider``.
"""

from typing import Type

from replytree.util.di.application import ProdApplicationProvider
from replytree.util.di.base import Component, ProviderBase
from replytree.util.di.core import ProdConfigProvider
from replytree.util.di.domain import ProdDomainProvider
from replytree.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider class for the container.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the mock implementation of a swappable component

    Returns:
        ``base`` itself if it has no subclasses, otherwise the subclass whose
        ``__is_mock__`` matches ``use_mock``

    Raises:
        ValueError: If the requested implementation isn't registered
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if getattr(impl, "__is_mock__", False) == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise ValueError(f"No {kind} implementation for {component}")


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
