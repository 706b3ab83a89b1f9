"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that have a mock implementation for tests
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for all replytree providers.

    Attributes:
        __mock_component__: Name of a swappable component, None if concrete
        __is_mock__: Set on the test implementation of a component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
