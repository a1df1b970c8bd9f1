"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

Component = Literal["email", "persistence"]


class ProviderBase(Provider):
    """Base for DI providers.

    Attributes:
        __mock_component__: Swappable component this provider belongs to
            (None for providers that are never mocked)
        __is_mock__: Whether this is the test implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
