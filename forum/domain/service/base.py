"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services are request-scoped and receive their repositories and
    settings from the DI container.
    """
