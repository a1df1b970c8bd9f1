"""Errors raised while wiring the application."""


class UtilError(Exception):
    """Base error for configuration and wiring problems."""


class ConfigurationError(UtilError):
    """Settings are missing or unsafe for the current environment."""


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""
