"""Mock providers for testing."""

from .email import MockEmailProvider
from .persistence import MockPersistenceProvider, SharedPersistenceProvider
from .container import build_api_test_container, build_test_container

__all__ = [
    "MockEmailProvider",
    "MockPersistenceProvider",
    "SharedPersistenceProvider",
    "build_api_test_container",
    "build_test_container",
]
