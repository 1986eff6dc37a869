"""Mock providers for testing."""

from .email import MockEmailProvider
from .persistence import MockPersistenceProvider
from .ratelimit import MockRateLimitProvider
from .container import build_test_container

__all__ = [
    "MockEmailProvider",
    "MockPersistenceProvider",
    "MockRateLimitProvider",
    "build_test_container",
]
