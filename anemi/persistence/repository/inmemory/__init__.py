"""In-memory repository implementations for testing."""

from .cafe import InMemoryCafeRepository
from .invite import InMemoryInviteRepository

__all__ = [
    "InMemoryCafeRepository",
    "InMemoryInviteRepository",
]
