"""Rate limiting adapter."""

from .memory import InMemoryRateLimiter

__all__ = ["InMemoryRateLimiter"]
