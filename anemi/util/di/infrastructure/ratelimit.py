"""Rate limiting infrastructure providers."""

from dishka import Scope, provide

from anemi.adapter.ratelimit import InMemoryRateLimiter
from anemi.domain.service import RateLimiter
from anemi.util.di.base import ProviderBase


class RateLimitProvider(ProviderBase):
    """Rate limit component base."""

    __mock_component__ = "ratelimit"


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter: per-process sliding window."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_rate_limiter(self) -> RateLimiter:
        """Provide the process-wide rate limiter."""
        return InMemoryRateLimiter()
