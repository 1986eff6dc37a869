"""Rate limiter port."""

from abc import ABC, abstractmethod

from anemi.domain.value.common import ValueObject


class RateLimitDecision(ValueObject):
    """Outcome of a rate limit check."""

    allowed: bool
    remaining: int
    # Seconds until the client may retry; 0 when allowed
    retry_after: int = 0


class RateLimiter(ABC):
    """Counts requests per client key over a sliding window."""

    @abstractmethod
    def check(
        self, client_key: str, limit: int, window_seconds: int
    ) -> RateLimitDecision:
        """Record a request for ``client_key`` and decide whether it may proceed.

        Args:
            client_key: Identifies the client (IP address or caller identity)
            limit: Maximum number of requests within the window
            window_seconds: Length of the sliding window

        Returns:
            The decision; denied requests are not counted
        """
        pass
