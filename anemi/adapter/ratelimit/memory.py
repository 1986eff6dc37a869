"""In-memory sliding window rate limiter.

Suitable for single-instance deployments; counts are per process.
"""

import math
import time
from collections.abc import Callable
from threading import Lock

import logfire

from anemi.domain.service.rate_limiter import RateLimitDecision, RateLimiter


class InMemoryRateLimiter(RateLimiter):
    """Sliding window rate limiter keyed by client."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize rate limiter.

        Args:
            clock: Monotonic time source in seconds
        """
        self.clock = clock
        self._requests: dict[str, list[float]] = {}
        self._lock = Lock()
        self._longest_window = 0
        self._last_sweep = clock()

    @property
    def tracked_keys(self) -> int:
        """Number of clients with requests still inside a window."""
        with self._lock:
            return len(self._requests)

    def _cleanup_old_requests(
        self, client_key: str, current_time: float, window_seconds: int
    ) -> list[float]:
        """Remove requests outside the current window, dropping idle keys."""
        cutoff = current_time - window_seconds
        requests = [t for t in self._requests.get(client_key, []) if t > cutoff]
        if requests:
            self._requests[client_key] = requests
        else:
            self._requests.pop(client_key, None)
        return requests

    def _sweep(self, current_time: float) -> None:
        """Drop every key whose newest request left the longest window seen."""
        if current_time - self._last_sweep < self._longest_window:
            return
        cutoff = current_time - self._longest_window
        idle = [key for key, times in self._requests.items() if times[-1] <= cutoff]
        for key in idle:
            del self._requests[key]
        self._last_sweep = current_time
        if idle:
            logfire.debug("Rate limiter swept idle clients", count=len(idle))

    def check(
        self, client_key: str, limit: int, window_seconds: int
    ) -> RateLimitDecision:
        current_time = self.clock()

        with self._lock:
            self._longest_window = max(self._longest_window, window_seconds)
            self._sweep(current_time)
            requests = self._cleanup_old_requests(
                client_key, current_time, window_seconds
            )

            if len(requests) >= limit:
                retry_after = math.ceil(requests[0] + window_seconds - current_time)
                logfire.warn(
                    "Rate limit exceeded",
                    client_key=client_key,
                    request_count=len(requests),
                    retry_after=retry_after,
                )
                return RateLimitDecision(
                    allowed=False, remaining=0, retry_after=max(1, retry_after)
                )

            requests.append(current_time)
            self._requests[client_key] = requests
            return RateLimitDecision(allowed=True, remaining=limit - len(requests))

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self._lock:
            self._requests.clear()
