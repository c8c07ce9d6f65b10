"""Per-client sliding-window rate limiting for the movie endpoints."""

import math
import time
from collections import deque
from collections.abc import Callable
from threading import Lock

from fastapi import Request

from nextflix_api.services.base import RateLimitError


class SlidingWindowRateLimiter:
    """Allow at most ``limit`` requests per client within ``window`` seconds.

    A limit of zero disables the limiter. Clients with no request inside the
    window are forgotten, at most once per window.
    """

    def __init__(
        self,
        limit: int = 20,
        window: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = max(0, limit)
        self.window = max(0.0, window)
        self._clock = clock
        self._lock = Lock()
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        """Number of clients currently tracked."""
        with self._lock:
            return len(self._hits)

    def hit(self, client: str) -> None:
        """Record a request from ``client``.

        Raises:
            RateLimitError: If the client has used up its budget for the
                current window.
        """
        if self.limit == 0 or self.window == 0:
            return

        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)

            hits = self._hits.get(client) or deque()
            while hits and hits[0] <= now - self.window:
                hits.popleft()

            if len(hits) >= self.limit:
                retry_after = max(1, math.ceil(hits[0] + self.window - now))
                raise RateLimitError(
                    f"Too many requests, retry in {retry_after} seconds",
                    retry_after=retry_after,
                )
            hits.append(now)
            self._hits[client] = hits

    def _sweep(self, now: float) -> None:
        cutoff = now - self.window
        idle = [client for client, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for client in idle:
            del self._hits[client]
        self._last_sweep = now

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()


def client_identifier(request: Request) -> str:
    """Identify the calling client by its address."""
    if request.client is None:
        return "anonymous"
    return request.client.host


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency applying the application's rate limiter."""
    limiter: SlidingWindowRateLimiter = request.app.state.rate_limiter
    limiter.hit(client_identifier(request))
