"""Token bucket rate limiter for REST lookups."""

import time
import threading
from typing import Optional


class RateLimiter:
    def __init__(self, requests_per_second: float, burst: Optional[float] = None):
        self.rate = requests_per_second
        self.capacity = burst if burst is not None else requests_per_second
        self.tokens = self.capacity
        self._last_refill = time.monotonic()
        self._lock = threading.Lock()

    def acquire(self) -> None:
        """Block until a token is available."""
        while True:
            with self._lock:
                now = time.monotonic()
                self.tokens = min(
                    self.capacity, self.tokens + (now - self._last_refill) * self.rate
                )
                self._last_refill = now
                if self.tokens >= 1.0:
                    self.tokens -= 1.0
                    return
                wait = (1.0 - self.tokens) / self.rate
            time.sleep(min(wait, 0.05))
