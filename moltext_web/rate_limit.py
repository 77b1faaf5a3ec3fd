"""
In-process fixed-window rate limiter keyed by client identity.
"""

import time
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Tuple


@dataclass
class RateLimitResult:
    success: bool
    remaining: int
    reset: float  # seconds until the current window ends


class RateLimiter:
    """
    Thread-safe fixed-window counter.

    Each key may make ``limit`` calls per ``period`` seconds; the window starts
    at the key's first call and stale windows are pruned as new calls arrive.
    """

    def __init__(self, limit: int = 100, period: float = 60.0,
                 clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.period = period
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        with self._lock:
            now = self._clock()
            self._prune(now)
            start, count = self._windows.get(key, (now, 0))
            reset = max(self.period - (now - start), 0.0)
            if count >= self.limit:
                return RateLimitResult(success=False, remaining=0, reset=reset)
            count += 1
            self._windows[key] = (start, count)
            return RateLimitResult(success=True, remaining=self.limit - count, reset=reset)

    def reset(self):
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float):
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.period]
        for k in expired:
            del self._windows[k]
