import math
import threading
import time
from collections import deque


class SlidingWindowRateLimiter:
    """
    Process-local sliding-window limiter keyed by client address.

    - At most ``limit`` admissions per ``window_seconds`` for one key.
    - Counters live in memory and are lost on restart.
    """

    # Above this many tracked keys, every hit also drops expired keys
    SWEEP_THRESHOLD = 1024

    def __init__(self, limit=5, window_seconds=15 * 60, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._hits = {}

    def __len__(self):
        with self._lock:
            return len(self._hits)

    def _sweep_locked(self, now):
        before = len(self._hits)
        for key in list(self._hits):
            self._prune(key, now)
        return before - len(self._hits)

    def _prune(self, key, now):
        hits = self._hits.get(key)
        if hits is None:
            return None
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if not hits:
            del self._hits[key]
            return None
        return hits

    def hit(self, key) -> bool:
        """
        Record an attempt for ``key``. Returns False, without recording,
        when the key is already at its limit.
        """
        now = self._clock()
        with self._lock:
            if len(self._hits) >= self.SWEEP_THRESHOLD:
                self._sweep_locked(now)
            hits = self._prune(key, now)
            if hits is None:
                hits = self._hits[key] = deque()
            if len(hits) >= self.limit:
                return False
            hits.append(now)
            return True

    def retry_after(self, key) -> int:
        """Seconds until ``key`` gets a free slot again (0 if it has one)."""
        now = self._clock()
        with self._lock:
            hits = self._prune(key, now)
            if hits is None or len(hits) < self.limit:
                return 0
            return max(1, math.ceil(hits[0] + self.window_seconds - now))

    def sweep(self) -> int:
        """Drop keys whose whole window has expired. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            return self._sweep_locked(now)

    def reset(self):
        with self._lock:
            self._hits.clear()
