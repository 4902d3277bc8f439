import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float  # seconds until the key's window closes


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    """
    Counts hits per key in fixed windows of ``window_seconds``.

    A key's window opens on its first hit and closes ``window_seconds`` later;
    at most ``limit`` hits are allowed inside it. Keys whose window has closed
    are swept at most once per ``window_seconds``, not on every hit.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._next_prune_at = clock() + window_seconds
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        with self._lock:
            now = self._clock()
            if now >= self._next_prune_at:
                self._prune(now)
                self._next_prune_at = now + self.window_seconds

            window = self._windows.get(key)
            if window is None or self._expired(window, now):
                window = _Window(started_at=now)
                self._windows[key] = window

            reset_after = max(0.0, window.started_at + self.window_seconds - now)
            if window.count >= self.limit:
                return RateLimitResult(False, self.limit, 0, reset_after)

            window.count += 1
            return RateLimitResult(
                True, self.limit, self.limit - window.count, reset_after
            )

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)

    def _expired(self, window: _Window, now: float) -> bool:
        return now - window.started_at >= self.window_seconds

    def _prune(self, now: float) -> None:
        expired = [
            key for key, window in self._windows.items() if self._expired(window, now)
        ]
        for key in expired:
            del self._windows[key]


def retry_after_seconds(result: RateLimitResult) -> int:
    return max(1, math.ceil(result.reset_after))
