"""
Process-local fixed-window rate limiter.

Throttles buyer-facing endpoints per client IP. State lives in memory, so
each worker process counts on its own.
"""
from dataclasses import dataclass
from typing import Callable, Collection, Dict, Mapping, Optional
import logging
import time


logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: float
    count: int


class FixedWindowRateLimiter:
    """
    Allow at most ``limit`` hits per key within each ``window_seconds`` window.

    Usage:
        limiter = FixedWindowRateLimiter(limit=30, window_seconds=60)
        if not limiter.hit(client_ip):
            ...  # reject with 429
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_keys: int = 10000,
        trusted_proxies: Collection[str] = (),
    ):
        if limit < 1:
            raise ValueError(f"Rate limit must be at least 1, got {limit}")
        if window_seconds <= 0:
            raise ValueError(f"Window must be positive, got {window_seconds}")

        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._max_keys = max_keys
        self.trusted_proxies = frozenset(trusted_proxies)
        self._windows: Dict[str, _Window] = {}

    def hit(self, key: str) -> bool:
        """
        Count one request for ``key``.

        Returns:
            True if allowed, False if the key is over its limit
        """
        now = self._clock()
        window = self._windows.get(key)

        if window is None or now - window.started_at >= self.window_seconds:
            if len(self._windows) >= self._max_keys:
                self._evict_expired(now)
            self._windows[key] = _Window(started_at=now, count=1)
            return True

        if window.count >= self.limit:
            logger.warning(f"Rate limit exceeded for {key} ({window.count}/{self.limit})")
            return False

        window.count += 1
        return True

    def retry_after(self, key: str) -> int:
        """Seconds until ``key``'s current window resets."""
        window = self._windows.get(key)
        if window is None:
            return 0
        remaining = self.window_seconds - (self._clock() - window.started_at)
        return max(0, int(remaining + 0.999))

    def reset(self) -> None:
        self._windows.clear()

    def _evict_expired(self, now: float) -> None:
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


def client_ip(
    headers: Mapping[str, str],
    peer: Optional[str],
    trusted_proxies: Collection[str] = (),
) -> str:
    """
    Client address used as the rate limit key.

    Forwarding headers count only when the peer is a trusted proxy: first
    X-Forwarded-For hop, then X-Real-IP, then the peer address itself.
    """
    if peer is None or peer not in trusted_proxies:
        return peer or "unknown"

    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return peer
