"""Fixed-window rate limiting keyed by client identity.

Counting and window expiry are delegated to a ``limits`` storage. The
storage is owned by whoever constructs the limiter (normally the app
factory), so separate apps and tests never share counts.
"""

from __future__ import annotations

import math
import time
from collections.abc import Mapping
from dataclasses import dataclass

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_time: float  # epoch seconds

    def retry_after(self, now: float | None = None) -> int:
        if now is None:
            now = time.time()
        return max(1, math.ceil(self.reset_time - now))


class InMemoryRateLimiter:
    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: int = 15 * 60,
        store: Storage | None = None,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.store: Storage = MemoryStorage() if store is None else store
        self.item = RateLimitItemPerSecond(max_requests, window_seconds)
        self.strategy = FixedWindowRateLimiter(self.store)

    def check(self, client_id: str) -> RateLimitDecision:
        """Count one request for ``client_id`` and decide whether it may proceed."""
        allowed = self.strategy.hit(self.item, client_id)
        stats = self.strategy.get_window_stats(self.item, client_id)
        return RateLimitDecision(allowed, stats.remaining, float(stats.reset_time))

    def reset(self, client_id: str) -> None:
        self.store.clear(self.item.key_for(client_id))

    def clear(self) -> None:
        self.store.reset()


def client_ip(headers: Mapping[str, str]) -> str:
    """Best-effort client address from common proxy headers."""
    forwarded_for = headers.get("x-forwarded-for")
    if forwarded_for:
        # client, proxy1, proxy2
        return forwarded_for.split(",")[0].strip()

    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip

    cf_ip = headers.get("cf-connecting-ip")
    if cf_ip:
        return cf_ip

    return "unknown"
