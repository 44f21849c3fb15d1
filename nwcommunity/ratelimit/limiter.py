"""Process-local sliding-window rate limiter.

State lives behind :class:`RateWindowStore` so tests can use isolated state
and a distributed deployment can swap in a shared backing store. The default
in-memory store is best-effort: it is per process and is lost on restart.
"""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Callable, DefaultDict, Mapping, Optional

import structlog

from nwcommunity.ratelimit.models import RateLimitConfig, RateLimitStatus

logger = structlog.get_logger()

UNKNOWN_CLIENT = "unknown"


def _now_ms() -> float:
    return time.time() * 1000


class RateWindowStore(ABC):
    """Interface for per-key timestamp windows."""

    @abstractmethod
    def hit(self, key: str, now: float, config: RateLimitConfig) -> RateLimitStatus:
        """Prune, count and (when under the cap) record one request atomically."""

    @abstractmethod
    def reset(self, key: Optional[str] = None) -> None:
        """Forget one key's window, or every window when *key* is None."""


class InMemoryRateWindowStore(RateWindowStore):
    """Per-key timestamp buckets guarded by a single lock."""

    def __init__(self) -> None:
        self._buckets: DefaultDict[str, list[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def hit(self, key: str, now: float, config: RateLimitConfig) -> RateLimitStatus:
        cutoff = now - config.window_ms
        with self._lock:
            entries = self._buckets[key]
            # Drop timestamps that are outside of the active window
            entries[:] = [ts for ts in entries if ts > cutoff]

            if len(entries) >= config.max_requests:
                retry_after = int(max(entries[0] + config.window_ms - now, 0))
                return RateLimitStatus(
                    allowed=False,
                    remaining=0,
                    limit=config.max_requests,
                    retry_after_ms=retry_after,
                )

            entries.append(now)
            return RateLimitStatus(
                allowed=True,
                remaining=config.max_requests - len(entries),
                limit=config.max_requests,
            )

    def reset(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._buckets.clear()
            else:
                self._buckets.pop(key, None)

    def __len__(self) -> int:
        return len(self._buckets)


class RateLimiter:
    """Sliding-window limiter: at most ``max_requests`` per ``window_ms`` per key."""

    def __init__(
        self,
        config: Optional[RateLimitConfig] = None,
        store: Optional[RateWindowStore] = None,
        clock: Callable[[], float] = _now_ms,
        scope: str = "default",
    ) -> None:
        self.config = config or RateLimitConfig()
        self._store = store or InMemoryRateWindowStore()
        self._clock = clock
        self.scope = scope

    def check(self, key: str) -> RateLimitStatus:
        status = self._store.hit(key, self._clock(), self.config)
        if not status.allowed:
            logger.warning(
                "ratelimit.denied",
                scope=self.scope,
                key=key,
                retry_after_ms=status.retry_after_ms,
            )
        return status

    def reset(self, key: Optional[str] = None) -> None:
        self._store.reset(key)

    @staticmethod
    def identify(headers: Mapping[str, str]) -> str:
        return identify_client(headers)


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def identify_client(headers: Mapping[str, str]) -> str:
    """Derive the client key from proxy headers.

    First ``x-forwarded-for`` hop, then ``x-real-ip``, else ``"unknown"``.
    Clients without either header share the ``"unknown"`` bucket.
    """
    forwarded = _get_header(headers, "x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = _get_header(headers, "x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return UNKNOWN_CLIENT
