"""Sliding-window rate limiting for abuse-prone public endpoints."""

from nwcommunity.ratelimit.limiter import (
    InMemoryRateWindowStore,
    RateLimiter,
    RateWindowStore,
    identify_client,
)
from nwcommunity.ratelimit.models import RateLimitConfig, RateLimitStatus

__all__ = [
    "InMemoryRateWindowStore",
    "RateLimitConfig",
    "RateLimitStatus",
    "RateLimiter",
    "RateWindowStore",
    "identify_client",
]
