"""Data models describing rate limiting configuration and state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitConfig:
    """Window length and request cap for one limiter."""

    window_ms: int = 60_000
    max_requests: int = 5

    def __post_init__(self) -> None:
        if self.window_ms <= 0:
            raise ValueError("window_ms must be positive")
        if self.max_requests < 1:
            raise ValueError("max_requests must be at least 1")


@dataclass(frozen=True)
class RateLimitStatus:
    """Outcome of a single rate limit check."""

    allowed: bool
    remaining: int
    limit: int
    retry_after_ms: int = 0

    @property
    def retry_after_seconds(self) -> int:
        # Round up so clients never retry early
        return -(-self.retry_after_ms // 1000)
