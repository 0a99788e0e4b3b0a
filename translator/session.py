from __future__ import annotations

from dataclasses import dataclass, field

from config import SETTINGS, RateLimitSettings
from utils.cache import ResponseCache
from utils.rate_limit import SlidingWindowRateLimiter


def _default_rate_limiter(settings: RateLimitSettings | None = None) -> SlidingWindowRateLimiter:
    settings = settings or SETTINGS.rate_limit
    return SlidingWindowRateLimiter(
        max_requests=settings.max_requests_per_minute,
        window=settings.window_seconds,
        poll_interval=settings.poll_interval,
    )


@dataclass(slots=True)
class PipelineSession:
    """State that outlives a single translation call: the response cache and the rate window."""

    cache: ResponseCache = field(default_factory=ResponseCache)
    rate_limiter: SlidingWindowRateLimiter = field(default_factory=_default_rate_limiter)
