from .cache import ResponseCache, make_cache_key
from .batching import Batch, build_batches
from .text import DeduplicationResult, deduplicate_texts
from .rate_limit import SlidingWindowRateLimiter

__all__ = [
    "ResponseCache",
    "make_cache_key",
    "Batch",
    "build_batches",
    "DeduplicationResult",
    "deduplicate_texts",
    "SlidingWindowRateLimiter",
]
