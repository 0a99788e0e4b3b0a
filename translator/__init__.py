"""
PageTranslate translation pipeline

Deduplicates and caches texts, batches them into combined requests against
the Google web endpoint, and falls back to per-text calls when a combined
response can't be split back apart.
"""
from .base import BaseTranslator
from .cancellation import CancellationToken
from .dispatcher import BatchDispatcher
from .errors import (
    RateLimitedError,
    ResponseFormatError,
    SegmentMismatchError,
    TransportError,
    TranslationCancelled,
    TranslationError,
    TranslationHTTPError,
)
from .fallback import FallbackRetrier
from .google import GoogleTranslator
from .orchestrator import TranslationOrchestrator
from .page import PageTranslator
from .session import PipelineSession

__all__ = [
    "BaseTranslator",
    "CancellationToken",
    "BatchDispatcher",
    "RateLimitedError",
    "ResponseFormatError",
    "SegmentMismatchError",
    "TransportError",
    "TranslationCancelled",
    "TranslationError",
    "TranslationHTTPError",
    "FallbackRetrier",
    "GoogleTranslator",
    "TranslationOrchestrator",
    "PageTranslator",
    "PipelineSession",
]
