from __future__ import annotations


class TranslationError(Exception):
    """Base class for failures talking to the translation endpoint."""


class RateLimitedError(TranslationError):
    """The endpoint answered 429 Too Many Requests."""

    def __init__(self, message: str = "Too many requests") -> None:
        super().__init__(message)
        self.status = 429


class TranslationHTTPError(TranslationError):
    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"HTTP {status} - {body[:200]}" if body else f"HTTP {status}")
        self.status = status


class TransportError(TranslationError):
    """Network-level failure; worth a short cooldown before retrying."""


class ResponseFormatError(TranslationError):
    pass


class SegmentMismatchError(TranslationError):
    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"Part count mismatch - expected {expected}, got {received}")
        self.expected = expected
        self.received = received


class TranslationCancelled(Exception):
    """The invocation was superseded or aborted. Not a failure, callers stay silent."""
