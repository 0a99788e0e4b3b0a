import asyncio

import pytest

from config import PipelineSettings, RetryPolicy
from translator.base import BaseTranslator
from translator.orchestrator import TranslationOrchestrator
from translator.session import PipelineSession
from utils.cache import ResponseCache
from utils.rate_limit import SlidingWindowRateLimiter

DELIMITER = "\n___\n"


class FakeTranslator(BaseTranslator):
    """In-memory endpoint: prefixes every delimited part with ``<target>:``.

    ``fail(payload, target_lang)`` may return an exception to raise instead.
    """

    name = "fake"

    def __init__(self, *, fail=None, delimiter: str = DELIMITER) -> None:
        super().__init__()
        self.fail = fail
        self.delimiter = delimiter
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    def respond(self, text: str, target_lang: str) -> str:
        return self.delimiter.join(f"{target_lang}:{part}" for part in text.split(self.delimiter))

    async def translate_text(self, text, source_lang, target_lang):
        self.calls.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if self.fail is not None:
                error = self.fail(text, target_lang)
                if error is not None:
                    raise error
            return self.respond(text, target_lang)
        finally:
            self.in_flight -= 1

    @property
    def combined_calls(self):
        return [call for call in self.calls if self.delimiter in call]

    @property
    def single_calls(self):
        return [call for call in self.calls if self.delimiter not in call]


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.now += delay
        await asyncio.sleep(0)


@pytest.fixture
def fast_settings():
    """Pipeline settings with every delay set to zero."""
    return PipelineSettings(
        request_delay=0,
        rate_limit_delay=0,
        network_cooldown=0,
        fallback_pacing_delay=0,
    )


@pytest.fixture
def fast_retry():
    return RetryPolicy(max_attempts=3, initial_delay=0, backoff_factor=1.0, backoff_jitter=0)


@pytest.fixture
def session():
    """Session whose rate limiter never gets in the way."""
    return PipelineSession(
        cache=ResponseCache(),
        rate_limiter=SlidingWindowRateLimiter(max_requests=100_000, poll_interval=0),
    )


@pytest.fixture
def make_orchestrator(session, fast_settings, fast_retry):
    def factory(translator, **overrides):
        return TranslationOrchestrator(
            translator,
            overrides.pop("session", session),
            settings=overrides.pop("settings", fast_settings),
            retry_policy=overrides.pop("retry_policy", fast_retry),
            source_lang=overrides.pop("source_lang", "id"),
        )

    return factory
