from __future__ import annotations

import asyncio
import random
from typing import List, Sequence

from loguru import logger

from config import SETTINGS, PipelineSettings, RetryPolicy
from utils.batching import Batch
from utils.rate_limit import SlidingWindowRateLimiter

from .base import BaseTranslator
from .cancellation import CancellationToken
from .errors import RateLimitedError, SegmentMismatchError, TranslationError, TransportError
from .fallback import FallbackRetrier


class BatchDispatcher:
    """Sends batches in waves of ``max_concurrent`` combined requests.

    A batch whose combined response can't be split back into one part per
    text is handed to the ``FallbackRetrier``.
    """

    def __init__(
        self,
        translator: BaseTranslator,
        rate_limiter: SlidingWindowRateLimiter,
        settings: PipelineSettings | None = None,
        retry_policy: RetryPolicy | None = None,
        fallback: FallbackRetrier | None = None,
    ) -> None:
        self.translator = translator
        self.rate_limiter = rate_limiter
        self.settings = settings or SETTINGS.pipeline
        self.retry_policy = retry_policy or SETTINGS.retry
        self.fallback = fallback or FallbackRetrier(translator, rate_limiter, self.settings)

    async def dispatch(
        self,
        batches: Sequence[Batch],
        source_lang: str,
        target_lang: str,
        token: CancellationToken,
    ) -> List[List[str]]:
        wave_size = max(1, self.settings.max_concurrent)
        results: List[List[str]] = []
        for start in range(0, len(batches), wave_size):
            wave = batches[start:start + wave_size]
            token.raise_if_cancelled()
            tasks = [
                asyncio.ensure_future(self._process_batch(batch, source_lang, target_lang, token))
                for batch in wave
            ]
            try:
                wave_results = await asyncio.gather(*tasks)
            except BaseException:
                # gather doesn't stop the rest of the wave when one batch raises
                for task in tasks:
                    if not task.done():
                        task.cancel()
                raise
            results.extend(wave_results)
            if start + wave_size < len(batches):
                await token.sleep(self.settings.request_delay)
        return results

    async def _process_batch(
        self,
        batch: Batch,
        source_lang: str,
        target_lang: str,
        token: CancellationToken,
    ) -> List[str]:
        try:
            return await self._translate_combined(batch, source_lang, target_lang, token)
        except asyncio.CancelledError:
            raise
        except SegmentMismatchError as exc:
            logger.debug("Combined batch of {} unusable: {}", len(batch), exc)
        except TransportError as exc:
            logger.warning("Batch failed: {}", exc)
            await token.sleep(self.settings.network_cooldown)
        except TranslationError as exc:
            logger.warning("Batch failed: {}", exc)
        return await self.fallback.translate_each(batch.texts, source_lang, target_lang, token)

    async def _translate_combined(
        self,
        batch: Batch,
        source_lang: str,
        target_lang: str,
        token: CancellationToken,
    ) -> List[str]:
        delimiter = self.settings.delimiter
        combined = delimiter.join(batch.texts)
        attempt = 0
        delay = self.retry_policy.initial_delay
        while True:
            attempt += 1
            await self.rate_limiter.wait_for_admission(token)
            self.rate_limiter.record()
            try:
                translated = await self.translator.translate_text(combined, source_lang, target_lang)
                break
            except RateLimitedError:
                if attempt >= self.retry_policy.max_attempts:
                    logger.error("Still rate limited after {} attempts, giving up on combined batch", attempt)
                    raise
                jitter = random.uniform(0, self.retry_policy.backoff_jitter)
                logger.warning("Rate limited by endpoint, waiting {:.1f}s (attempt {})", delay + jitter, attempt)
                await token.sleep(delay + jitter)
                delay *= self.retry_policy.backoff_factor

        parts = translated.split(delimiter)
        if len(parts) != len(batch.texts):
            raise SegmentMismatchError(len(batch.texts), len(parts))
        return parts
